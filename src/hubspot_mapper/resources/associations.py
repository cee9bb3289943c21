"""Associations API and the HubSpot defined association types."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from hubspot_mapper.mapping.convert import convert
from hubspot_mapper.paging.page import Page, PageResponse
from hubspot_mapper.resources.base import page_parameters
from hubspot_mapper.transport.rest import BaseRestClient

HUBSPOT_DEFINED = "HUBSPOT_DEFINED"


class AssociationType(IntEnum):
    """Definition ids of the HUBSPOT_DEFINED association category."""

    CONTACT_TO_COMPANY = 1
    COMPANY_TO_CONTACT = 2
    DEAL_TO_CONTACT = 3
    CONTACT_TO_DEAL = 4
    DEAL_TO_COMPANY = 5
    COMPANY_TO_DEAL = 6
    COMPANY_TO_ENGAGEMENT = 7
    ENGAGEMENT_TO_COMPANY = 8
    CONTACT_TO_ENGAGEMENT = 9
    ENGAGEMENT_TO_CONTACT = 10
    DEAL_TO_ENGAGEMENT = 11
    ENGAGEMENT_TO_DEAL = 12
    PARENT_COMPANY_TO_CHILD_COMPANY = 13
    CHILD_COMPANY_TO_PARENT_COMPANY = 14
    CONTACT_TO_TICKET = 15
    TICKET_TO_CONTACT = 16
    TICKET_TO_ENGAGEMENT = 17
    ENGAGEMENT_TO_TICKET = 18
    DEAL_TO_LINE_ITEM = 19
    LINE_ITEM_TO_DEAL = 20
    COMPANY_TO_TICKET = 25
    TICKET_TO_COMPANY = 26
    DEAL_TO_TICKET = 27
    TICKET_TO_DEAL = 28
    ADVISOR_TO_COMPANY = 33
    COMPANY_TO_ADVISOR = 34
    BOARD_MEMBER_TO_COMPANY = 35
    COMPANY_TO_BOARD_MEMBER = 36
    CONTRACTOR_TO_COMPANY = 37
    COMPANY_TO_CONTRACTOR = 38
    MANAGER_TO_COMPANY = 39
    COMPANY_TO_MANAGER = 40
    BUSINESS_OWNER_TO_COMPANY = 41
    COMPANY_TO_BUSINESS_OWNER = 42
    PARTNER_TO_COMPANY = 43
    COMPANY_TO_PARTNER = 44
    RESELLER_TO_COMPANY = 45
    COMPANY_TO_RESELLER = 46


@dataclass(frozen=True)
class Association:
    from_id: int
    to_id: int
    type: AssociationType

    def to_request(self) -> Dict[str, Any]:
        return {
            "fromObjectId": self.from_id,
            "toObjectId": self.to_id,
            "category": HUBSPOT_DEFINED,
            "definitionId": int(self.type),
        }


class Associations:
    """Create, list and remove links between CRM objects."""

    def __init__(self, rest: BaseRestClient):
        self.rest = rest

    def create(self, from_id: int, to_id: int, association_type: AssociationType) -> None:
        request = Association(from_id, to_id, association_type).to_request()
        self.rest.put("crm-associations/v1/associations", request)

    def create_bulk(self, associations: Iterable[Association]) -> None:
        request = [association.to_request() for association in associations]
        self.rest.put("crm-associations/v1/associations/create-batch", request)

    def list_page(self, object_id: int, association_type: AssociationType, page: Optional[Page] = None) -> PageResponse:
        """List ids of objects associated with ``object_id``; data holds plain ints."""
        response = self.rest.get(
            f"crm-associations/v1/associations/{object_id}/{HUBSPOT_DEFINED}/{int(association_type)}",
            *page_parameters(page, "limit"),
        )

        pr = PageResponse()
        if not isinstance(response, Mapping):
            return pr
        pr.has_more = convert(response.get("hasMore"), bool)
        if pr.has_more:
            pr.offset = convert(response.get("offset"), int)
        results = response.get("results")
        if isinstance(results, list):
            pr.data = convert(results, List[int])
        return pr

    def delete(self, from_id: int, to_id: int, association_type: AssociationType) -> None:
        request = Association(from_id, to_id, association_type).to_request()
        self.rest.put("crm-associations/v1/associations/delete", request)

    def delete_bulk(self, associations: Iterable[Association]) -> None:
        request = [association.to_request() for association in associations]
        self.rest.put("crm-associations/v1/associations/delete-batch", request)
