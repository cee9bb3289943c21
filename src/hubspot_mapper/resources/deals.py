"""Deals API."""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel

from hubspot_mapper.mapping.model import AssociationKind
from hubspot_mapper.paging.page import Page, PageResponse
from hubspot_mapper.resources.base import ResourceAPI, page_parameters, property_parameters
from hubspot_mapper.transport.rest import Parameter, new_parameter
from hubspot_mapper.utils.time import to_unix_ms


class Deals(ResourceAPI):
    """Access to deals (v1 deals API, v3 search)."""

    id_key = "dealId"
    deleted_key = "isDeleted"
    search_url = "crm/v3/objects/deals/search"

    def _associations(self, deal: Any) -> Dict[str, List[int]]:
        linked: Dict[str, List[int]] = {}
        for kind in (AssociationKind.COMPANIES, AssociationKind.CONTACTS):
            if self.model.association_property(kind) is not None:
                linked[kind.wire_key] = self.model.get_associations(deal, kind) or []
        return linked

    def create(self, deal: Any) -> BaseModel:
        """Create a deal, linking the companies and contacts listed on the entity."""
        request = self._properties_request(deal)
        associations = self._associations(deal)
        if associations:
            request["associations"] = associations
        response = self.rest.post("deals/v1/deal", request)
        return self._to_entity(response)

    def update(self, deal_id: int, deal: Any, **kwargs: Any) -> BaseModel:
        request = self._properties_request(deal, **kwargs)
        response = self.rest.put(f"deals/v1/deal/{deal_id}", request)
        return self._to_entity(response)

    def update_bulk(self, deals: Iterable[Any], **kwargs: Any) -> None:
        """Update several deals in one call; ids are taken from the entities."""
        self.rest.post("deals/v1/batch-async/update", self._batch_request(deals, **kwargs))

    def _list_parameters(
        self,
        page: Optional[Page],
        count_key: str,
        include_associations: bool,
        props: Iterable[str] = (),
        since: Optional[datetime] = None,
    ) -> List[Parameter]:
        parameters = page_parameters(page, count_key)
        if since is not None:
            parameters.append(new_parameter("since", to_unix_ms(since)))
        if include_associations:
            parameters.append(new_parameter("includeAssociations", "true"))
        return parameters + property_parameters("properties", props)

    def list_page(self, page: Optional[Page] = None, include_associations: bool = False, *props: str) -> PageResponse:
        parameters = self._list_parameters(page, "limit", include_associations, props)
        response = self.rest.get("deals/v1/deal/paged", *parameters)
        return self._convert_list_response(response, "deals")

    def recently_modified(
        self,
        page: Optional[Page] = None,
        since: Optional[datetime] = None,
        include_associations: bool = False,
    ) -> PageResponse:
        parameters = self._list_parameters(page, "count", include_associations, since=since)
        response = self.rest.get("deals/v1/deal/recent/modified", *parameters)
        return self._convert_list_response(response, "results")

    def recently_created(
        self,
        page: Optional[Page] = None,
        since: Optional[datetime] = None,
        include_associations: bool = False,
    ) -> PageResponse:
        parameters = self._list_parameters(page, "count", include_associations, since=since)
        response = self.rest.get("deals/v1/deal/recent/created", *parameters)
        return self._convert_list_response(response, "results")

    def delete(self, deal_id: int) -> None:
        self.rest.delete(f"deals/v1/deal/{deal_id}")

    def get(self, deal_id: int) -> BaseModel:
        response = self.rest.get(f"deals/v1/deal/{deal_id}")
        return self._to_entity(response)
