"""Shared plumbing for the resource APIs."""

from typing import Any, Iterable, List, Mapping, Optional

from pydantic import BaseModel

from hubspot_mapper.mapping.codec import create_properties_request, to_entity
from hubspot_mapper.mapping.convert import convert
from hubspot_mapper.mapping.model import Model
from hubspot_mapper.paging.page import Page, PageResponse
from hubspot_mapper.query.query import Query
from hubspot_mapper.transport.rest import BaseRestClient, Parameter, new_parameter
from hubspot_mapper.utils.logging import get_logger

logger = get_logger(__name__)


class ResourceAPI:
    """
    Base class for object APIs (contacts, companies, deals, tickets).

    Subclasses set the response keys holding the object id and deleted flag,
    the key naming properties in request bodies and the v3 search URL.
    """

    id_key = "objectId"
    deleted_key: Optional[str] = "isDeleted"
    name_key = "name"
    search_url: str

    def __init__(self, rest: BaseRestClient, model: Model):
        self.rest = rest
        self.model = model

    def _to_entity(self, response: Any) -> BaseModel:
        return to_entity(response, self.model, self.id_key, self.deleted_key)

    def _properties_request(self, entity: Any, **kwargs: Any) -> dict:
        return create_properties_request(entity, self.model, name_key=self.name_key, **kwargs)

    def _batch_request(self, entities: Iterable[Any], **kwargs: Any) -> List[dict]:
        request = []
        for entity in entities:
            data = self._properties_request(entity, **kwargs)
            data["objectId"] = convert(self.model.get_id(entity), int)
            request.append(data)
        return request

    def _convert_list_response(
        self,
        response: Any,
        items_key: str,
        has_more_key: str = "hasMore",
        offset_key: Optional[str] = "offset",
    ) -> PageResponse:
        """
        Decode a v1/v2 list response.

        Unexpected shapes degrade to an empty or partial page instead of failing.
        """
        pr = PageResponse()
        if not isinstance(response, Mapping):
            return pr

        pr.has_more = convert(response.get(has_more_key), bool)
        if pr.has_more and offset_key:
            pr.offset = convert(response.get(offset_key), int)

        items = response.get(items_key)
        if isinstance(items, list):
            for item in items:
                if not isinstance(item, Mapping):
                    logger.warning(f"Skipping {type(item).__name__} in '{items_key}' list")
                    continue
                pr.data.append(self._to_entity(item))
        return pr

    def query(self) -> Query:
        """Create a search query for this object type."""
        return Query(self.rest, self.search_url, self.model)


def page_parameters(
    page: Optional[Page],
    count_key: str,
    offset_key: str = "offset",
) -> List[Parameter]:
    """Query parameters for a requested page (nothing for the first/default page)."""
    parameters: List[Parameter] = []
    if page is not None:
        if page.count > 0:
            parameters.append(new_parameter(count_key, page.count))
        if page.offset > 0:
            parameters.append(new_parameter(offset_key, page.offset))
    return parameters


def property_parameters(key: str, props: Iterable[str]) -> List[Parameter]:
    return [new_parameter(key, prop) for prop in props]
