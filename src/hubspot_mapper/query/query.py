"""Search queries against the v3 CRM search endpoints."""

from typing import Any, List, Mapping, Optional, Union

from hubspot_mapper.errors import ShapeError
from hubspot_mapper.mapping.codec import from_object
from hubspot_mapper.mapping.convert import coerce
from hubspot_mapper.mapping.model import Model
from hubspot_mapper.paging.page import Page, PageResponse
from hubspot_mapper.query.filters import Filter, FilterGroup, QueryData, Sort, SortDirection
from hubspot_mapper.transport.rest import BaseRestClient
from hubspot_mapper.utils.logging import get_logger

logger = get_logger(__name__)


class Query:
    """
    Query for CRM objects.

    Each ``where`` call adds a filter group: filters passed to one call are
    combined using AND, separate calls are combined using OR.

    Example:
        page = (
            deals.query()
            .where(equals("dealstage", "closedwon"), greater("amount", 1000))
            .where(equals("dealname", "Big one"))
            .order_by("closedate", SortDirection.DESCENDING)
            .execute(Page(count=50))
        )
    """

    def __init__(self, rest: BaseRestClient, url: str, model: Model):
        self.rest = rest
        self.url = url
        self.model = model
        self.filter_groups: List[FilterGroup] = []
        self.properties: List[str] = []
        self.sorts: List[Sort] = []

    def where(self, *filters: Filter) -> "Query":
        self.filter_groups.append(FilterGroup(filters=list(filters)))
        return self

    def select(self, *properties: str) -> "Query":
        """Restrict the returned properties (default: the endpoint's default set)."""
        self.properties.extend(properties)
        return self

    def order_by(self, property_name: str, direction: Union[SortDirection, str] = SortDirection.ASCENDING) -> "Query":
        self.sorts.append(Sort(property_name=property_name, direction=SortDirection(direction)))
        return self

    def build(self, page: Optional[Page] = None) -> QueryData:
        """Assemble the request body for a page of results."""
        query = QueryData()
        if len(self.filter_groups) == 1:
            query.filters = list(self.filter_groups[0].filters)
        elif self.filter_groups:
            query.filter_groups = list(self.filter_groups)

        if self.sorts:
            query.sorts = list(self.sorts)
        if self.properties:
            query.properties = list(self.properties)

        if page is not None:
            if page.count > 0:
                query.limit = page.count
            if page.offset:
                query.after = str(page.offset)
        return query

    def execute(self, page: Optional[Page] = None) -> PageResponse:
        """
        Run the query and decode one page of results.

        Raises:
            TransportError: If the request fails
            ShapeError: If ``results`` is not a list of objects or the paging
                cursor is not a positive number
        """
        payload = self.build(page).to_payload()
        with self.rest.quota():
            response = self.rest.post(self.url, payload)
        return self._convert_response(response)

    def _convert_response(self, response: Any) -> PageResponse:
        pr = PageResponse()
        if response is None:
            return pr
        if not isinstance(response, Mapping):
            raise ShapeError(f"Unexpected response structure from {self.url}")

        after = _next_cursor(response)
        if after is not None:
            cursor = coerce(after, int)
            # offset 0 would request the first page again
            if not cursor.ok or cursor.value <= 0:
                raise ShapeError(f"Unexpected paging cursor {after!r} from {self.url}")
            pr.has_more = True
            pr.offset = cursor.value

        results = response.get("results")
        if results is None:
            return pr
        if not isinstance(results, list):
            raise ShapeError(f"Unexpected response structure from {self.url}: 'results' is not a list")

        for obj in results:
            if not isinstance(obj, Mapping):
                raise ShapeError(f"Unexpected response structure from {self.url}: result is not an object")
            pr.data.append(from_object(obj, self.model))

        logger.debug(f"Query {self.url} returned {len(pr.data)} results (has_more={pr.has_more})")
        return pr


def _next_cursor(response: Mapping[str, Any]) -> Optional[Any]:
    paging = response.get("paging")
    if not isinstance(paging, Mapping):
        return None
    next_page = paging.get("next")
    if not isinstance(next_page, Mapping):
        return None
    return next_page.get("after")
