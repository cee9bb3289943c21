"""Cursor based paging shared by all list endpoints."""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional

from hubspot_mapper.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class Page:
    """
    Page to request from a list endpoint.

    offset: cursor reported by the previous response (0 = first page)
    count: requested page size (0 = server default)
    """

    offset: int = 0
    count: int = 0


@dataclass
class PageResponse:
    """One page of results. ``offset`` is only meaningful while ``has_more`` is set."""

    data: List[Any] = field(default_factory=list)
    offset: int = 0
    has_more: bool = False

    def next_page(self) -> Optional[Page]:
        """Page following this one, or None on the last page."""
        if not self.has_more:
            return None
        return Page(offset=self.offset, count=0)


FetchPage = Callable[[Optional[Page]], PageResponse]
Predicate = Callable[[Any], bool]


def new_page(offset: int = 0, count: int = 0) -> Page:
    return Page(offset=offset, count=count)


def iterate_pages(fetch_page: FetchPage) -> Iterator[Any]:
    """
    Yield every element of every page.

    The first call receives None (first page, default size); subsequent calls
    receive the cursor reported by the previous page. Pages are fetched
    lazily, so a consumer that stops early never triggers further requests.
    """
    page: Optional[Page] = None
    pages = 0
    while True:
        response = fetch_page(page)
        pages += 1
        yield from response.data
        page = response.next_page()
        if page is None:
            logger.debug(f"Paging finished after {pages} pages")
            return


def find_in_pages(fetch_page: FetchPage, predicate: Predicate) -> Optional[Any]:
    """
    Search all pages for the first element matching ``predicate``.

    Args:
        fetch_page: Callable returning the PageResponse for a Page (None = first page)
        predicate: Callable deciding whether an element is the one searched for

    Returns:
        The first matching element, or None if no page contains a match

    Exceptions raised by either callable propagate unchanged.
    """
    for item in iterate_pages(fetch_page):
        if predicate(item):
            return item
    return None
