"""Offset pagination with count elision.

The content query always runs; the total count query runs only when the
total cannot be derived from the page shape. See ``page`` for the rules.

    from roster_service.core.pagination import PageRequest, fetch_page

    result = await fetch_page(load_rows, count_rows, PageRequest.of(0, 20))
"""

from roster_service.core.pagination.page import (
    ContentQuery,
    CountQuery,
    PageRequest,
    PageResult,
    elided_total,
    fetch_page,
    get_page,
)
from roster_service.core.pagination.schemas import PageResponse

__all__ = [
    "ContentQuery",
    "CountQuery",
    "PageRequest",
    "PageResponse",
    "PageResult",
    "elided_total",
    "fetch_page",
    "get_page",
]
