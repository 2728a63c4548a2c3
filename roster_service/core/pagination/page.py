"""Offset pagination with count elision.

A page fetch runs the bounded content query first and only runs the total
count query when the total cannot be derived from the page itself:

    offset == 0 and fewer rows than the limit    -> total = len(content)
    offset > 0 and 0 < len(content) < limit      -> total = offset + len(content)
    otherwise (full page, or empty page past 0)  -> total = count()

Usage:
    request = PageRequest.of(page=2, size=20)

    result = await fetch_page(
        lambda req: load_rows(req.offset, req.limit),
        count_rows,
        request,
    )
    print(result.total, result.pages, result.has_next)

The derived totals assume the content and count queries see the same rows.
Rows inserted by concurrent writers between the two statements can make a
counted total disagree with the page that was returned.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from roster_service.core.database.exceptions import InvalidPageRequestError, RepositoryError
from roster_service.infra.logging import get_lazy_logger

type CountQuery = Callable[[], Awaitable[int]]
type ContentQuery[T] = Callable[[PageRequest], Awaitable[Sequence[T]]]

_lazy = get_lazy_logger(__name__)


@dataclass(slots=True, frozen=True)
class PageRequest:
    """Offset/limit window into an ordered result set.

    Attributes:
        offset: Number of rows to skip (>= 0)
        limit: Maximum rows to return (> 0)

    Raises:
        InvalidPageRequestError: On construction with a negative offset
            or a non-positive limit
    """

    offset: int = 0
    limit: int = 20

    def __post_init__(self) -> None:
        if self.limit <= 0:
            raise InvalidPageRequestError(
                "Page limit must be greater than zero", offset=self.offset, limit=self.limit
            )
        if self.offset < 0:
            raise InvalidPageRequestError(
                "Page offset must not be negative", offset=self.offset, limit=self.limit
            )

    @classmethod
    def of(cls, page: int, size: int) -> PageRequest:
        """Build a request from a zero-based page number and page size."""
        if page < 0:
            raise InvalidPageRequestError(
                "Page number must not be negative", offset=page * size, limit=size
            )
        return cls(offset=page * size, limit=size)

    @property
    def page(self) -> int:
        """Zero-based page index containing the offset."""
        return self.offset // self.limit

    def next(self) -> PageRequest:
        """Request for the following page."""
        return PageRequest(offset=self.offset + self.limit, limit=self.limit)

    def previous_or_first(self) -> PageRequest:
        """Request for the preceding page, clamped at the first page."""
        return PageRequest(offset=max(0, self.offset - self.limit), limit=self.limit)

    def first(self) -> PageRequest:
        """Request for the first page with the same limit."""
        return PageRequest(offset=0, limit=self.limit)


@dataclass(slots=True, frozen=True)
class PageResult[T]:
    """One page of content plus the exact total across all pages.

    Attributes:
        content: Rows for this page, in query order
        total: Total matching rows
        request: The request that produced this page

    Example:
        result = await repo.search_page_complex(session, condition, PageRequest.of(0, 10))
        print(f"Showing {result.number_of_elements} of {result.total}")
        if result.has_next:
            nxt = await repo.search_page_complex(session, condition, result.request.next())
    """

    content: Sequence[T]
    total: int
    request: PageRequest

    @property
    def offset(self) -> int:
        return self.request.offset

    @property
    def limit(self) -> int:
        return self.request.limit

    @property
    def page(self) -> int:
        """Current page number (0-indexed)."""
        return self.request.page

    @property
    def pages(self) -> int:
        """Total number of pages."""
        return (self.total + self.limit - 1) // self.limit

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def has_next(self) -> bool:
        """Whether there are rows after this page."""
        return self.offset + len(self.content) < self.total

    @property
    def has_previous(self) -> bool:
        """Whether there are pages before this one."""
        return self.offset > 0

    @property
    def is_first(self) -> bool:
        return not self.has_previous

    @property
    def is_last(self) -> bool:
        return not self.has_next

    def map[R](self, func: Callable[[T], R]) -> PageResult[R]:
        """Return a page with converted content and the same total."""
        return PageResult(
            content=[func(item) for item in self.content],
            total=self.total,
            request=self.request,
        )


def elided_total(content_size: int, request: PageRequest) -> int | None:
    """Total derivable from the page shape alone, or None if a count is required.

    Args:
        content_size: Number of rows the content query returned
        request: The window the content query used

    Returns:
        Exact total when the page is provably the last one, otherwise None
    """
    if content_size >= request.limit:
        return None
    if request.offset == 0:
        return content_size
    if content_size > 0:
        return request.offset + content_size
    # Empty page past the start: the offset may overshoot the real total.
    return None


async def get_page[T](
    content: Sequence[T],
    request: PageRequest,
    count: CountQuery,
) -> PageResult[T]:
    """Assemble a page, running ``count`` only when the total is ambiguous.

    Args:
        content: Rows returned by the bounded content query
        request: Window used for the content query
        count: Zero-argument coroutine function returning the total

    Returns:
        PageResult with an exact total

    Raises:
        RepositoryError: If content holds more rows than the request limit
    """
    if len(content) > request.limit:
        raise RepositoryError(
            "Page content exceeds requested limit",
            details={"limit": request.limit, "size": len(content)},
        )

    total = elided_total(len(content), request)
    if total is None:
        total = await count()
        _lazy.debug(
            lambda: f"page.count: offset={request.offset}, limit={request.limit}, "
            f"size={len(content)} -> counted total={total}"
        )
    else:
        _lazy.debug(
            lambda: f"page.count: offset={request.offset}, limit={request.limit}, "
            f"size={len(content)} -> elided total={total}"
        )
    return PageResult(content=content, total=total, request=request)


async def fetch_page[T](
    content_query: ContentQuery[T],
    count_query: CountQuery,
    request: PageRequest,
) -> PageResult[T]:
    """Run the content query for ``request`` then resolve the total.

    Errors raised by either query propagate unchanged.
    """
    content = await content_query(request)
    return await get_page(content, request, count_query)


__all__ = [
    "ContentQuery",
    "CountQuery",
    "PageRequest",
    "PageResult",
    "elided_total",
    "fetch_page",
    "get_page",
]
