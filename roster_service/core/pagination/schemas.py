"""Pagination response schemas for offset pagination.

Usage:
    @router.get("/members/page", response_model=PageResponse[MemberTeamDto])
    async def page_members(...) -> PageResponse[MemberTeamDto]:
        result = await service.search_page(condition, request)
        return PageResponse.from_result(result)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from roster_service.core.pagination.page import PageResult

T = TypeVar("T")


class PageResponse(BaseModel, Generic[T]):
    """Offset page returned by REST endpoints.

    Attributes:
        content: Items on this page
        total: Total number of matching items
        page: Zero-based page number
        size: Requested page size
        offset: Rows skipped before this page
        total_pages: Number of pages at this size
        has_next: Whether a following page exists
        has_previous: Whether a preceding page exists
    """

    content: list[T] = Field(default_factory=list, description="Items on this page")
    total: int = Field(ge=0, description="Total number of matching items")
    page: int = Field(ge=0, description="Zero-based page number")
    size: int = Field(gt=0, description="Requested page size")
    offset: int = Field(ge=0, description="Rows skipped before this page")
    total_pages: int = Field(ge=0, description="Number of pages at this size")
    has_next: bool = Field(description="Whether a following page exists")
    has_previous: bool = Field(description="Whether a preceding page exists")

    @classmethod
    def from_result(cls, result: PageResult[T]) -> PageResponse[T]:
        """Build a response from a repository page result."""
        return cls(
            content=list(result.content),
            total=result.total,
            page=result.page,
            size=result.limit,
            offset=result.offset,
            total_pages=result.pages,
            has_next=result.has_next,
            has_previous=result.has_previous,
        )


__all__ = ["PageResponse"]
