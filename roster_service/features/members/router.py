"""API router for the members feature.

Endpoints:
    GET /members                - Every matching member with its team
    GET /members/page           - One page; total counted only when ambiguous
    GET /members/page/simple    - One page; total always counted
    GET /members/{member_id}    - One member with its team

Search parameters (all optional, combined with AND):
    username, team_name       exact match; blank values are ignored
    age_goe, age_loe          inclusive age bounds

Paging parameters:
    page    zero-based page number (default 0)
    size    page size (default and ceiling from PAGINATION_* settings)
    sort    repeatable "field,dir", e.g. sort=age,desc&sort=username

Example Usage:
    GET /api/members/page?team_name=teamB&age_goe=31&age_loe=35&page=0&size=10
"""

from __future__ import annotations

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from roster_service.core.database import InvalidFilterError, OrderBy
from roster_service.core.dependencies.database import get_db_session
from roster_service.core.pagination import PageRequest, PageResponse
from roster_service.core.settings import get_pagination_settings
from roster_service.features.members.models import Member, Team
from roster_service.features.members.schemas import MemberSearchCondition, MemberTeamDto
from roster_service.features.members.service import MemberService

router = APIRouter(prefix="/members", tags=["members"])
logger = logging.getLogger(__name__)

# Sortable projection fields; team fields are NULL for members without a team
SORTABLE_FIELDS: dict[str, ColumnElement[Any]] = {
    "member_id": Member.id,
    "username": Member.username,
    "age": Member.age,
    "team_id": Team.id,
    "team_name": Team.name,
}
_NULLABLE_SORT_FIELDS = frozenset({"team_id", "team_name"})


def parse_sort(sort: list[str] | None) -> list[ColumnElement[Any]]:
    """Turn ``field[,asc|desc]`` strings into ORDER BY clauses.

    Member id ascending is appended as a tiebreaker unless already present,
    so page boundaries are stable.

    Raises:
        InvalidFilterError: On an unknown field or direction
    """
    clauses: list[ColumnElement[Any]] = []
    seen: set[str] = set()
    for item in sort or []:
        field, _, direction = item.partition(",")
        field = field.strip()
        direction = direction.strip().lower() or "asc"
        if field not in SORTABLE_FIELDS:
            msg = f"Unknown sort field {field!r}; expected one of {sorted(SORTABLE_FIELDS)}"
            raise InvalidFilterError(msg, filter_name="sort")
        if direction not in ("asc", "desc"):
            msg = f"Unknown sort direction {direction!r}; expected 'asc' or 'desc'"
            raise InvalidFilterError(msg, filter_name="sort")
        nulls = "last" if field in _NULLABLE_SORT_FIELDS else None
        clauses.extend(OrderBy(SORTABLE_FIELDS[field], direction, nulls=nulls).clauses())
        seen.add(field)

    if "member_id" not in seen:
        clauses.append(Member.id.asc())
    return clauses


def search_condition(
    username: Annotated[str | None, Query(description="Exact username")] = None,
    team_name: Annotated[str | None, Query(description="Exact team name")] = None,
    age_goe: Annotated[int | None, Query(description="Minimum age (inclusive)")] = None,
    age_loe: Annotated[int | None, Query(description="Maximum age (inclusive)")] = None,
) -> MemberSearchCondition:
    """Collect the optional search criteria from query parameters."""
    return MemberSearchCondition(
        username=username,
        team_name=team_name,
        age_goe=age_goe,
        age_loe=age_loe,
    )


def page_request(
    page: Annotated[int, Query(description="Zero-based page number")] = 0,
    size: Annotated[int | None, Query(description="Page size")] = None,
) -> PageRequest:
    """Build a page request; sizes above the configured maximum are clamped.

    Negative pages and non-positive sizes raise InvalidPageRequestError,
    rendered as 400.
    """
    settings = get_pagination_settings()
    if size is None:
        size = settings.default_limit
    return PageRequest.of(page, min(size, settings.max_limit))


def sort_clauses(
    sort: Annotated[list[str] | None, Query(description="field[,asc|desc], repeatable")] = None,
) -> list[ColumnElement[Any]]:
    return parse_sort(sort)


SessionDep = Annotated[AsyncSession, Depends(get_db_session)]
ConditionDep = Annotated[MemberSearchCondition, Depends(search_condition)]
PageRequestDep = Annotated[PageRequest, Depends(page_request)]
SortDep = Annotated[list[ColumnElement[Any]], Depends(sort_clauses)]


@router.get(
    "",
    response_model=list[MemberTeamDto],
    summary="Search members",
    description="Return every member matching the criteria, joined with its team.",
)
async def list_members(
    session: SessionDep,
    condition: ConditionDep,
    order_by: SortDep,
) -> list[MemberTeamDto]:
    return await MemberService(session).list_members(condition, order_by=order_by)


@router.get(
    "/page",
    response_model=PageResponse[MemberTeamDto],
    summary="Search members, one page",
    description="Return one page of matching members. The total is counted only when it "
    "cannot be derived from the page itself.",
)
async def page_members(
    session: SessionDep,
    condition: ConditionDep,
    request: PageRequestDep,
    order_by: SortDep,
) -> PageResponse[MemberTeamDto]:
    result = await MemberService(session).search_page(condition, request, order_by=order_by)
    return PageResponse[MemberTeamDto].from_result(result)


@router.get(
    "/page/simple",
    response_model=PageResponse[MemberTeamDto],
    summary="Search members, one page (always counted)",
    description="Same as /members/page but the total count query always runs.",
)
async def page_members_simple(
    session: SessionDep,
    condition: ConditionDep,
    request: PageRequestDep,
    order_by: SortDep,
) -> PageResponse[MemberTeamDto]:
    result = await MemberService(session).search_page_simple(
        condition, request, order_by=order_by
    )
    return PageResponse[MemberTeamDto].from_result(result)


@router.get(
    "/{member_id}",
    response_model=MemberTeamDto,
    summary="Get a member",
    description="Fetch one member and its team by member id.",
)
async def get_member(session: SessionDep, member_id: int) -> MemberTeamDto:
    return await MemberService(session).get_member(member_id)
