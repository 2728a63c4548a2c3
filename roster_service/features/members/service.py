"""Service layer for the members feature."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from roster_service.features.members.repository import MemberRepository, get_member_repository
from roster_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.sql.elements import ColumnElement

    from roster_service.core.pagination import PageRequest, PageResult
    from roster_service.features.members.schemas import MemberSearchCondition, MemberTeamDto


# Standard logger for INFO/WARNING/ERROR
logger = logging.getLogger(__name__)
# Lazy logger for DEBUG (zero overhead when DEBUG disabled)
lazy_logger = get_lazy_logger(__name__)


class MemberService:
    """Read-side operations over members and their teams."""

    def __init__(
        self,
        session: AsyncSession,
        repo: MemberRepository | None = None,
    ) -> None:
        """Initialize the member service.

        Args:
            session: Database session for operations
            repo: Member repository (optional, uses default if not provided)
        """
        self._session = session
        self._repo = repo or get_member_repository()

    async def get_member(self, member_id: int) -> MemberTeamDto:
        """Get one member with its team.

        Raises:
            NotFoundError: If the member does not exist
        """
        return await self._repo.get_member_team(self._session, member_id)

    async def list_members(
        self,
        condition: MemberSearchCondition,
        *,
        order_by: Sequence[ColumnElement[Any]] = (),
    ) -> list[MemberTeamDto]:
        """Every member matching ``condition``, unpaged."""
        rows = await self._repo.search(self._session, condition, order_by=order_by)

        lazy_logger.debug(lambda: f"service.list_members({condition!r}) -> {len(rows)} rows")
        return rows

    async def search_page(
        self,
        condition: MemberSearchCondition,
        request: PageRequest,
        *,
        order_by: Sequence[ColumnElement[Any]] = (),
    ) -> PageResult[MemberTeamDto]:
        """One page of matching members; counts only when the total is ambiguous."""
        page = await self._repo.search_page_complex(
            self._session, condition, request, order_by=order_by
        )

        lazy_logger.debug(
            lambda: f"service.search_page({condition!r}, offset={request.offset}, "
            f"limit={request.limit}) -> {page.number_of_elements}/{page.total}"
        )
        return page

    async def search_page_simple(
        self,
        condition: MemberSearchCondition,
        request: PageRequest,
        *,
        order_by: Sequence[ColumnElement[Any]] = (),
    ) -> PageResult[MemberTeamDto]:
        """One page of matching members; always counts."""
        page = await self._repo.search_page_simple(
            self._session, condition, request, order_by=order_by
        )

        lazy_logger.debug(
            lambda: f"service.search_page_simple({condition!r}, offset={request.offset}, "
            f"limit={request.limit}) -> {page.number_of_elements}/{page.total}"
        )
        return page
