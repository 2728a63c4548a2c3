"""Repositories for the members feature."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import Select, select

from roster_service.core.database.exceptions import NotFoundError
from roster_service.core.database.repository import BaseRepository
from roster_service.features.members.conditions import (
    member_search_clauses,
    member_search_condition,
)
from roster_service.features.members.models import Member, Team
from roster_service.features.members.schemas import MemberDto, MemberTeamDto

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.sql.elements import ColumnElement

    from roster_service.core.pagination.page import PageRequest, PageResult
    from roster_service.features.members.schemas import MemberSearchCondition

    OrderClauses = Sequence[ColumnElement[Any]]


def member_team_select() -> Select[Any]:
    """Select the MemberTeamDto columns over ``member LEFT OUTER JOIN team``.

    Members without a team yield NULL team columns.
    """
    return select(
        Member.id.label("member_id"),
        Member.username.label("username"),
        Member.age.label("age"),
        Team.id.label("team_id"),
        Team.name.label("team_name"),
    ).outerjoin(Member.team)


def _to_dto(row: Any) -> MemberTeamDto:
    return MemberTeamDto.model_validate(row, from_attributes=True)


class MemberRepository(BaseRepository[Member]):
    """Repository for Member model.

    Inherits from BaseRepository:
        - get(session, id) -> Member | None
        - get_or_raise(session, id) -> Member
        - create(session, instance) -> Member
        - search_counted(session, statement, request) -> PageResult (always counts)
        - paginate(session, statement, request) -> PageResult (counts only when needed)
        - update_where / delete_where -> int

    Feature-specific methods below. Search methods project onto
    MemberTeamDto; ``order_by`` clauses are applied as given.
    """

    def __init__(self) -> None:
        """Initialize with Member model."""
        super().__init__(Member)

    async def find_all(self, session: AsyncSession) -> Sequence[Member]:
        """All members in id order."""
        result = await session.execute(select(Member).order_by(Member.id))
        return result.scalars().all()

    async def find_by_username(self, session: AsyncSession, username: str) -> Sequence[Member]:
        """Members whose username equals ``username`` (usernames are not unique)."""
        stmt = select(Member).where(Member.username == username).order_by(Member.id)
        result = await session.execute(stmt)
        members = result.scalars().all()

        self._lazy.debug(lambda: f"db.find_by_username({username!r}) -> {len(members)} members")
        return members

    async def get_member_team(self, session: AsyncSession, member_id: int) -> MemberTeamDto:
        """Projected row for one member.

        Raises:
            NotFoundError: If no member has this id
        """
        stmt = member_team_select().where(Member.id == member_id)
        row = (await session.execute(stmt)).first()
        if row is None:
            raise NotFoundError("Member", {"id": member_id})
        return _to_dto(row)

    async def search_by_builder(
        self,
        session: AsyncSession,
        condition: MemberSearchCondition,
        *,
        order_by: OrderClauses = (),
    ) -> list[MemberTeamDto]:
        """Projected search using a single clause built incrementally."""
        stmt = member_team_select().where(member_search_condition(condition)).order_by(*order_by)
        result = await session.execute(stmt)
        rows = [_to_dto(row) for row in result]

        self._lazy.debug(lambda: f"db.search_by_builder({condition!r}) -> {len(rows)} rows")
        return rows

    async def search(
        self,
        session: AsyncSession,
        condition: MemberSearchCondition,
        *,
        order_by: OrderClauses = (),
    ) -> list[MemberTeamDto]:
        """Projected search passing each present clause to ``where``."""
        stmt = self._search_statement(condition, order_by)
        result = await session.execute(stmt)
        rows = [_to_dto(row) for row in result]

        self._lazy.debug(lambda: f"db.search({condition!r}) -> {len(rows)} rows")
        return rows

    async def search_member_dtos(
        self,
        session: AsyncSession,
        condition: MemberSearchCondition,
        *,
        order_by: OrderClauses = (),
    ) -> list[MemberDto]:
        """Username and age of each matching member, without the team columns."""
        stmt = (
            select(Member.username, Member.age)
            .outerjoin(Member.team)
            .where(*member_search_clauses(condition))
            .order_by(*order_by)
        )
        result = await session.execute(stmt)
        return [MemberDto.model_validate(row, from_attributes=True) for row in result]

    async def search_page_simple(
        self,
        session: AsyncSession,
        condition: MemberSearchCondition,
        request: PageRequest,
        *,
        order_by: OrderClauses = (),
    ) -> PageResult[MemberTeamDto]:
        """Projected page; the count query always runs."""
        page = await self.search_counted(
            session,
            self._search_statement(condition, order_by),
            request,
            scalars=False,
        )
        return page.map(_to_dto)

    async def search_page_complex(
        self,
        session: AsyncSession,
        condition: MemberSearchCondition,
        request: PageRequest,
        *,
        order_by: OrderClauses = (),
    ) -> PageResult[MemberTeamDto]:
        """Projected page; the count query runs only when the total is ambiguous.

        The count selects member ids over the same join and filters, without
        the projection or ordering.
        """
        clauses = member_search_clauses(condition)
        count_statement = select(Member.id).outerjoin(Member.team).where(*clauses)
        page = await self.paginate(
            session,
            self._search_statement(condition, order_by),
            request,
            count_statement=count_statement,
            scalars=False,
        )
        return page.map(_to_dto)

    async def rename_younger_than(self, session: AsyncSession, age: int, username: str) -> int:
        """Set ``username`` on every member younger than ``age``."""
        return await self.update_where(session, Member.age < age, values={"username": username})

    async def add_age(self, session: AsyncSession, delta: int) -> int:
        """Add ``delta`` to every member's age."""
        return await self.update_where(session, values={"age": Member.age + delta})

    async def multiply_age(self, session: AsyncSession, factor: int) -> int:
        """Multiply every member's age by ``factor``."""
        return await self.update_where(session, values={"age": Member.age * factor})

    async def delete_older_than(self, session: AsyncSession, age: int) -> int:
        """Delete every member older than ``age``."""
        return await self.delete_where(session, Member.age > age)

    def _search_statement(
        self,
        condition: MemberSearchCondition,
        order_by: OrderClauses,
    ) -> Select[Any]:
        return member_team_select().where(*member_search_clauses(condition)).order_by(*order_by)


class TeamRepository(BaseRepository[Team]):
    """Repository for Team model."""

    def __init__(self) -> None:
        """Initialize with Team model."""
        super().__init__(Team)

    async def get_by_name(self, session: AsyncSession, name: str) -> Team | None:
        """Get a team by its unique name."""
        return await self.get_by(session, Team.name, name)


_member_repository: MemberRepository | None = None
_team_repository: TeamRepository | None = None


def get_member_repository() -> MemberRepository:
    """Get the shared MemberRepository instance.

    Usage in FastAPI routes:
        @router.get("/members")
        async def list_members(
            session: AsyncSession = Depends(get_db_session),
            repo: MemberRepository = Depends(get_member_repository),
        ):
            return await repo.search(session, MemberSearchCondition())
    """
    global _member_repository
    if _member_repository is None:
        _member_repository = MemberRepository()
    return _member_repository


def get_team_repository() -> TeamRepository:
    """Get the shared TeamRepository instance."""
    global _team_repository
    if _team_repository is None:
        _team_repository = TeamRepository()
    return _team_repository
