"""Minimal generic repository for SQLAlchemy models.

Provides basic CRUD, offset pagination and bulk statements with explicit
session passing. For complex queries, use the session directly - this is a
convenience, not a cage.

Example:
    from roster_service.core.database import BaseRepository
    from roster_service.features.members.models import Member

    class MemberRepository(BaseRepository[Member]):
        async def find_by_username(self, session: AsyncSession, username: str) -> Sequence[Member]:
            stmt = select(Member).where(Member.username == username)
            result = await session.execute(stmt)
            return result.scalars().all()

    repo = MemberRepository(Member)
    page = await repo.paginate(session, select(Member).order_by(Member.id), PageRequest.of(0, 20))
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import Select, delete, func, select, update

from roster_service.core.database.exceptions import NotFoundError
from roster_service.core.database.filters import LimitOffset
from roster_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute
    from sqlalchemy.sql.elements import ColumnElement

    from roster_service.core.pagination.page import PageRequest, PageResult


class BaseRepository[T]:
    """Minimal generic repository.

    Provides:
        - get(session, id) -> T | None
        - get_or_raise(session, id) -> T (raises NotFoundError)
        - get_by(session, attr, value) -> T | None
        - list(session, limit, offset) -> Sequence[T]
        - count(session, statement) -> int
        - search_counted(session, statement, request) -> PageResult (always counts)
        - paginate(session, statement, request) -> PageResult (counts only when needed)
        - create(session, instance) -> T
        - create_many(session, instances) -> Sequence[T]
        - delete(session, instance) -> None
        - update_where(session, *where, values) -> int
        - delete_where(session, *where) -> int

    Session is always explicit - no hidden state. Datastore errors propagate
    unchanged; the caller's transaction decides whether to roll back.
    """

    __slots__ = ("model", "_logger", "_lazy")

    def __init__(self, model: type[T]) -> None:
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class (e.g., Member, Team)
        """
        self.model = model
        # Standard logger for INFO/WARNING/ERROR
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    async def get(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        options: Iterable[Any] | None = None,
    ) -> T | None:
        """Get entity by primary key.

        Args:
            session: Database session
            id: Primary key value
            options: SQLAlchemy loader options (e.g., selectinload)

        Returns:
            Entity if found, None otherwise
        """
        instance = await session.get(self.model, id, options=options)

        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_or_raise(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        options: Iterable[Any] | None = None,
    ) -> T:
        """Get entity by primary key or raise NotFoundError.

        Raises:
            NotFoundError: If entity doesn't exist
        """
        instance = await self.get(session, id, options=options)
        if instance is None:
            self._logger.info(
                "Entity not found",
                extra={
                    "entity": self.model.__name__,
                    "id": str(id),
                    "operation": "db.get_or_raise",
                },
            )
            raise NotFoundError(self.model.__name__, {"id": id})
        return instance

    async def get_by(
        self,
        session: AsyncSession,
        attr: InstrumentedAttribute[Any],
        value: Any,
        *,
        options: Iterable[Any] | None = None,
    ) -> T | None:
        """Get entity by arbitrary attribute.

        Args:
            session: Database session
            attr: Model attribute to filter by (e.g., Team.name)
            value: Value to match
            options: SQLAlchemy loader options

        Returns:
            First matching entity or None
        """
        stmt = select(self.model).where(attr == value).limit(1)
        if options:
            stmt = stmt.options(*options)
        result = await session.execute(stmt)
        instance = result.scalars().first()

        self._lazy.debug(
            lambda: f"db.get_by: {self.model.__name__}.{attr.key}={value!r} -> {'found' if instance else 'not found'}"
        )
        return instance

    async def list(
        self,
        session: AsyncSession,
        *,
        limit: int = 100,
        offset: int = 0,
        options: Iterable[Any] | None = None,
    ) -> Sequence[T]:
        """List entities with pagination.

        Args:
            session: Database session
            limit: Maximum results to return
            offset: Number of results to skip
            options: SQLAlchemy loader options

        Returns:
            Sequence of entities
        """
        stmt = select(self.model).limit(limit).offset(offset)
        if options:
            stmt = stmt.options(*options)
        result = await session.execute(stmt)
        items = result.scalars().all()

        self._lazy.debug(
            lambda: f"db.list: {self.model.__name__}(limit={limit}, offset={offset}) -> {len(items)} items"
        )
        return items

    async def count(self, session: AsyncSession, statement: Select[Any]) -> int:
        """Count the rows a statement would return.

        Ordering and any limit/offset on the statement are stripped first.

        Args:
            session: Database session
            statement: Select whose rows should be counted

        Returns:
            Number of rows
        """
        unbounded = statement.limit(None).offset(None).order_by(None)
        count_stmt = select(func.count()).select_from(unbounded.subquery())
        total = (await session.execute(count_stmt)).scalar_one()

        self._lazy.debug(lambda: f"db.count: {self.model.__name__} -> {total}")
        return cast("int", total)

    async def search_counted(
        self,
        session: AsyncSession,
        statement: Select[Any],
        request: PageRequest,
        *,
        count_statement: Select[Any] | None = None,
        scalars: bool = True,
    ) -> PageResult[Any]:
        """Execute a paginated query and always run the count query.

        Args:
            session: Database session
            statement: Filtered and ordered select (no limit/offset)
            request: Page window
            count_statement: Select whose rows are counted; defaults to statement
            scalars: Return the first column of each row (entity selects)
                instead of full rows (projections)

        Returns:
            PageResult with content and counted total
        """
        from roster_service.core.pagination.page import PageResult

        content = await self._fetch_window(session, statement, request, scalars=scalars)
        total = await self.count(session, count_statement if count_statement is not None else statement)

        page = PageResult(content=content, total=total, request=request)
        self._lazy.debug(
            lambda: f"db.search_counted: {self.model.__name__}(offset={request.offset}, limit={request.limit}) "
            f"-> {len(content)}/{total} items, page {page.page + 1}/{page.pages}"
        )
        return page

    async def paginate(
        self,
        session: AsyncSession,
        statement: Select[Any],
        request: PageRequest,
        *,
        count_statement: Select[Any] | None = None,
        scalars: bool = True,
    ) -> PageResult[Any]:
        """Execute a paginated query, counting only when the total is ambiguous.

        The content query runs first. The count query is skipped when the
        page is provably the last one (see ``core.pagination.page``).

        Args:
            session: Database session
            statement: Filtered and ordered select (no limit/offset)
            request: Page window
            count_statement: Select whose rows are counted; defaults to statement.
                Pass a narrower select when the projection is expensive.
            scalars: Return the first column of each row (entity selects)
                instead of full rows (projections)

        Returns:
            PageResult with content and exact total
        """
        from roster_service.core.pagination.page import fetch_page

        async def load(req: PageRequest) -> Sequence[Any]:
            return await self._fetch_window(session, statement, req, scalars=scalars)

        async def count() -> int:
            return await self.count(
                session, count_statement if count_statement is not None else statement
            )

        page = await fetch_page(load, count, request)
        self._lazy.debug(
            lambda: f"db.paginate: {self.model.__name__}(offset={request.offset}, limit={request.limit}) "
            f"-> {page.number_of_elements}/{page.total} items"
        )
        return page

    async def create(self, session: AsyncSession, instance: T) -> T:
        """Persist a new entity.

        Adds to session, flushes to get generated values (like id),
        and refreshes to ensure instance is up-to-date.
        """
        session.add(instance)
        await session.flush()
        await session.refresh(instance)

        entity_id = getattr(instance, "id", None)
        self._lazy.debug(lambda: f"db.create: {self.model.__name__}(id={entity_id})")
        return instance

    async def create_many(self, session: AsyncSession, instances: Iterable[T]) -> Sequence[T]:
        """Persist multiple entities.

        Args:
            session: Database session
            instances: Entity instances to persist

        Returns:
            Sequence of persisted entities
        """
        instances_list = list(instances)
        session.add_all(instances_list)
        await session.flush()

        self._lazy.debug(
            lambda: f"db.create_many: {self.model.__name__} -> {len(instances_list)} created"
        )
        return instances_list

    async def delete(self, session: AsyncSession, instance: T) -> None:
        """Delete an entity."""
        entity_id = getattr(instance, "id", None)
        await session.delete(instance)
        await session.flush()

        self._logger.info(
            "Entity deleted",
            extra={"entity": self.model.__name__, "id": str(entity_id), "operation": "db.delete"},
        )

    async def update_where(
        self,
        session: AsyncSession,
        *where: ColumnElement[bool],
        values: Mapping[str, Any],
    ) -> int:
        """Bulk UPDATE matching rows in a single statement.

        Pending changes are flushed first. The statement bypasses the
        session, so the identity map is cleared afterwards; reload entities
        to observe the new values.

        Args:
            session: Database session
            *where: Boolean clauses; none means every row
            values: Column name to new value or SQL expression

        Returns:
            Number of rows updated

        Example:
            await repo.update_where(session, Member.age < 28, values={"username": "guest"})
            await repo.update_where(session, values={"age": Member.age + 1})
        """
        await session.flush()
        stmt = (
            update(self.model)
            .where(*where)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        session.expunge_all()
        updated: int = result.rowcount

        self._lazy.debug(
            lambda: f"db.update_where: {self.model.__name__}({sorted(values)}) -> {updated} updated"
        )
        return updated

    async def delete_where(self, session: AsyncSession, *where: ColumnElement[bool]) -> int:
        """Bulk DELETE matching rows in a single statement.

        Same session semantics as ``update_where``.

        Args:
            session: Database session
            *where: Boolean clauses; none means every row

        Returns:
            Number of rows deleted
        """
        await session.flush()
        stmt = delete(self.model).where(*where).execution_options(synchronize_session=False)
        result = await session.execute(stmt)
        session.expunge_all()
        deleted: int = result.rowcount

        # WARNING level for bulk deletes > 10 (audit-worthy)
        if deleted > 10:
            self._logger.warning(
                "Bulk delete executed",
                extra={
                    "entity": self.model.__name__,
                    "deleted": deleted,
                    "operation": "db.delete_where",
                },
            )
        else:
            self._lazy.debug(lambda: f"db.delete_where: {self.model.__name__} -> {deleted} deleted")
        return deleted

    async def _fetch_window(
        self,
        session: AsyncSession,
        statement: Select[Any],
        request: PageRequest,
        *,
        scalars: bool,
    ) -> Sequence[Any]:
        paginated = LimitOffset.from_request(request).apply(statement)
        result = await session.execute(paginated)
        if scalars:
            return result.scalars().all()
        return result.all()


__all__ = ["BaseRepository"]
