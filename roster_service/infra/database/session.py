"""Async engine and session management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from roster_service.core.settings import get_app_settings, get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

db_settings = get_db_settings()
app_settings = get_app_settings()

engine_kwargs = db_settings.engine_kwargs()
engine_kwargs["echo"] = db_settings.echo or app_settings.debug
engine = create_async_engine(db_settings.url, **engine_kwargs)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Yields:
        Database session that is automatically closed.

    Example:
        async with get_async_session() as session:
            members = await get_member_repository().find_all(session)
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_database() -> None:
    """Verify the database is reachable.

    Raises:
        sqlalchemy.exc.OperationalError: If the connection cannot be opened.
    """
    url = engine.url.render_as_string(hide_password=True)
    logger.info("Initializing database connection", extra={"url": url})

    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))

    logger.info("Database connection established", extra={"url": url})


async def create_tables() -> None:
    """Create every table registered on the declarative metadata (idempotent)."""
    from roster_service.core.database import Base
    from roster_service.features.members import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables ensured", extra={"tables": sorted(Base.metadata.tables)})


async def drop_tables() -> None:
    """Drop every table registered on the declarative metadata."""
    from roster_service.core.database import Base
    from roster_service.features.members import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    logger.warning("Database tables dropped", extra={"tables": sorted(Base.metadata.tables)})


async def close_database() -> None:
    """Dispose of the engine's connection pool."""
    await engine.dispose()
    logger.info("Database connections closed")


__all__ = [
    "AsyncSessionLocal",
    "close_database",
    "create_tables",
    "drop_tables",
    "engine",
    "get_async_session",
    "init_database",
]
