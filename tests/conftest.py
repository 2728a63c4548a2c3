"""Pytest configuration and shared fixtures.

Organization:
    - Database Fixtures: in-memory SQLite engine, session, statement log
    - Data Fixtures: the four-member teamA/teamB roster
    - Application Fixtures: FastAPI app bound to the test session, HTTP client
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from typing import TYPE_CHECKING

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

    from roster_service.features.members.models import Member, Team

# Keep the module-level engine off disk and settings independent of a local .env
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("LOG_JSON", "false")


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create async SQLAlchemy engine with in-memory SQLite.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create async database session with automatic table creation and cleanup."""
    from roster_service.core.database.base import Base
    from roster_service.features.members import models  # noqa: F401

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def statement_log(db_engine: AsyncEngine) -> list[str]:
    """SQL text of every statement executed on the test engine, in order.

    Example:
        async def test_no_count(db_session, statement_log):
            statement_log.clear()
            ...
            assert not [s for s in statement_log if "count(" in s.lower()]
    """
    statements: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany):  # noqa: ANN001
        statements.append(statement)

    event.listen(db_engine.sync_engine, "before_cursor_execute", _record)
    yield statements
    event.remove(db_engine.sync_engine, "before_cursor_execute", _record)


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest.fixture
async def teams(db_session: AsyncSession) -> dict[str, Team]:
    """teamA and teamB, flushed so they have ids."""
    from roster_service.features.members.models import Team

    team_a = Team(name="teamA")
    team_b = Team(name="teamB")
    db_session.add_all([team_a, team_b])
    await db_session.flush()
    return {"teamA": team_a, "teamB": team_b}


@pytest.fixture
async def sample_members(db_session: AsyncSession, teams: dict[str, Team]) -> list[Member]:
    """member1..member4 aged 10, 20, 30, 40; the first two in teamA, the rest in teamB."""
    from roster_service.features.members.models import Member

    members = [
        Member("member1", 10, teams["teamA"]),
        Member("member2", 20, teams["teamA"]),
        Member("member3", 30, teams["teamB"]),
        Member("member4", 40, teams["teamB"]),
    ]
    db_session.add_all(members)
    await db_session.commit()
    return members


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
async def app(db_session: AsyncSession) -> FastAPI:
    """FastAPI application whose requests share the test session.

    The lifespan is not run, so no engine is opened and no tables are
    created beyond what ``db_session`` set up.
    """
    from roster_service.app.main import create_app
    from roster_service.core.dependencies.database import get_db_session

    application = create_app()

    async def _override_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    application.dependency_overrides[get_db_session] = _override_session
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for the test application."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
