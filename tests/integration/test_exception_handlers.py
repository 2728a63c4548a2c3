"""Problem Details rendering for errors raised inside route handlers."""
from __future__ import annotations

import pytest

from roster_service.core.database import RepositoryError
from roster_service.core.exceptions import AppException

pytestmark = pytest.mark.integration


@pytest.fixture
async def failing_app(app):
    @app.get("/boom/app")
    async def raise_app_exception():
        raise AppException(
            status_code=409,
            detail="Team name already taken",
            type="team-conflict",
            extra={"team_name": "teamA"},
        )

    @app.get("/boom/repository")
    async def raise_repository_error():
        raise RepositoryError("Page content exceeds requested limit", {"limit": 10, "size": 11})

    @app.get("/boom/unexpected")
    async def raise_unexpected():
        raise RuntimeError("secret internals")

    return app


async def test_app_exception(client, failing_app):
    response = await client.get("/boom/app")

    assert response.status_code == 409
    assert response.json() == {
        "type": "team-conflict",
        "title": "Conflict",
        "status": 409,
        "detail": "Team name already taken",
        "instance": "http://test/boom/app",
        "team_name": "teamA",
    }


async def test_repository_error_hides_details(client, failing_app):
    response = await client.get("/boom/repository")

    assert response.status_code == 500
    body = response.json()
    assert body["type"] == "repository-error"
    assert "limit" not in body
    assert "exceeds" not in body["detail"]


async def test_unexpected_error(failing_app):
    from httpx import ASGITransport, AsyncClient

    # Starlette re-raises unhandled errors after the 500 response unless told not to
    transport = ASGITransport(app=failing_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/boom/unexpected")

    assert response.status_code == 500
    body = response.json()
    assert body["type"] == "internal-error"
    assert "secret" not in body["detail"]
