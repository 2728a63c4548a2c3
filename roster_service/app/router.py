"""Router registration for the FastAPI application."""

from __future__ import annotations

from typing import TYPE_CHECKING

from roster_service.core.settings import get_app_settings
from roster_service.features.members.router import router as members_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from roster_service.core.settings import AppSettings


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register all feature routers with the application.

    Args:
        app: FastAPI application instance.
        app_settings: Optional application settings override for the API prefix.
    """
    app_settings = app_settings or get_app_settings()
    app.include_router(members_router, prefix=app_settings.api_prefix)
