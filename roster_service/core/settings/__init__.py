"""Modular Pydantic Settings v2 configuration.

Settings are split by domain (app/db/logging/pagination), each a frozen
BaseSettings model read from environment variables and an optional .env file.

Import settings via cached loaders:
    from roster_service.core.settings import get_db_settings

Or use unified settings for convenient access to all domains:
    from roster_service.core.settings import get_settings

    settings = get_settings()
    print(settings.db.url)
"""

from __future__ import annotations

from .app import AppSettings
from .database import DatabaseSettings
from .loader import (
    clear_all_caches,
    get_app_settings,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)
from .logs import LoggingSettings
from .pagination import PaginationSettings
from .unified import Settings, get_settings

__all__ = [
    "AppSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "PaginationSettings",
    "Settings",
    "clear_all_caches",
    "get_app_settings",
    "get_db_settings",
    "get_logging_settings",
    "get_pagination_settings",
    "get_settings",
]
