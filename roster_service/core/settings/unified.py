"""Unified settings view over the per-domain loaders."""

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field

from .app import AppSettings
from .database import DatabaseSettings
from .loader import (
    get_app_settings,
    get_db_settings,
    get_logging_settings,
    get_pagination_settings,
)
from .logs import LoggingSettings
from .pagination import PaginationSettings


class Settings(BaseModel):
    """All settings domains in one object.

    Each domain is loaded through its cached loader, so ``get_settings().db``
    is the same instance as ``get_db_settings()``.

    Example:
        settings = get_settings()
        print(settings.app.api_prefix)
        print(settings.pagination.max_limit)
    """

    model_config = ConfigDict(frozen=True)

    app: AppSettings = Field(default_factory=get_app_settings)
    db: DatabaseSettings = Field(default_factory=get_db_settings)
    logging: LoggingSettings = Field(default_factory=get_logging_settings)
    pagination: PaginationSettings = Field(default_factory=get_pagination_settings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached unified settings."""
    return Settings()
