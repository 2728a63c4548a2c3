"""Application lifespan management.

Startup:
1. Logging
2. Database connectivity check
3. Table creation (DB_CREATE_TABLES)
4. Sample data (APP_SEED_SAMPLE_DATA)

Shutdown disposes of the engine and flushes queued log records.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from roster_service.core.settings import get_app_settings, get_db_settings
from roster_service.infra.logging.config import setup_logging
from roster_service.infra.logging.config import shutdown as shutdown_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Start and stop the application's infrastructure."""
    # Imported here so building the app does not open the engine module early
    from roster_service.infra.database import (
        close_database,
        create_tables,
        get_async_session,
        init_database,
    )

    setup_logging()
    app_settings = get_app_settings()
    db_settings = get_db_settings()

    logger.info(
        "Application starting",
        extra={
            "service": app_settings.service_name,
            "version": app_settings.version,
            "environment": app_settings.environment,
        },
    )

    await init_database()
    if db_settings.create_tables:
        await create_tables()

    if app_settings.seed_sample_data:
        from roster_service.features.members.seed import seed_sample_data

        async with get_async_session() as session:
            await seed_sample_data(session)

    try:
        yield
    finally:
        await close_database()
        logger.info("Application stopped", extra={"service": app_settings.service_name})
        shutdown_logging()
