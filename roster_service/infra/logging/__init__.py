"""Logging infrastructure.

Provides structured logging with:
- JSONL format for log aggregation, or plain text for local runs
- QueueHandler + QueueListener for non-blocking I/O
- Lazy evaluation for expensive debug messages
- OpenTelemetry trace correlation

Basic usage:
    import logging

    from roster_service.infra.logging import get_lazy_logger, setup_logging

    setup_logging()  # once, at process start

    logger = logging.getLogger(__name__)
    logger.info("Members seeded", extra={"count": 100})

    lazy_logger = get_lazy_logger(__name__)
    lazy_logger.debug(lambda: f"Rows: {expensive_dump(rows)}")  # Only runs if DEBUG enabled
"""

from roster_service.infra.logging.config import configure_logging, setup_logging, shutdown
from roster_service.infra.logging.formatters import JSONFormatter
from roster_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "JSONFormatter",
    "LazyLoggerAdapter",
    "configure_logging",
    "get_lazy_logger",
    "setup_logging",
    "shutdown",
]
