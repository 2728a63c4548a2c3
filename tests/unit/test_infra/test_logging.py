"""Unit tests for logging configuration, JSON formatting and lazy messages."""
from __future__ import annotations

import json
import logging

import pytest

from roster_service.infra.logging import (
    JSONFormatter,
    LazyLoggerAdapter,
    configure_logging,
    get_lazy_logger,
    shutdown,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    shutdown()
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(msg: str = "Bulk delete executed", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="repository.Member",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestJSONFormatter:
    """Tests for the JSON Lines formatter."""

    def test_core_fields(self):
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "WARNING"
        assert data["logger"] == "repository.Member"
        assert data["message"] == "Bulk delete executed"
        assert data["timestamp"].endswith("Z")

    def test_extra_and_static_fields(self):
        formatter = JSONFormatter(static={"service": "roster-service"})

        data = json.loads(formatter.format(make_record(deleted=42, entity="Member")))

        assert data["service"] == "roster-service"
        assert data["deleted"] == 42
        assert data["entity"] == "Member"

    def test_no_trace_ids_without_active_span(self):
        data = json.loads(JSONFormatter().format(make_record()))

        assert "trace_id" not in data
        assert "span_id" not in data

    def test_exception_on_one_line(self):
        try:
            raise ValueError("bad page")
        except ValueError:
            import sys

            record = make_record()
            record.exc_info = sys.exc_info()

        line = JSONFormatter().format(record)

        assert "\n" not in line
        assert "ValueError: bad page" in json.loads(line)["exception"]

    def test_non_serializable_extra_uses_str(self):
        data = json.loads(JSONFormatter().format(make_record(request=object())))

        assert data["request"].startswith("<object object")


@pytest.mark.unit
class TestLazyLogger:
    """Tests for lazily evaluated log messages."""

    def test_callable_not_evaluated_when_disabled(self):
        logger = logging.getLogger("tests.lazy.disabled")
        logger.setLevel(logging.INFO)
        lazy = LazyLoggerAdapter(logger, {})
        calls = []

        lazy.debug(lambda: calls.append("evaluated") or "message")

        assert calls == []

    def test_callable_evaluated_when_enabled(self, caplog):
        lazy = get_lazy_logger("tests.lazy.enabled")

        with caplog.at_level(logging.DEBUG, logger="tests.lazy.enabled"):
            lazy.debug(lambda: "page.count: elided total=3")
            lazy.info("size=%s", lambda: 10)

        assert [r.getMessage() for r in caplog.records] == [
            "page.count: elided total=3",
            "size=10",
        ]


@pytest.mark.unit
def test_configure_logging_writes_json_lines(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "roster.jsonl"
    configure_logging(
        log_level="INFO",
        file_path=log_file,
        json_logs=True,
        console_enabled=False,
        service_name="roster-test",
    )

    logging.getLogger("tests.logging").info("Sample data inserted", extra={"members": 100})
    logging.getLogger("tests.logging").debug("below threshold")
    shutdown()

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    data = json.loads(lines[0])
    assert data["message"] == "Sample data inserted"
    assert data["members"] == 100
    assert data["service"] == "roster-test"


@pytest.mark.unit
def test_configure_logging_applies_logger_levels(restore_root_logger):
    configure_logging(
        log_level="WARNING",
        console_enabled=False,
        logger_levels={"sqlalchemy.engine": "info"},
    )

    engine_logger = logging.getLogger("sqlalchemy.engine")
    try:
        assert restore_root_logger.level == logging.WARNING
        assert engine_logger.level == logging.INFO
    finally:
        engine_logger.setLevel(logging.NOTSET)
