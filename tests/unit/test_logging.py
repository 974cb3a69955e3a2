"""Unit tests for logging configuration."""

import json
import logging
import sys

import structlog

from app.core.config import LogFormatEnum
from app.core.logging import json_formatter, setup_logging


class TestJSONFormatter:
    """Test cases for the JSON log formatter."""

    def test_formats_record_as_json(self):
        record = logging.makeLogRecord(
            {"name": "app.test", "levelname": "INFO", "msg": "sent %s", "args": ("hello",)}
        )

        entry = json.loads(json_formatter().format(record))

        assert entry["level"] == "info"
        assert entry["logger"] == "app.test"
        assert entry["event"] == "sent hello"
        assert entry["timestamp"].endswith("Z")

    def test_extra_fields_are_top_level(self):
        record = logging.makeLogRecord(
            {"name": "app.test", "levelname": "INFO", "msg": "done", "conversation_id": 4}
        )

        entry = json.loads(json_formatter().format(record))

        assert entry["conversation_id"] == 4

    def test_exception_is_rendered(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.getLogger("app.test").makeRecord(
                "app.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
            )

        entry = json.loads(json_formatter().format(record))

        assert entry["level"] == "error"
        assert "RuntimeError: boom" in entry["exception"]


class TestSetupLogging:
    """Test cases for setup_logging."""

    def test_json_format_installs_json_formatter(self):
        try:
            setup_logging(level="DEBUG", log_format=LogFormatEnum.json)

            root = logging.getLogger()
            assert root.level == logging.DEBUG
            assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
            assert logging.getLogger("httpx").level == logging.WARNING
        finally:
            setup_logging()

    def test_simple_format(self):
        try:
            setup_logging(level="WARNING", log_format=LogFormatEnum.simple)

            root = logging.getLogger()
            assert root.level == logging.WARNING
            assert not isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
        finally:
            setup_logging()
