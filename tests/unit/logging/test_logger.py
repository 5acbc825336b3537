# tests/unit/logging/test_logger.py - v1
"""Tests for logging/logger.py - formatters and setup."""

from __future__ import annotations

import json
import logging

import pytest

from sonar.logging.context import clear_context, set_build_context, set_state
from sonar.logging.logger import (
    JsonFormatter,
    TextFormatter,
    parse_size,
    setup_logging,
)


def _record(msg: str = "Hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )
    for k, v in extra.items():
        setattr(record, k, v)
    return record


class TestJsonFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_build_context("bartik", "sonar-bartik-abc")
        set_state("compiling")
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["context"] == {
            "theme": "bartik", "cache_key": "sonar-bartik-abc", "state": "compiling",
        }

    def test_format_with_data(self):
        parsed = json.loads(JsonFormatter().format(_record(data={"source": "a {}"})))
        assert parsed["data"] == {"source": "a {}"}


class TestTextFormatter:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_format_with_context(self):
        set_build_context("bartik", "sonar-bartik-abc")
        set_state("skip")
        output = TextFormatter().format(_record())
        assert "[sonar-bartik-abc]" in output
        assert "(skip)" in output


class TestParseSize:
    @pytest.mark.parametrize(
        "value,expected",
        [("10MB", 10 * 1024**2), ("512kb", 512 * 1024), ("1G", 1024**3), ("2048", 2048)],
    )
    def test_valid(self, value, expected):
        assert parse_size(value) == expected

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid size"):
            parse_size("ten megs")


class TestSetupLogging:
    def teardown_method(self):
        logging.getLogger("sonar").handlers.clear()

    def test_console_only(self):
        setup_logging(level="DEBUG", log_format="json")
        root = logging.getLogger("sonar")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_no_duplicate_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("sonar").handlers) == 1

    def test_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "sonar.log"
        setup_logging(log_format="text", log_file=log_file, rotation="1MB", retention=2)
        root = logging.getLogger("sonar")
        assert len(root.handlers) == 2
        logging.getLogger("sonar.t").warning("written")
        for handler in root.handlers:
            handler.flush()
        assert "written" in log_file.read_text(encoding="utf-8")
        for handler in root.handlers:
            handler.close()
