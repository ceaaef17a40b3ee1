# tests/unit/logging/test_unit_logging.py — v1
"""Tests for logging/ — context vars, formatters, rotating handler."""

from __future__ import annotations

import io
import json
import logging
from logging.handlers import RotatingFileHandler

import pytest

from profilescope.logging.context import (
    LogContext,
    clear_context,
    get_context,
    set_phase_context,
    set_run_context,
    set_section_context,
)
from profilescope.logging.handlers import create_rotating_handler, parse_size
from profilescope.logging.logger import (
    ROOT_LOGGER_NAME,
    JsonFormatter,
    TextFormatter,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _reset_context():
    clear_context()
    yield
    clear_context()


class TestContext:
    def test_empty_by_default(self):
        assert get_context() == LogContext()
        assert get_context().as_dict() == {}

    def test_run_phase_section(self):
        set_run_context("jane-doe", 3)
        set_phase_context("SCANNING")
        set_section_context("about")
        ctx = get_context()
        assert ctx.as_dict() == {
            "profile_id": "jane-doe",
            "generation": 3,
            "section": "about",
            "phase": "SCANNING",
        }

    def test_clear(self):
        set_run_context("jane-doe", 1)
        clear_context()
        assert get_context().profile_id is None


class TestFormatters:
    def _record(self, msg="hello %s", args=("world",)):
        return logging.LogRecord("profilescope.test", logging.INFO, __file__, 1, msg, args, None)

    def test_json_includes_context(self):
        set_run_context("jane-doe", 2)
        entry = json.loads(JsonFormatter().format(self._record()))
        assert entry["message"] == "hello world"
        assert entry["level"] == "INFO"
        assert entry["context"] == {"profile_id": "jane-doe", "generation": 2}

    def test_json_without_context(self):
        entry = json.loads(JsonFormatter().format(self._record()))
        assert "context" not in entry

    def test_json_extra_data(self):
        record = self._record()
        record.data = {"score": 60}
        entry = json.loads(JsonFormatter().format(record))
        assert entry["data"] == {"score": 60}

    def test_text_format(self):
        set_run_context("jane-doe", 1)
        set_section_context("skills")
        text = TextFormatter().format(self._record())
        assert "<jane-doe#1>" in text
        assert "(skills)" in text
        assert text.endswith("- hello world")


class TestLoggerSetup:
    def test_get_logger_prefixes(self):
        assert get_logger("cache").name == "profilescope.cache"
        assert get_logger("profilescope.cache").name == "profilescope.cache"

    def test_setup_replaces_handlers(self):
        stream = io.StringIO()
        setup_logging(level="DEBUG", log_format="text", stream=stream)
        setup_logging(level="DEBUG", log_format="text", stream=stream)
        root = logging.getLogger(ROOT_LOGGER_NAME)
        assert len(root.handlers) == 1
        get_logger("unit").debug("ping")
        assert "ping" in stream.getvalue()

    def test_setup_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        setup_logging(log_format="json", log_file=str(log_file), stream=io.StringIO())
        root = logging.getLogger(ROOT_LOGGER_NAME)
        assert any(isinstance(h, RotatingFileHandler) for h in root.handlers)
        assert log_file.parent.is_dir()
        for handler in root.handlers:
            handler.close()
        root.handlers.clear()


class TestHandlers:
    @pytest.mark.parametrize("value,expected", [
        ("10MB", 10 * 1024**2),
        ("512kb", 512 * 1024),
        ("1 GB", 1024**3),
    ])
    def test_parse_size(self, value, expected):
        assert parse_size(value) == expected

    @pytest.mark.parametrize("value", ["10", "MB", "10TB", ""])
    def test_parse_size_invalid(self, value):
        with pytest.raises(ValueError, match="Invalid size format"):
            parse_size(value)

    def test_rotating_handler(self, tmp_path):
        handler = create_rotating_handler(str(tmp_path / "a" / "x.log"), "1KB", 3)
        try:
            assert handler.maxBytes == 1024
            assert handler.backupCount == 3
        finally:
            handler.close()
