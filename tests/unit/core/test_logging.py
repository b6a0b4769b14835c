"""
Unit Tests for Centralized Logging.

Tests the logging configuration, structured fields, and source handling.
"""

import json
import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from mizban.core.logging import VALID_SOURCES, get_logger, log_with_source, setup_logging


class TestValidSources:
    """Tests for VALID_SOURCES constant."""

    def test_valid_sources_contains_expected_values(self):
        assert VALID_SOURCES == frozenset({"cli", "api", "config"})

    def test_valid_sources_is_frozenset(self):
        assert isinstance(VALID_SOURCES, frozenset)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_default_level_comes_from_settings(self):
        setup_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_explicit_level_overrides_settings(self):
        setup_logging(level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG

    def test_level_from_environment(self, monkeypatch: pytest.MonkeyPatch):
        from mizban.core.config import get_settings

        monkeypatch.setenv("MIZBAN_LOG_LEVEL", "INFO")
        get_settings.cache_clear()
        setup_logging()
        assert logging.getLogger().level == logging.INFO

    def test_replaces_existing_handlers(self):
        setup_logging()
        setup_logging()
        stream_handlers = [
            h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler
        ]
        assert len(stream_handlers) == 1

    def test_quiets_http_libraries(self):
        setup_logging(level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING

    def test_log_file_receives_json_records(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "mizban.jsonl"
        setup_logging(level="DEBUG", format_type="json", log_file=log_file)

        log_with_source(get_logger("mizban.test"), "cli", "info", "hello", command="server")
        for handler in logging.getLogger().handlers:
            handler.flush()

        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "hello"
        assert record["source"] == "cli"
        assert record["command"] == "server"
        assert record["level"] == "info"
        assert "timestamp" in record


class TestLogWithSource:
    """Tests for log_with_source."""

    def test_passes_source_and_fields(self):
        logger = MagicMock()
        log_with_source(logger, "api", "debug", "API request", method="GET")
        logger.debug.assert_called_once_with("API request", source="api", method="GET")

    def test_level_is_case_insensitive(self):
        logger = MagicMock()
        log_with_source(logger, "config", "WARNING", "careful")
        logger.warning.assert_called_once_with("careful", source="config")

    def test_invalid_level_raises(self):
        logger = MagicMock(spec=["info"])
        with pytest.raises(AttributeError):
            log_with_source(logger, "cli", "loud", "nope")
