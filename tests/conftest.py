"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Every test runs against its own config file under tmp_path (through
MIZBAN_CONFIG_PATH), so nothing ever touches ~/.mizbancloud.
"""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from mizban.core.config import get_settings


# =============================================================================
# Configuration Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Point the CLI at a config file inside tmp_path."""
    path = tmp_path / "mizbancloud" / "config.yaml"
    monkeypatch.setenv("MIZBAN_CONFIG_PATH", str(path))
    for name in ("MIZBAN_LOG_LEVEL", "MIZBAN_LOG_FORMAT", "MIZBAN_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield path
    get_settings.cache_clear()


# =============================================================================
# Logging Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None, None, None]:
    """
    Restore root logger handlers after each test.

    The root command installs a stderr handler bound to the CliRunner's
    capture stream, which is closed once the invocation ends.
    """
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
