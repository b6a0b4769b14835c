"""
Configuration Management.

Two sources:

Settings (environment, MIZBAN_ prefix):
    MIZBAN_CONFIG_PATH  - location of the persisted config file
    MIZBAN_LOG_LEVEL    - default log level (WARNING)
    MIZBAN_LOG_FORMAT   - console or json
    MIZBAN_LOG_FILE     - optional JSONL log file

Persisted config (YAML, ~/.mizbancloud/config.yaml):
    token     - API bearer token, empty when logged out
    base_url  - API base URL

The persisted config is loaded once by the root command and handed to the
API client explicitly. There is no module-level config instance.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from mizban.core.exceptions import ConfigError
from mizban.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://auth.mizbancloud.com/api"
CONFIG_DIR_MODE = 0o700
CONFIG_FILE_MODE = 0o600


def default_config_path() -> Path:
    """Return ~/.mizbancloud/config.yaml."""
    return Path.home() / ".mizbancloud" / "config.yaml"


class Settings(BaseSettings):
    """Process settings read from MIZBAN_* environment variables."""

    config_path: Path = Field(default_factory=default_config_path)
    log_level: str = "WARNING"
    log_format: Literal["console", "json"] = "console"
    log_file: Path | None = None

    model_config = SettingsConfigDict(
        env_prefix="MIZBAN_",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class Config(BaseModel):
    """
    Persisted CLI configuration.

    Mutating helpers (set_token, set_base_url, logout) save immediately.
    Unknown keys in the YAML file are ignored on load.
    """

    token: str = ""
    base_url: str = DEFAULT_BASE_URL

    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    _path: Path = PrivateAttr(default_factory=default_config_path)

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """
        Load configuration from disk.

        A missing file yields defaults. An unreadable or invalid file is
        logged and also yields defaults, so a broken config never blocks
        `mizban login` from repairing it.

        Args:
            path: Config file location. Defaults to Settings.config_path.
        """
        config_path = Path(path) if path is not None else get_settings().config_path
        config_path = config_path.expanduser()

        config = cls()
        if config_path.exists():
            try:
                with open(config_path, encoding="utf-8") as f:
                    raw = yaml.safe_load(f) or {}
                if not isinstance(raw, dict):
                    raise ValueError("top-level YAML value is not a mapping")
                config = cls.model_validate(raw)
            except (OSError, yaml.YAMLError, ValueError, ValidationError) as e:
                log_with_source(
                    logger,
                    "config",
                    "warning",
                    "Ignoring unreadable config file",
                    path=str(config_path),
                    error=str(e),
                )
                config = cls()

        config._path = config_path
        return config

    @property
    def path(self) -> Path:
        """Location this config loads from and saves to."""
        return self._path

    @property
    def is_logged_in(self) -> bool:
        """True when a token is stored."""
        return self.token != ""

    def save(self) -> None:
        """
        Write the config as YAML.

        The directory is created with mode 0700 and the file with mode 0600.

        Raises:
            ConfigError: If the file cannot be written
        """
        path = self._path
        try:
            path.parent.mkdir(mode=CONFIG_DIR_MODE, parents=True, exist_ok=True)
            payload = yaml.safe_dump(self.model_dump(), default_flow_style=False, sort_keys=False)
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CONFIG_FILE_MODE)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.chmod(path, CONFIG_FILE_MODE)
        except OSError as e:
            raise ConfigError(f"error saving config to {path}: {e}") from e

        log_with_source(logger, "config", "debug", "Config saved", path=str(path))

    def set_token(self, token: str) -> None:
        """Store a token and save."""
        self.token = token
        self.save()

    def set_base_url(self, url: str) -> None:
        """Store a base URL and save."""
        self.base_url = url
        self.save()

    def logout(self) -> None:
        """Clear the token and save."""
        self.token = ""
        self.save()
