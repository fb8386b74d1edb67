"""
neweden Configuration

All runtime options come from NEWEDEN_* environment variables (or a .env
file next to pyproject.toml) and are validated by pydantic-settings.

Usage:
    from neweden.core.config import get_settings

    graph_file = get_settings().graph_path

Variables:
    NEWEDEN_LOG_LEVEL       DEBUG, INFO, WARNING (default), ERROR or CRITICAL
    NEWEDEN_DEBUG           Legacy switch; implies DEBUG when no level is set
    NEWEDEN_LOG_JSON        Emit log records as JSON lines
    NEWEDEN_UNIVERSE_GRAPH  Pre-built .universe file
    NEWEDEN_UNIVERSE_CACHE  JSON universe cache read by `neweden build`
    NEWEDEN_SQLITE_URI      Static dump loaded instead of the .universe file
    NEWEDEN_INSTANCE_ROOT   Directory holding cache/ (default: project root)
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_LOG_LEVEL: LogLevel = "WARNING"
GRAPH_FILENAME = "universe.universe"
CACHE_FILENAME = "universe_cache.json"


def _project_root() -> Optional[Path]:
    """Nearest ancestor of this package that holds a pyproject.toml."""
    for directory in Path(__file__).resolve().parents:
        if (directory / "pyproject.toml").is_file():
            return directory
    return None


def _env_file() -> Optional[Path]:
    root = _project_root()
    if root is not None and (root / ".env").is_file():
        return root / ".env"
    return None


def _default_instance_root() -> Path:
    return _project_root() or Path.cwd()


class NewEdenSettings(BaseSettings):
    """Validated neweden settings, read once per process."""

    model_config = SettingsConfigDict(
        env_prefix="NEWEDEN_",
        env_file=_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Logging
    log_level: LogLevel = Field(default=DEFAULT_LOG_LEVEL, description="Log level for neweden loggers")
    debug: bool = Field(default=False, description="Legacy flag, implies DEBUG")
    log_json: bool = Field(default=False, description="Emit JSON log lines")

    # Universe sources
    universe_graph: Optional[Path] = Field(default=None, description="Pre-built .universe file")
    universe_cache: Optional[Path] = Field(default=None, description="JSON universe cache")
    sqlite_uri: Optional[str] = Field(default=None, description="SQLite static dump path or file: URI")

    instance_root: Path = Field(
        default_factory=_default_instance_root,
        description="Directory whose cache/ subdirectory holds generated data",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @property
    def effective_log_level(self) -> LogLevel:
        """
        The level actually applied to loggers.

        NEWEDEN_DEBUG only takes effect while the level is still the default,
        so an explicit NEWEDEN_LOG_LEVEL always wins.
        """
        if self.debug and self.log_level == DEFAULT_LOG_LEVEL:
            return "DEBUG"
        return self.log_level

    @property
    def log_level_int(self) -> int:
        return logging.getLevelName(self.effective_log_level)

    @property
    def cache_dir(self) -> Path:
        return self.instance_root / "cache"

    @property
    def graph_path(self) -> Path:
        """Where the .universe graph is read from and built to."""
        return self.universe_graph or self.cache_dir / GRAPH_FILENAME

    @property
    def cache_path(self) -> Path:
        return self.universe_cache or self.cache_dir / CACHE_FILENAME


@lru_cache(maxsize=1)
def get_settings() -> NewEdenSettings:
    """Process-wide settings, loaded on first use."""
    return NewEdenSettings()


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() rereads the environment."""
    get_settings.cache_clear()


def is_debug_enabled() -> bool:
    return get_settings().effective_log_level == "DEBUG"


def is_json_logging() -> bool:
    return get_settings().log_json
