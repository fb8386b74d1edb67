"""
Tests for neweden centralized configuration.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError


class TestSettingsDefaults:
    """Test default values."""

    def test_defaults(self, monkeypatch):
        for var in ("NEWEDEN_LOG_LEVEL", "NEWEDEN_DEBUG", "NEWEDEN_LOG_JSON", "NEWEDEN_SQLITE_URI"):
            monkeypatch.delenv(var, raising=False)

        from neweden.core.config import get_settings

        settings = get_settings()

        assert settings.log_level == "WARNING"
        assert settings.debug is False
        assert settings.log_json is False
        assert settings.sqlite_uri is None


class TestLogLevel:
    """Test log level resolution."""

    def test_lowercase_normalized(self, monkeypatch):
        monkeypatch.setenv("NEWEDEN_LOG_LEVEL", "debug")

        from neweden.core.config import get_settings

        assert get_settings().log_level == "DEBUG"
        assert get_settings().log_level_int == logging.DEBUG

    def test_invalid_rejected(self, monkeypatch):
        monkeypatch.setenv("NEWEDEN_LOG_LEVEL", "CHATTY")

        from neweden.core.config import NewEdenSettings

        with pytest.raises(ValidationError):
            NewEdenSettings()

    def test_legacy_debug_flag(self, monkeypatch):
        monkeypatch.delenv("NEWEDEN_LOG_LEVEL", raising=False)
        monkeypatch.setenv("NEWEDEN_DEBUG", "1")

        from neweden.core.config import get_settings, is_debug_enabled

        assert get_settings().effective_log_level == "DEBUG"
        assert is_debug_enabled()

    def test_explicit_level_wins_over_debug(self, monkeypatch):
        monkeypatch.setenv("NEWEDEN_LOG_LEVEL", "ERROR")
        monkeypatch.setenv("NEWEDEN_DEBUG", "1")

        from neweden.core.config import get_settings

        assert get_settings().effective_log_level == "ERROR"

    def test_json_logging(self, monkeypatch):
        monkeypatch.setenv("NEWEDEN_LOG_JSON", "true")

        from neweden.core.config import is_json_logging

        assert is_json_logging()


class TestPaths:
    """Test data path resolution."""

    def test_instance_root_paths(self, monkeypatch, tmp_path):
        monkeypatch.delenv("NEWEDEN_UNIVERSE_GRAPH", raising=False)
        monkeypatch.delenv("NEWEDEN_UNIVERSE_CACHE", raising=False)
        monkeypatch.setenv("NEWEDEN_INSTANCE_ROOT", str(tmp_path))

        from neweden.core.config import get_settings

        settings = get_settings()

        assert settings.cache_dir == tmp_path / "cache"
        assert settings.graph_path == tmp_path / "cache" / "universe.universe"
        assert settings.cache_path == tmp_path / "cache" / "universe_cache.json"

    def test_explicit_graph_path(self, monkeypatch, tmp_path):
        target = tmp_path / "custom.universe"
        monkeypatch.setenv("NEWEDEN_UNIVERSE_GRAPH", str(target))

        from neweden.core.config import get_settings

        assert get_settings().graph_path == target
        assert isinstance(get_settings().graph_path, Path)


class TestSingleton:
    def test_cached(self):
        from neweden.core.config import get_settings

        assert get_settings() is get_settings()

    def test_reset_reloads(self, monkeypatch):
        from neweden.core.config import get_settings, reset_settings

        monkeypatch.setenv("NEWEDEN_LOG_LEVEL", "INFO")
        reset_settings()
        first = get_settings()

        monkeypatch.setenv("NEWEDEN_LOG_LEVEL", "ERROR")
        assert get_settings().log_level == "INFO"

        reset_settings()
        assert get_settings() is not first
        assert get_settings().log_level == "ERROR"
