"""
neweden Core Infrastructure

Shared configuration and logging used by the universe loaders,
the navigation services and the CLI.
"""

from .config import NewEdenSettings, get_settings, reset_settings
from .logging import get_logger

__all__ = [
    "NewEdenSettings",
    "get_settings",
    "reset_settings",
    "get_logger",
]
