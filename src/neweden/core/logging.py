"""
neweden Structured Logging

Every neweden module logs through `get_logger(__name__)`. Loggers share one
stderr handler, take their level from NEWEDEN_LOG_LEVEL (or the legacy
NEWEDEN_DEBUG flag) and can emit one JSON object per line when
NEWEDEN_LOG_JSON is set.

Usage:
    from neweden.core.logging import get_logger

    logger = get_logger(__name__)
    logger.debug("Expanding system %d", system_id)
    logger.info("Loaded graph", extra={"systems": 8285})
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Optional

from .config import get_settings

LOGGER_PREFIX = "neweden"

# Attributes present on every record; anything else arrived through `extra`
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "taskName",
}


class NewEdenFormatter(logging.Formatter):
    """
    Formats records as "[NEWEDEN LEVEL] [module] message" or as JSON.

    JSON records carry the timestamp, level, logger name, message, any
    `extra` fields and the formatted exception, if one is attached.
    """

    def __init__(self, json_output: bool = False) -> None:
        super().__init__()
        self.json_output = json_output

    def format(self, record: logging.LogRecord) -> str:
        if self.json_output:
            return self._as_json(record)
        return self._as_text(record)

    def _as_text(self, record: logging.LogRecord) -> str:
        module = record.name.rpartition(".")[2]
        line = f"[NEWEDEN {record.levelname}] [{module}] {record.getMessage()}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line

    def _as_json(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value) for key, value in vars(record).items() if key not in _STANDARD_ATTRS
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


_configured: dict[str, logging.Logger] = {}
_shared_handler: Optional[logging.Handler] = None


def _handler() -> logging.Handler:
    global _shared_handler
    if _shared_handler is None:
        _shared_handler = logging.StreamHandler(sys.stderr)
        _shared_handler.setFormatter(NewEdenFormatter(json_output=get_settings().log_json))
    return _shared_handler


def get_logger(name: str) -> logging.Logger:
    """
    Return the configured logger for a module.

    The first call for a name attaches the shared handler and applies the
    configured level; later calls return the same logger untouched.
    """
    logger = _configured.get(name)
    if logger is None:
        logger = logging.getLogger(name)
        logger.setLevel(get_settings().log_level_int)
        logger.addHandler(_handler())
        logger.propagate = False
        _configured[name] = logger
    return logger


def set_log_level(level: int) -> None:
    """Apply `level` to every logger handed out by get_logger."""
    for logger in _configured.values():
        logger.setLevel(level)


def debug_enabled() -> bool:
    return get_settings().log_level_int <= logging.DEBUG


def reset_logging() -> None:
    """
    Return neweden loggers to stdlib defaults (for testing).

    Every neweden.* logger propagates again at NOTSET with the shared
    handler detached, so pytest's caplog sees their records. Loggers stay
    in the cache; the handler is rebuilt on next use.
    """
    global _shared_handler

    for name, logger in list(logging.Logger.manager.loggerDict.items()):
        if not isinstance(logger, logging.Logger):
            continue
        if name == LOGGER_PREFIX or name.startswith(LOGGER_PREFIX + "."):
            logger.propagate = True
            logger.setLevel(logging.NOTSET)
            if _shared_handler is not None:
                logger.removeHandler(_shared_handler)

    _shared_handler = None
