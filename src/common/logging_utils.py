"""Centralized logging configuration and structured logging helpers."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

from constants import Constants

_installed_handlers: List[logging.Handler] = []


def _level_from_env(default: int = logging.INFO) -> int:
    name = os.environ.get(Constants.ENV_LOG_LEVEL, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def configure_logging(log_file: Optional[str] = None, quiet: bool = False) -> None:
    """Configure the root logger.

    The level comes from the ALLOWDEPS_LOG_LEVEL environment variable
    (INFO when unset). DEBUG switches to a verbose format.

    Args:
        log_file: also write log records to this file.
        quiet: do not log to the console at all.
    """
    level = _level_from_env()
    fmt = Constants.DEBUG_LOG_FORMAT if level <= logging.DEBUG else Constants.LOG_FORMAT

    root = logging.getLogger()
    # Only replace handlers installed by a previous call
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)

    if not quiet:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter(fmt))
        _installed_handlers.append(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(Constants.DEBUG_LOG_FORMAT))
        _installed_handlers.append(file_handler)

    for handler in _installed_handlers:
        root.addHandler(handler)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records.

    None values are dropped so formatters only see populated fields.
    """
    return {key: value for key, value in fields.items() if value is not None}
