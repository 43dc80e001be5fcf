"""Logging helpers for globroot.

Every module obtains its logger through :func:`get_logger` so that all
output lives under the ``globroot`` namespace and can be tuned at once.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

_DEFAULT_LEVEL = logging.WARNING
_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_loggers: dict[str, logging.Logger] = {}


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get or create a logger under the ``globroot`` namespace.

    Args:
        name: Logger name, typically ``__name__`` of the calling module

    Returns:
        Cached logger with a single stderr handler
    """
    if name is None:
        name = "globroot"
    logger_name = name if name.startswith("globroot") else f"globroot.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """
    Set the level of every globroot logger, existing and future.

    Args:
        level: ``logging`` level constant or its name ('DEBUG', 'INFO', ...)
    """
    global _DEFAULT_LEVEL

    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)

    _DEFAULT_LEVEL = level
