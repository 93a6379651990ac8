"""Logging helpers for schemadoc."""

from __future__ import annotations

import logging
import sys
from typing import Optional

ROOT_LOGGER_NAME = "schemadoc"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_handler: Optional[logging.Handler] = None


def setup_logging(level: str = "INFO", stream=None) -> logging.Logger:
    """Configure the schemadoc logger hierarchy.

    Each call replaces the single schemadoc handler, so it writes to the
    ``sys.stderr`` of the current invocation rather than the first one.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        stream: Stream for the handler (default: ``sys.stderr`` at call time)

    Returns:
        The root schemadoc logger
    """
    global _handler

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level.upper())

    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(_handler)
    root.propagate = False

    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger inside the schemadoc hierarchy.

    Args:
        name: Module name, usually ``__name__``

    Returns:
        Logger instance
    """
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
