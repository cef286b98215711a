"""Logging utilities for moltransport.

Every module obtains its logger through `get_logger(__name__)`. Loggers are
namespaced under ``moltransport.``, write ``[LEVEL] name: message`` lines to
stderr and do not propagate to the root logger. The initial level is read
from the ``MOLTRANSPORT_LOG_LEVEL`` environment variable (default WARNING).
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO

_LOG_LEVEL_ENV_VAR = "MOLTRANSPORT_LOG_LEVEL"
_PACKAGE = "moltransport"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def _parse_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.strip().upper(), logging.WARNING)
    return int(level)


# Settings shared by every moltransport logger, current and future
_level = _parse_level(os.getenv(_LOG_LEVEL_ENV_VAR, "WARNING"))
_stream: Optional[TextIO] = None
_format = _DEFAULT_FORMAT

_registry: dict[str, logging.Logger] = {}


def _qualified(name: Optional[str]) -> str:
    if not name:
        return _PACKAGE
    if name == _PACKAGE or name.startswith(_PACKAGE + "."):
        return name
    return f"{_PACKAGE}.{name}"


def _attach_handler(logger: logging.Logger) -> None:
    handler = logging.StreamHandler(_stream or sys.stderr)
    handler.setLevel(_level)
    handler.setFormatter(logging.Formatter(_format))
    logger.addHandler(handler)
    logger.setLevel(_level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the cached logger for a module, creating it on first use.

    Args:
        name: Module name, typically `__name__`. Names outside the package
            are nested under ``moltransport.``; None gives the package logger.

    Returns:
        Logger with a single stderr handler, not propagating to the root.

    Example:
        >>> from moltransport.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("integrating %d unknowns", 3721)
    """
    qualified = _qualified(name)
    cached = _registry.get(qualified)
    if cached is not None:
        return cached

    logger = logging.getLogger(qualified)
    # a reloaded module must not stack a second handler
    if not logger.handlers:
        _attach_handler(logger)
        logger.propagate = False
    _registry[qualified] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Change the level of every moltransport logger and its handlers.

    Args:
        level: A ``logging`` constant or its name, e.g. ``"DEBUG"`` to see
            every rejected integrator step.
    """
    global _level
    _level = _parse_level(level)
    for logger in _registry.values():
        logger.setLevel(_level)
        for handler in logger.handlers:
            handler.setLevel(_level)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Replace level, format and output stream of all moltransport loggers.

    Loggers created afterwards pick up the same settings. Typically called
    once at application startup, e.g. from an example script that wants
    integrator progress on stdout.

    Args:
        level: Logging level or its name (default: WARNING).
        format_string: ``logging.Formatter`` format; None restores
            ``[LEVEL] name: message``.
        stream: Destination stream; None means stderr.
    """
    global _level, _stream, _format
    _level = _parse_level(level)
    _stream = stream
    _format = format_string or _DEFAULT_FORMAT

    for logger in _registry.values():
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        _attach_handler(logger)


__all__ = ["get_logger", "set_log_level", "configure_logging"]
