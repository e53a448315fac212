"""Logging utilities for boxjenkins.

Every engine module logs through a namespaced logger obtained from
:func:`get_logger`, so the whole package can be silenced or made verbose in
one call. Fitting reports at INFO (one line per fit or forecast); design
sizes, ridge retries and sub-model fits are reported at DEBUG.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

_ROOT_NAME = "boxjenkins"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

# Settings applied to loggers created after the last configure_logging call.
_level: int = logging.WARNING
_format: str = _DEFAULT_FORMAT
_stream: Optional[IO[str]] = None

_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def _qualify(name: Optional[str]) -> str:
    if name is None or name == _ROOT_NAME:
        return _ROOT_NAME
    if name.startswith(f"{_ROOT_NAME}."):
        return name
    return f"{_ROOT_NAME}.{name}"


def _install_handler(logger: logging.Logger) -> None:
    """Replace the logger's handlers with one stream handler at the current settings."""
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(_stream if _stream is not None else sys.stderr)
    handler.setLevel(_level)
    handler.setFormatter(logging.Formatter(_format))

    logger.addHandler(handler)
    logger.setLevel(_level)
    logger.propagate = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create the package logger for a module.

    Names outside the package namespace are prefixed with ``boxjenkins.``.
    Loggers are cached, so repeated calls never stack handlers.

    Args:
        name: Usually ``__name__`` of the calling module. None returns the
            package root logger.

    Returns:
        Configured logger instance.

    Example:
        >>> from boxjenkins.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("Fitting SARIMA(1,0,1)(1,1,1,7)")
    """
    qualified = _qualify(name)
    cached = _loggers.get(qualified)
    if cached is not None:
        return cached

    logger = logging.getLogger(qualified)
    if not logger.handlers:
        _install_handler(logger)

    _loggers[qualified] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Change the level of every boxjenkins logger, existing and future.

    Args:
        level: A ``logging`` level constant or its name (``"DEBUG"``,
            ``"INFO"``, ...).

    Example:
        >>> from boxjenkins.logging import set_log_level
        >>> set_log_level("DEBUG")
    """
    global _level
    _level = _coerce_level(level)

    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in logger.handlers:
            handler.setLevel(_level)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Set level, format and destination for all boxjenkins logging.

    Handlers of loggers created so far are replaced; loggers created later
    pick up the same settings. Typically called once at application startup.

    Args:
        level: Logging level (default: WARNING).
        format_string: Record format. Defaults to ``[LEVEL] name: message``.
        stream: Output stream (default: sys.stderr).

    Example:
        >>> import logging
        >>> from boxjenkins.logging import configure_logging
        >>> configure_logging(level=logging.INFO)
    """
    global _level, _format, _stream
    _level = _coerce_level(level)
    _format = format_string or _DEFAULT_FORMAT
    _stream = stream

    for logger in _loggers.values():
        _install_handler(logger)
