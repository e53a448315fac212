"""Process-wide switch for the engine's extra invariant checks.

With debug mode on, :meth:`Model.fit` and :meth:`Model.predict` verify
design-matrix shapes and the finiteness of coefficients, residuals and
forecasts, and the normal-equation solver verifies symmetry before it
factorizes. The checks cost a few extra passes over each array, so they are
off unless ``BOXJENKINS_DEBUG`` is set to a truthy value (``1``, ``true``,
``yes``, ``on``) or code turns them on.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, Optional

_DEBUG_ENV_VAR = "BOXJENKINS_DEBUG"
_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _flag_from_env(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in _TRUTHY


_debug_enabled: bool = _flag_from_env(os.environ.get(_DEBUG_ENV_VAR))


def is_debug_enabled() -> bool:
    """Return True while the invariant checks are active."""
    return _debug_enabled


def set_debug_enabled(enabled: bool) -> None:
    """
    Turn the invariant checks on or off for the whole process.

    Parameters
    ----------
    enabled:
        New state. Overrides whatever ``BOXJENKINS_DEBUG`` said at import.
    """
    global _debug_enabled
    _debug_enabled = bool(enabled)


@contextmanager
def debug_context(enabled: bool = True) -> Iterator[None]:
    """
    Run a block with the invariant checks switched to ``enabled``.

    The previous state is restored on exit, including when the block raises.

    Example
    -------
    >>> with debug_context():
    ...     model.fit(y)
    """
    previous = is_debug_enabled()
    set_debug_enabled(enabled)
    try:
        yield
    finally:
        set_debug_enabled(previous)
