"""Diagnostics and debugging utilities for boxjenkins."""

from .core import (
    assert_design_shape,
    assert_finite,
    is_finite,
    is_symmetric,
)
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "is_finite",
    "assert_finite",
    "is_symmetric",
    "assert_design_shape",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
