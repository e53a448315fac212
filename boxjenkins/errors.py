"""Exception hierarchy for boxjenkins.

Each exception also derives from the built-in family it belongs to, so code
that already catches ``ValueError``, ``RuntimeError`` or
``numpy.linalg.LinAlgError`` keeps working.
"""

from __future__ import annotations

import numpy as np


class BoxJenkinsError(Exception):
    """Base class for all errors raised by boxjenkins."""


class ConfigurationError(BoxJenkinsError, ValueError):
    """Invalid model order, input shape, or insufficient data for the order."""


class SingularMatrixError(BoxJenkinsError, np.linalg.LinAlgError):
    """Normal matrix could not be inverted, even after the ridge retry."""


class NotFittedError(BoxJenkinsError, RuntimeError):
    """Operation requires a fitted model."""


__all__ = [
    "BoxJenkinsError",
    "ConfigurationError",
    "SingularMatrixError",
    "NotFittedError",
]
