"""Box-Jenkins forecasting engine.

This package implements the AR, MA, ARMA, ARIMA, SARIMA and SARIMAX family
behind a single :class:`Model` class. Coefficients are estimated by
recursive least squares, so fitting is deterministic and needs no numerical
optimizer.

Example:
    >>> import numpy as np
    >>> from boxjenkins.timeseries import Model
    >>>
    >>> t = np.arange(300)
    >>> y = 10 + 0.05 * t + np.sin(2 * np.pi * t / 7) + np.random.randn(300)
    >>>
    >>> model = Model.sarima((1, 1, 1), (1, 1, 0, 7))
    >>> forecast = model.forecast(y, h=14)
    >>> model.params()["ar.L1"]  # doctest: +SKIP

References:
    - Box & Jenkins (1976): Time Series Analysis: Forecasting and Control
    - Hannan & Rissanen (1982): "Recursive estimation of mixed
      autoregressive-moving average order"
"""

from __future__ import annotations

from .design import DesignLayout, Order, assemble_design, populate_lags
from .estimation import FitResult, recursive_least_squares
from .forecast import forecast_differenced
from .linalg import (
    cofactor_determinant,
    cofactor_inverse,
    invert,
    ridge_penalize,
    solve_gram,
    solve_normal_equations,
)
from .models import Model
from .utils import (
    create_lags,
    difference,
    difference_all,
    integrate,
    integrate_all,
)

__all__ = [
    # Model
    "Model",
    "Order",
    "FitResult",
    # Design matrix
    "DesignLayout",
    "assemble_design",
    "populate_lags",
    # Estimation and forecasting
    "recursive_least_squares",
    "forecast_differenced",
    # Linear algebra
    "solve_normal_equations",
    "solve_gram",
    "invert",
    "ridge_penalize",
    "cofactor_determinant",
    "cofactor_inverse",
    # Transforms
    "difference",
    "difference_all",
    "integrate",
    "integrate_all",
    "create_lags",
]
