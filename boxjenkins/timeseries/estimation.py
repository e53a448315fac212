"""Recursive least-squares estimation for models with moving-average terms.

MA columns hold past residuals, and residuals only exist once a model has
been fitted, so a single global regression is impossible. The estimator walks
the design matrix forward instead:

1. Start at row ``k`` (the column count), the first row with ``k`` rows
   before it.
2. For each row ``i``, fill its MA and seasonal-MA columns from residuals
   already computed, solve OLS on rows ``0..i-1``, and store the one-step
   ahead error ``y[i] - x[i] @ beta`` as residual ``i``.
3. Solve once more on every row; those coefficients are the fit.

Rows are final once their MA columns are filled, so the normal matrix is
accumulated one row at a time instead of being rebuilt at every step.

References:
    - Hannan & Rissanen (1982): "Recursive estimation of mixed
      autoregressive-moving average order"
    - Box & Jenkins (1976): Time Series Analysis: Forecasting and Control,
      ch. 7 (conditional least squares)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from ..errors import ConfigurationError
from ..logging import get_logger
from .design import DesignLayout, populate_lags
from .linalg import (
    DEFAULT_MAX_CONDITION,
    DEFAULT_RIDGE,
    solve_gram,
    solve_normal_equations,
)

logger = get_logger(__name__)


@dataclass
class FitResult:
    """Result of fitting a model.

    Attributes:
        coefficients: One weight per design column, shape (k,).
        residuals: One-step-ahead residuals in differenced-series
            coordinates, shape (n_lost + nobs,). Entries before the first
            recursive row are zero.
        labels: Column names matching ``coefficients``.
        nobs: Number of design rows used in the final solve.
        start: First design row that received a residual.
    """

    coefficients: np.ndarray
    residuals: np.ndarray
    labels: List[str] = field(default_factory=list)
    nobs: int = 0
    start: int = 0

    def params(self) -> dict:
        """Coefficients keyed by column label."""
        return dict(zip(self.labels, (float(c) for c in self.coefficients)))


def recursive_least_squares(
    target: np.ndarray,
    design: np.ndarray,
    layout: DesignLayout,
    ridge: float = DEFAULT_RIDGE,
    max_condition: float = DEFAULT_MAX_CONDITION,
) -> FitResult:
    """Estimate coefficients and residuals over an expanding window.

    Args:
        target: Differenced series aligned with ``design``, shape (n,).
        design: Design matrix from :func:`assemble_design`, shape (n, k).
            Its MA columns are filled in place.
        layout: Column layout used to build ``design``.
        ridge: Relative ridge penalty for singular normal matrices.
        max_condition: Condition number above which a normal matrix is
            treated as singular.

    Returns:
        FitResult with the full-window coefficients and the residual series.

    Raises:
        ConfigurationError: If ``design`` has fewer rows than columns.
        SingularMatrixError: If a normal matrix stays singular after the
            ridge retry.
    """
    target = np.asarray(target, dtype=float)
    n_rows, n_cols = design.shape
    if len(target) != n_rows:
        raise ConfigurationError(
            f"target has {len(target)} entries, design has {n_rows} rows"
        )
    if n_rows < n_cols:
        raise ConfigurationError(
            "Series used for fitting is not long enough based on model "
            f"specification: {n_rows} usable row(s) for {n_cols} coefficient(s)"
        )

    offset = layout.n_lost
    seasonal_s = layout.seasonal_order.s
    residuals = np.zeros(offset + n_rows)

    start = n_cols
    gram = design[:start].T @ design[:start]
    moment = design[:start].T @ target[:start]

    for i in range(start, n_rows):
        populate_lags(design, i, residuals, layout.ma, 1, offset)
        populate_lags(design, i, residuals, layout.seasonal_ma, seasonal_s, offset)

        beta = solve_gram(gram, moment, ridge=ridge, max_condition=max_condition)
        residuals[offset + i] = target[i] - design[i] @ beta

        gram += np.outer(design[i], design[i])
        moment += design[i] * target[i]

    coefficients = solve_normal_equations(
        design, target, ridge=ridge, max_condition=max_condition
    )
    logger.debug(
        "Recursive fit: %d row(s), %d column(s), %d one-step residual(s)",
        n_rows,
        n_cols,
        n_rows - start,
    )

    return FitResult(
        coefficients=coefficients,
        residuals=residuals,
        labels=layout.labels,
        nobs=n_rows,
        start=start,
    )
