"""Forward recursion that extends a fitted, differenced series."""

from __future__ import annotations

import numpy as np

from .design import DesignLayout, populate_lags


def forecast_differenced(
    series_fit: np.ndarray,
    residuals: np.ndarray,
    design_fit: np.ndarray,
    coefficients: np.ndarray,
    layout: DesignLayout,
    future_exog: np.ndarray,
    future_residuals: np.ndarray,
) -> np.ndarray:
    """Predict ``h`` values on the differenced scale.

    The design matrix is extended by ``h`` rows holding the intercept and the
    future exogenous values. Each new row then gets its AR lags from the
    endogenous series (observed values followed by predictions made so far)
    and its MA lags from the residual series (in-sample residuals followed by
    ``future_residuals``), and its prediction is written back into the series
    before the next row is filled.

    Args:
        series_fit: Differenced series used for fitting, shape (n,).
        residuals: In-sample residuals in the same coordinates, shape (n,).
        design_fit: Design matrix from the fit, shape (n - n_lost, k).
        coefficients: Fitted coefficients, shape (k,).
        layout: Column layout of ``design_fit``.
        future_exog: Differenced exogenous rows for the horizon, shape
            (h, n_exog).
        future_residuals: Residuals expected over the horizon, shape (h,).

    Returns:
        Predictions on the differenced scale, shape (h,).
    """
    horizon = len(future_residuals)
    n_fit = len(series_fit)
    n_rows = design_fit.shape[0]
    offset = layout.n_lost
    seasonal_s = layout.seasonal_order.s

    series = np.concatenate([np.asarray(series_fit, dtype=float), np.zeros(horizon)])
    errors = np.concatenate(
        [np.asarray(residuals, dtype=float), np.asarray(future_residuals, dtype=float)]
    )

    future_rows = layout.blank_rows(horizon)
    future_rows[:, layout.exog] = future_exog
    design = np.vstack([design_fit, future_rows])

    for row in range(n_rows, n_rows + horizon):
        populate_lags(design, row, series, layout.ar, 1, offset)
        populate_lags(design, row, series, layout.seasonal_ar, seasonal_s, offset)
        populate_lags(design, row, errors, layout.ma, 1, offset)
        populate_lags(design, row, errors, layout.seasonal_ma, seasonal_s, offset)

        series[row + offset] = design[row] @ coefficients

    return series[n_fit:]
