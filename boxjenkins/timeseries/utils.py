"""Array transforms used by the Box-Jenkins engine.

This module holds the pure array operations the estimator is built on:
ordinary and seasonal differencing, its exact inverse (integration), and
lag-table construction. None of these functions know anything about model
coefficients.

Differencing always runs in the same order: ``d`` ordinary passes first, then
``D`` seasonal passes at period ``s``. Integration undoes the seasonal passes
first and the ordinary passes last.

References:
    - Box & Jenkins (1976): Time Series Analysis: Forecasting and Control
    - Hyndman & Athanasopoulos (2021): Forecasting: Principles and Practice,
      ch. 9.1 (stationarity and differencing)
"""

from __future__ import annotations

import numpy as np


def difference(x: np.ndarray, d: int = 1, periodicity: int = 1) -> np.ndarray:
    """Apply ``d`` differencing passes at a given periodicity.

    Each pass computes ``x'[i] = x[i] - x[i - periodicity]`` and shortens the
    series by ``periodicity``. Two-dimensional inputs are differenced along
    the first axis, one column per regressor.

    Args:
        x: Series of shape (n,) or table of shape (n, k).
        d: Number of passes. Must be >= 0. ``d = 0`` returns a copy.
        periodicity: Lag of each pass; 1 for ordinary differencing, the
            seasonal period otherwise. Must be >= 1 when ``d > 0``.

    Returns:
        Differenced array with ``n - d * periodicity`` rows.

    Raises:
        ValueError: If the input is not 1D/2D, ``d`` or ``periodicity`` is
            invalid, or ``d * periodicity >= n``.

    Example:
        >>> difference(np.array([1.0, 2.0, 4.0, 7.0, 11.0]), d=2)
        array([1., 1., 1.])
    """
    x = np.asarray(x, dtype=float)
    if x.ndim not in (1, 2):
        raise ValueError(f"x must be 1D or 2D array, got shape {x.shape}")
    if d < 0:
        raise ValueError(f"d must be >= 0, got {d}")

    result = x.copy()
    if d == 0:
        return result

    if periodicity < 1:
        raise ValueError(f"periodicity must be >= 1, got {periodicity}")
    if d * periodicity >= len(result):
        raise ValueError(
            f"Cannot difference {len(result)} observations {d} time(s) "
            f"at periodicity {periodicity}"
        )

    for _ in range(d):
        result = result[periodicity:] - result[:-periodicity]
    return result


def difference_all(
    x: np.ndarray, d: int = 0, seasonal_d: int = 0, periodicity: int = 0
) -> np.ndarray:
    """Apply ordinary then seasonal differencing.

    Args:
        x: Series of shape (n,) or table of shape (n, k).
        d: Number of ordinary (lag 1) passes.
        seasonal_d: Number of seasonal passes.
        periodicity: Seasonal period. Ignored when ``seasonal_d == 0``.

    Returns:
        Array with ``n - d - seasonal_d * periodicity`` rows.
    """
    return difference(difference(x, d, 1), seasonal_d, periodicity)


def integrate(
    diffed: np.ndarray, last_known: np.ndarray, periodicity: int = 1
) -> np.ndarray:
    """Undo one differencing pass for values that follow a known series.

    Reconstructs ``y[i] = y'[i] + y[i - periodicity]`` where the first
    ``periodicity`` lookups fall into ``last_known`` and later ones use the
    values reconstructed so far.

    Args:
        diffed: New values on the differenced scale, shape (h,).
        last_known: The series at the pre-differenced level, ending right
            before ``diffed`` starts. Only its last ``periodicity`` values
            are used.
        periodicity: Lag of the pass being undone. Must be >= 1.

    Returns:
        Reconstructed values at the pre-differenced level, shape (h,).

    Raises:
        ValueError: If ``periodicity < 1`` or ``last_known`` is shorter than
            ``periodicity``.

    Example:
        >>> integrate(np.array([1.0, 1.0]), np.array([5.0, 6.0]))
        array([7., 8.])
    """
    diffed = np.asarray(diffed, dtype=float)
    last_known = np.asarray(last_known, dtype=float)
    if periodicity < 1:
        raise ValueError(f"periodicity must be >= 1, got {periodicity}")
    if len(last_known) < periodicity:
        raise ValueError(
            f"Need at least {periodicity} known value(s) to integrate, "
            f"got {len(last_known)}"
        )

    levels = np.concatenate([last_known[len(last_known) - periodicity :], diffed])
    for i in range(periodicity, len(levels)):
        levels[i] += levels[i - periodicity]
    return levels[periodicity:]


def integrate_all(
    diffed: np.ndarray,
    original: np.ndarray,
    d: int = 0,
    seasonal_d: int = 0,
    periodicity: int = 0,
) -> np.ndarray:
    """Bring values that continue a differenced series back to the original scale.

    Seasonal passes are undone first, from the most differenced level down,
    then the ordinary passes. Each pass seeds itself from ``original``
    re-differenced to the matching intermediate level.

    Args:
        diffed: Values continuing ``difference_all(original, d, seasonal_d,
            periodicity)``, shape (h,).
        original: The undifferenced series the values continue.
        d: Ordinary differencing degree that was applied.
        seasonal_d: Seasonal differencing degree that was applied.
        periodicity: Seasonal period.

    Returns:
        Values on the scale of ``original``, shape (h,).
    """
    levels = np.asarray(diffed, dtype=float).copy()

    for level in reversed(range(seasonal_d)):
        seed = difference_all(original, d, level, periodicity)
        levels = integrate(levels, seed, periodicity)

    for level in reversed(range(d)):
        seed = difference(original, level, 1)
        levels = integrate(levels, seed, 1)

    return levels


def lag_count(p: int, periodicity: int) -> int:
    """Number of leading observations consumed by ``p`` lags at a periodicity."""
    return p * periodicity


def create_lags(x: np.ndarray, p: int, periodicity: int = 1) -> np.ndarray:
    """Build a table of ``p`` lagged copies of a series.

    Row ``r`` of the result lines up with ``x[r + p * periodicity]``, and
    column ``j`` holds the value ``(j + 1) * periodicity`` steps before it,
    so the nearest lag comes first.

    Args:
        x: 1D series, shape (n,).
        p: Number of lags. ``p = 0`` yields a table with zero columns.
        periodicity: Spacing between lags (1 for ordinary AR terms, the
            seasonal period for seasonal AR terms).

    Returns:
        Lag table of shape (n - p * periodicity, p).

    Raises:
        ValueError: If ``x`` is not 1D, ``p < 0``, ``periodicity < 1`` with
            ``p > 0``, or the series is shorter than ``p * periodicity``.

    Example:
        >>> create_lags(np.arange(6.0), p=2)
        array([[1., 0.],
               [2., 1.],
               [3., 2.],
               [4., 3.]])
    """
    x = np.asarray(x, dtype=float)
    if x.ndim != 1:
        raise ValueError(f"x must be 1D array, got shape {x.shape}")
    if p < 0:
        raise ValueError(f"p must be >= 0, got {p}")
    if p > 0 and periodicity < 1:
        raise ValueError(f"periodicity must be >= 1, got {periodicity}")

    n_rows = len(x) - lag_count(p, periodicity)
    if n_rows < 0:
        raise ValueError(
            f"Need at least p*periodicity={lag_count(p, periodicity)} "
            f"observations, got {len(x)}"
        )

    lags = np.zeros((n_rows, p))
    for j in range(p):
        start = periodicity * (p - j - 1)
        lags[:, j] = x[start : start + n_rows]
    return lags
