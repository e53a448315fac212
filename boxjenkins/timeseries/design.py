"""Model orders and design-matrix assembly.

Every design matrix built for a given pair of orders has the same column
blocks, in this order::

    intercept | ma (q) | seasonal ma (Q) | ar (p) | seasonal ar (P) | exog (k)

:class:`DesignLayout` owns that bookkeeping so the estimator and the
forecaster address identical column ranges. Design rows line up with
``series[n_lost:]`` where ``n_lost = max(p, P * s)`` is the number of leading
observations needed to fill every AR lag.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from ..errors import ConfigurationError
from .utils import create_lags, lag_count


@dataclass(frozen=True)
class Order:
    """A (p, d, q, s) model order.

    Attributes:
        p: Autoregressive terms.
        d: Differencing degree.
        q: Moving-average terms.
        s: Periodicity. 1 for the non-seasonal order; the seasonal period
            (or 0 for "no seasonality") for the seasonal order.
    """

    p: int = 0
    d: int = 0
    q: int = 0
    s: int = 1

    def __post_init__(self) -> None:
        for name in ("p", "d", "q", "s"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ConfigurationError(
                    f"{name} must be an integer, got {type(value).__name__}"
                )
            if value < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {value}")
            object.__setattr__(self, name, int(value))

    @classmethod
    def non_seasonal(cls, p: int = 0, d: int = 0, q: int = 0) -> "Order":
        """Order with periodicity fixed at 1."""
        return cls(p, d, q, 1)

    @classmethod
    def seasonal(cls, p: int = 0, d: int = 0, q: int = 0, s: int = 0) -> "Order":
        """Seasonal order with period ``s``.

        Raises:
            ConfigurationError: If ``s == 1``, or if ``s == 0`` while any
                seasonal term is requested.
        """
        if s == 1:
            raise ConfigurationError(
                "It doesn't make sense for the seasonal periodicity (s) to be set to 1"
            )
        if s == 0 and (p or d or q):
            raise ConfigurationError(
                f"Seasonal terms (P={p}, D={d}, Q={q}) need a periodicity s > 1"
            )
        return cls(p, d, q, s)

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.p, self.d, self.q, self.s)


@dataclass(frozen=True)
class DesignLayout:
    """Column bookkeeping for the design matrix of an order pair.

    Attributes:
        order: Non-seasonal order (s == 1).
        seasonal_order: Seasonal order.
        n_exog: Number of exogenous regressor columns.
    """

    order: Order
    seasonal_order: Order
    n_exog: int = 0

    @property
    def ma(self) -> slice:
        return slice(1, 1 + self.order.q)

    @property
    def seasonal_ma(self) -> slice:
        start = self.ma.stop
        return slice(start, start + self.seasonal_order.q)

    @property
    def ar(self) -> slice:
        start = self.seasonal_ma.stop
        return slice(start, start + self.order.p)

    @property
    def seasonal_ar(self) -> slice:
        start = self.ar.stop
        return slice(start, start + self.seasonal_order.p)

    @property
    def exog(self) -> slice:
        start = self.seasonal_ar.stop
        return slice(start, start + self.n_exog)

    @property
    def n_columns(self) -> int:
        return self.exog.stop

    @property
    def n_lost(self) -> int:
        """Leading observations consumed to give every row a full AR history."""
        return max(
            lag_count(self.order.p, 1),
            lag_count(self.seasonal_order.p, self.seasonal_order.s),
        )

    @property
    def labels(self) -> List[str]:
        """Column names, statsmodels style."""
        s = self.seasonal_order.s
        names = ["intercept"]
        names += [f"ma.L{i}" for i in range(1, self.order.q + 1)]
        names += [f"ma.S.L{i * s}" for i in range(1, self.seasonal_order.q + 1)]
        names += [f"ar.L{i}" for i in range(1, self.order.p + 1)]
        names += [f"ar.S.L{i * s}" for i in range(1, self.seasonal_order.p + 1)]
        names += [f"x{i}" for i in range(1, self.n_exog + 1)]
        return names

    def blank_rows(self, n_rows: int) -> np.ndarray:
        """Empty design rows: intercept set, every other column zero."""
        rows = np.zeros((n_rows, self.n_columns))
        rows[:, 0] = 1.0
        return rows


def populate_lags(
    design: np.ndarray,
    row: int,
    source: np.ndarray,
    columns: slice,
    periodicity: int = 1,
    offset: int = 0,
) -> None:
    """Fill one lag block of a design row from a source series, in place.

    Design row ``row`` corresponds to ``source[row + offset]``; column
    ``columns.start + j`` receives ``source[row + offset - (j + 1) *
    periodicity]``. Lookups before the start of ``source`` leave the cell
    unchanged.

    Args:
        design: Design matrix, modified in place.
        row: Row to fill.
        source: Series the lags are read from (endogenous values or
            residuals), in series coordinates.
        columns: Column block to fill.
        periodicity: Spacing between lags.
        offset: Series index of design row 0.
    """
    index = row + offset
    for j, col in enumerate(range(columns.start, columns.stop)):
        loc = index - (j + 1) * periodicity
        if loc >= 0:
            design[row, col] = source[loc]


def assemble_design(
    series: np.ndarray, exog: np.ndarray, layout: DesignLayout
) -> Tuple[np.ndarray, np.ndarray]:
    """Build the design matrix and target for a differenced series.

    MA and seasonal-MA columns start at zero; the estimator fills them as
    residuals become available.

    Args:
        series: Differenced endogenous series, shape (n,).
        exog: Differenced exogenous table, shape (n, n_exog).
        layout: Column layout for the model's orders.

    Returns:
        Tuple of (design, target) with shapes (n - n_lost, n_columns) and
        (n - n_lost,).

    Raises:
        ConfigurationError: If ``exog`` does not match ``series`` or the
            series is too short to leave any rows.
    """
    series = np.asarray(series, dtype=float)
    exog = np.asarray(exog, dtype=float)
    if exog.shape != (len(series), layout.n_exog):
        raise ConfigurationError(
            f"exog has shape {exog.shape}, expected ({len(series)}, {layout.n_exog})"
        )

    n_lost = layout.n_lost
    n_rows = len(series) - n_lost
    if n_rows <= 0:
        raise ConfigurationError(
            "Series used for fitting is not long enough based on model "
            f"specification: {len(series)} observation(s) after differencing, "
            f"{n_lost} needed for lags"
        )

    ar_lags = create_lags(series, layout.order.p, 1)
    seasonal_lags = create_lags(
        series, layout.seasonal_order.p, layout.seasonal_order.s
    )

    design = layout.blank_rows(n_rows)
    design[:, layout.ar] = ar_lags[len(ar_lags) - n_rows :]
    design[:, layout.seasonal_ar] = seasonal_lags[len(seasonal_lags) - n_rows :]
    design[:, layout.exog] = exog[n_lost:]

    return design, series[n_lost:].copy()
