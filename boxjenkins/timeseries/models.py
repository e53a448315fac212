"""SARIMAX model facade.

:class:`Model` covers the whole Box-Jenkins family with one class: AR, MA,
ARMA, ARIMA, SARIMA and their exogenous-regressor variants differ only in
which orders are non-zero. Coefficients are estimated with the recursive
least-squares procedure in :mod:`boxjenkins.timeseries.estimation`.

When the model has MA terms, future residuals are not zero by assumption.
They come from an error sub-model, a second :class:`Model` with the same AR
structure and no differencing or MA terms, fitted on the parent's residuals.

Example:
    >>> import numpy as np
    >>> from boxjenkins.timeseries import Model
    >>>
    >>> y = np.full(200, 100.0)
    >>> y[0], y[1] = 150.0, 50.0
    >>> for t in range(2, 200):
    ...     y[t] += 0.5 * y[t - 1] - 0.25 * y[t - 2]
    >>>
    >>> model = Model.autoregressive(2)
    >>> res = model.fit(y[:180])
    >>> np.round(res.coefficients, 2)
    array([100.  ,   0.5 ,  -0.25])
    >>> forecast = model.predict(20)

References:
    - Box & Jenkins (1976): Time Series Analysis: Forecasting and Control
    - Hyndman & Athanasopoulos (2021): Forecasting: Principles and Practice,
      ch. 9 (ARIMA models)
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import numpy as np

from ..diagnostics import assert_design_shape, assert_finite, is_debug_enabled
from ..errors import ConfigurationError, NotFittedError
from ..logging import get_logger
from .design import DesignLayout, Order, assemble_design
from .estimation import FitResult, recursive_least_squares
from .forecast import forecast_differenced
from .linalg import DEFAULT_MAX_CONDITION, DEFAULT_RIDGE
from .utils import difference_all, integrate_all

logger = get_logger(__name__)


def _as_series(y: np.ndarray) -> np.ndarray:
    y = np.asarray(y, dtype=float)
    if y.ndim != 1:
        raise ConfigurationError(f"y must be 1D array, got shape {y.shape}")
    if not np.all(np.isfinite(y)):
        raise ConfigurationError("y contains non-finite values")
    return y.copy()


def _as_table(x: Optional[np.ndarray], n_rows: int, name: str) -> np.ndarray:
    """Coerce an optional exogenous input to an (n_rows, k) float table."""
    if x is None:
        return np.zeros((n_rows, 0))

    x = np.asarray(x, dtype=float)
    if x.ndim == 1:
        x = x.reshape(-1, 1)
    if x.ndim != 2:
        raise ConfigurationError(f"{name} must be 1D or 2D array, got shape {x.shape}")
    if x.shape[0] != n_rows:
        raise ConfigurationError(
            f"{name} is length: {x.shape[0]}. It should be length: {n_rows}."
        )
    if not np.all(np.isfinite(x)):
        raise ConfigurationError(f"{name} contains non-finite values")
    return x.copy()


class Model:
    """Seasonal ARIMA model with optional exogenous regressors.

    Args:
        order: Non-seasonal order ``(p, d, q)``.
        seasonal_order: Seasonal order ``(P, D, Q, s)``. ``s`` must not be 1;
            ``(0, 0, 0, 0)`` means no seasonal component.
        ridge: Relative ridge penalty applied when a normal matrix is
            singular.
        max_condition: Condition number above which a normal matrix is
            treated as singular.

    Raises:
        ConfigurationError: If an order term is negative, ``s == 1``, or
            seasonal terms are given with ``s == 0``.

    Example:
        >>> model = Model.sarima((1, 0, 1), (1, 1, 1, 7))
        >>> model.fit(y)
        >>> forecast = model.predict(10)
    """

    def __init__(
        self,
        order: Tuple[int, int, int] = (0, 0, 0),
        seasonal_order: Tuple[int, int, int, int] = (0, 0, 0, 0),
        ridge: float = DEFAULT_RIDGE,
        max_condition: float = DEFAULT_MAX_CONDITION,
    ) -> None:
        if len(order) != 3:
            raise ConfigurationError(f"order must be (p, d, q), got {order}")
        if len(seasonal_order) != 4:
            raise ConfigurationError(
                f"seasonal_order must be (P, D, Q, s), got {seasonal_order}"
            )
        if ridge < 0:
            raise ConfigurationError(f"ridge must be >= 0, got {ridge}")

        self.order = Order.non_seasonal(*order)
        self.seasonal_order = Order.seasonal(*seasonal_order)
        self.ridge = ridge
        self.max_condition = max_condition

        self.error_submodel: Optional[Model] = None
        if self.order.q + self.seasonal_order.q > 0:
            self.error_submodel = Model(
                (self.order.p, 0, 0),
                (self.seasonal_order.p, 0, 0, self.seasonal_order.s),
                ridge=ridge,
                max_condition=max_condition,
            )

        self.series_original: Optional[np.ndarray] = None
        self.exog_original: Optional[np.ndarray] = None
        self.series_fit: Optional[np.ndarray] = None
        self.exog_fit: Optional[np.ndarray] = None
        self.design_fit: Optional[np.ndarray] = None
        self.coefficients: Optional[np.ndarray] = None
        self.residuals_fit: Optional[np.ndarray] = None

    @classmethod
    def sarima(
        cls,
        order: Tuple[int, int, int],
        seasonal_order: Tuple[int, int, int, int] = (0, 0, 0, 0),
        **kwargs,
    ) -> "Model":
        """Create a SARIMA(p, d, q)(P, D, Q, s) model."""
        return cls(order, seasonal_order, **kwargs)

    @classmethod
    def arima(cls, p: int, d: int, q: int, **kwargs) -> "Model":
        """Create an ARIMA(p, d, q) model."""
        return cls.sarima((p, d, q), (0, 0, 0, 0), **kwargs)

    @classmethod
    def arma(cls, p: int, q: int, **kwargs) -> "Model":
        """Create an ARMA(p, q) model."""
        return cls.sarima((p, 0, q), (0, 0, 0, 0), **kwargs)

    @classmethod
    def autoregressive(cls, p: int, **kwargs) -> "Model":
        """Create an AR(p) model."""
        return cls.sarima((p, 0, 0), (0, 0, 0, 0), **kwargs)

    @classmethod
    def moving_average(cls, q: int, **kwargs) -> "Model":
        """Create an MA(q) model. ``q = 0`` gives a pure regression on exog."""
        return cls.sarima((0, 0, q), (0, 0, 0, 0), **kwargs)

    def __repr__(self) -> str:
        o, so = self.order, self.seasonal_order
        return (
            f"{type(self).__name__}(order=({o.p}, {o.d}, {o.q}), "
            f"seasonal_order=({so.p}, {so.d}, {so.q}, {so.s}))"
        )

    @property
    def is_fitted(self) -> bool:
        return self.coefficients is not None

    @property
    def n_exog(self) -> Optional[int]:
        """Number of exogenous columns seen at fit time, None before fit."""
        if self.exog_original is None:
            return None
        return self.exog_original.shape[1]

    @property
    def layout(self) -> DesignLayout:
        return DesignLayout(self.order, self.seasonal_order, self.n_exog or 0)

    @property
    def coefficient_labels(self) -> List[str]:
        return self.layout.labels

    def params(self) -> Dict[str, float]:
        """Fitted coefficients keyed by column label.

        Raises:
            NotFittedError: If the model has not been fitted.
        """
        self._check_fitted("params")
        return dict(zip(self.coefficient_labels, (float(c) for c in self.coefficients)))

    def _check_fitted(self, operation: str) -> None:
        if not self.is_fitted:
            raise NotFittedError(f"Model must be fit before {operation}")

    def _n_differenced(self) -> int:
        return self.order.d + self.seasonal_order.d * self.seasonal_order.s

    def _difference(self, x: np.ndarray) -> np.ndarray:
        return difference_all(
            x, self.order.d, self.seasonal_order.d, self.seasonal_order.s
        )

    def _set_fitted_state(
        self,
        y: np.ndarray,
        x: Optional[np.ndarray],
        design: np.ndarray,
        coefficients: np.ndarray,
        residuals: np.ndarray,
    ) -> None:
        """Install fitted state; the differenced arrays are re-derived from ``y`` and ``x``."""
        y = _as_series(y)
        x = _as_table(x, len(y), "x")
        layout = DesignLayout(self.order, self.seasonal_order, x.shape[1])
        y_diff = self._difference(y)

        design = np.asarray(design, dtype=float).reshape(-1, layout.n_columns)
        coefficients = np.asarray(coefficients, dtype=float)
        residuals = np.asarray(residuals, dtype=float)
        if design.shape[0] != len(y_diff) - layout.n_lost:
            raise ConfigurationError(
                f"design has {design.shape[0]} rows, expected "
                f"{len(y_diff) - layout.n_lost}"
            )
        if coefficients.shape != (layout.n_columns,):
            raise ConfigurationError(
                f"coefficients have shape {coefficients.shape}, "
                f"expected ({layout.n_columns},)"
            )
        if residuals.shape != y_diff.shape:
            raise ConfigurationError(
                f"residuals have shape {residuals.shape}, expected {y_diff.shape}"
            )

        self.series_original = y
        self.exog_original = x
        self.series_fit = y_diff
        self.exog_fit = self._difference(x)
        self.design_fit = design.copy()
        self.coefficients = coefficients.copy()
        self.residuals_fit = residuals.copy()

    def fit(self, y: np.ndarray, x: Optional[np.ndarray] = None) -> FitResult:
        """Fit the model to a series.

        Calling ``fit`` again replaces all fitted state.

        Args:
            y: 1D series, shape (n,).
            x: Optional exogenous regressors, shape (n, k). Omitted means no
                regressors.

        Returns:
            FitResult with coefficients and in-sample residuals.

        Raises:
            ConfigurationError: If the inputs are malformed or the series is
                too short for the model order.
            SingularMatrixError: If the regression cannot be solved.
        """
        y = _as_series(y)
        x = _as_table(x, len(y), "x")

        if self._n_differenced() >= len(y):
            raise ConfigurationError(
                "Series used for fitting is not long enough based on model "
                f"specification: {len(y)} observation(s), "
                f"{self._n_differenced()} lost to differencing"
            )

        y_diff = self._difference(y)
        x_diff = self._difference(x)
        layout = DesignLayout(self.order, self.seasonal_order, x.shape[1])

        design, target = assemble_design(y_diff, x_diff, layout)
        logger.debug(
            "%r: design matrix %d x %d (%s)",
            self,
            design.shape[0],
            design.shape[1],
            ", ".join(layout.labels),
        )

        result = recursive_least_squares(
            target,
            design,
            layout,
            ridge=self.ridge,
            max_condition=self.max_condition,
        )

        if is_debug_enabled():
            assert_design_shape(design, len(y_diff) - layout.n_lost, layout.n_columns)
            assert_finite(result.coefficients, "coefficients")
            assert_finite(result.residuals, "residuals")

        if self.error_submodel is not None:
            logger.debug("%r: fitting error sub-model %r", self, self.error_submodel)
            self.error_submodel.fit(result.residuals, x_diff)

        self._set_fitted_state(y, x, design, result.coefficients, result.residuals)

        logger.info(
            "%r fitted on %d observation(s) (%d design rows, %d columns)",
            self,
            len(y),
            result.nobs,
            layout.n_columns,
        )
        return result

    def predict(self, h: int, x: Optional[np.ndarray] = None) -> np.ndarray:
        """Forecast ``h`` steps past the end of the fitted series.

        Args:
            h: Horizon. ``h = 0`` returns an empty array.
            x: Future exogenous regressors, shape (h, k), with the same
                columns as at fit time. May be omitted when the model was
                fitted without regressors.

        Returns:
            Forecasts on the original scale, shape (h,).

        Raises:
            NotFittedError: If the model has not been fitted.
            ConfigurationError: If ``h`` is negative or ``x`` does not have
                ``h`` rows and the fit-time column count.
        """
        self._check_fitted("predict")
        if isinstance(h, bool) or not isinstance(h, (int, np.integer)) or h < 0:
            raise ConfigurationError(f"h must be a non-negative integer, got {h!r}")
        h = int(h)

        x = _as_table(x, h, "x")
        if x.shape[1] != self.n_exog:
            raise ConfigurationError(
                f"x has {x.shape[1]} columns. It should have {self.n_exog}."
            )
        if h == 0:
            return np.zeros(0)

        # Future regressors are differenced together with the fit-time rows.
        x_future = self._difference(np.vstack([self.exog_original, x]))[-h:]

        if self.error_submodel is not None:
            future_residuals = self.error_submodel.predict(h, x_future)
        else:
            future_residuals = np.zeros(h)

        y_diff = forecast_differenced(
            self.series_fit,
            self.residuals_fit,
            self.design_fit,
            self.coefficients,
            self.layout,
            x_future,
            future_residuals,
        )
        forecast = integrate_all(
            y_diff,
            self.series_original,
            self.order.d,
            self.seasonal_order.d,
            self.seasonal_order.s,
        )

        if is_debug_enabled():
            assert_finite(forecast, "forecast")

        logger.info("%r predicted %d step(s)", self, h)
        return forecast

    def forecast(
        self,
        y: np.ndarray,
        h: int,
        x: Optional[np.ndarray] = None,
        x_future: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Fit on ``y`` (and ``x``), then forecast ``h`` steps.

        Args:
            y: 1D series, shape (n,).
            h: Horizon.
            x: Optional exogenous regressors for the fit, shape (n, k).
            x_future: Exogenous regressors for the horizon, shape (h, k).

        Returns:
            Forecasts on the original scale, shape (h,).
        """
        self.fit(y, x)
        return self.predict(h, x_future)

    fit_predict = forecast
