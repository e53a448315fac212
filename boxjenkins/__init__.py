"""boxjenkins - AR/MA/ARIMA/SARIMAX forecasting by recursive least squares."""

__version__ = "0.1.0"

# Diagnostics
from .diagnostics import (
    assert_finite,
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

# Errors
from .errors import (
    BoxJenkinsError,
    ConfigurationError,
    NotFittedError,
    SingularMatrixError,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Forecasting engine
from .timeseries import (
    FitResult,
    Model,
    Order,
    create_lags,
    difference,
    difference_all,
    integrate,
    integrate_all,
    solve_normal_equations,
)

# Serialization
from .io import dump_json_model, json_to_model, load_json_model, model_to_json

__all__ = [
    "__version__",
    # Engine
    "Model",
    "Order",
    "FitResult",
    "difference",
    "difference_all",
    "integrate",
    "integrate_all",
    "create_lags",
    "solve_normal_equations",
    # Serialization
    "model_to_json",
    "json_to_model",
    "dump_json_model",
    "load_json_model",
    # Errors
    "BoxJenkinsError",
    "ConfigurationError",
    "SingularMatrixError",
    "NotFittedError",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
    # Diagnostics
    "assert_finite",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
