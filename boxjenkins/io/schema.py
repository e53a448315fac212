"""JSON schema definition and validation for serialized models.

Schema Structure:
    {
        "version": "boxjenkins-json-1.0",
        "order": [p, d, q],
        "seasonal_order": [P, D, Q, s],
        "ridge": <float>,                        # optional
        "max_condition": <float>,                # optional
        "fitted": {                              # optional, absent if unfitted
            "series": [<float>, ...],            # original series, length n
            "n_exog": <integer>,
            "exog": [[<float>, ...], ...],       # n rows of n_exog values
            "design": [[<float>, ...], ...],     # fitted design matrix
            "coefficients": [<float>, ...],
            "residuals": [<float>, ...],
        },
        "error_submodel": { ... },               # same structure, nested
        "metadata": { ... }                      # optional
    }
"""

from __future__ import annotations

from typing import Any

SCHEMA_VERSION = "boxjenkins-json-1.0"


def json_model_schema() -> dict:
    """
    Return a structural description of the JSON model format.

    Returns
    -------
    dict
        Field definitions and constraints.
    """
    return {
        "version": {
            "type": "string",
            "description": f"Schema version identifier, '{SCHEMA_VERSION}'",
            "required": True,
        },
        "order": {
            "type": "list",
            "description": "Non-seasonal order [p, d, q]",
            "required": True,
            "items": {"type": "integer", "min": 0},
        },
        "seasonal_order": {
            "type": "list",
            "description": "Seasonal order [P, D, Q, s]; s must not be 1",
            "required": True,
            "items": {"type": "integer", "min": 0},
        },
        "ridge": {"type": "number", "required": False},
        "max_condition": {"type": "number", "required": False},
        "fitted": {
            "type": "dict",
            "description": "Fitted state; absent for unfitted models",
            "required": False,
        },
        "error_submodel": {
            "type": "dict",
            "description": "Nested model used to forecast residuals",
            "required": False,
        },
        "metadata": {"type": "dict", "required": False},
    }


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_int_list(obj: dict, key: str, length: int) -> None:
    value = obj[key]
    if not isinstance(value, list) or len(value) != length:
        raise ValueError(f"Field '{key}' must be a list of {length} integers.")
    for j, v in enumerate(value):
        if not _is_int(v) or v < 0:
            raise ValueError(f"Field '{key}'[{j}] must be a non-negative integer, got {v!r}.")


def _check_vector(fitted: dict, key: str) -> int:
    value = fitted.get(key)
    if not isinstance(value, list):
        raise ValueError(f"Fitted field '{key}' must be a list of numbers.")
    for j, v in enumerate(value):
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError(f"Fitted field '{key}'[{j}] must be a number, got {type(v).__name__}.")
    return len(value)


def _check_table(fitted: dict, key: str, n_cols: int) -> int:
    value = fitted.get(key)
    if not isinstance(value, list):
        raise ValueError(f"Fitted field '{key}' must be a list of rows.")
    for i, row in enumerate(value):
        if not isinstance(row, list) or len(row) != n_cols:
            raise ValueError(f"Fitted field '{key}' row {i} must have {n_cols} values.")
        for v in row:
            if isinstance(v, bool) or not isinstance(v, (int, float)):
                raise ValueError(f"Fitted field '{key}' row {i} contains a non-number.")
    return len(value)


def _validate_fitted(fitted: Any, order: list, seasonal_order: list) -> None:
    if not isinstance(fitted, dict):
        raise ValueError("Field 'fitted' must be a dictionary.")

    n = _check_vector(fitted, "series")
    n_exog = fitted.get("n_exog")
    if not _is_int(n_exog) or n_exog < 0:
        raise ValueError("Fitted field 'n_exog' must be a non-negative integer.")
    if _check_table(fitted, "exog", n_exog) != n:
        raise ValueError("Fitted field 'exog' must have one row per series value.")

    p, d, q = order
    P, D, Q, s = seasonal_order
    n_cols = 1 + q + Q + p + P + n_exog
    if _check_vector(fitted, "coefficients") != n_cols:
        raise ValueError(f"Fitted field 'coefficients' must have {n_cols} values.")

    n_diff = n - d - D * s
    n_rows = n_diff - max(p, P * s)
    if _check_table(fitted, "design", n_cols) != n_rows:
        raise ValueError(f"Fitted field 'design' must have {n_rows} rows.")
    if _check_vector(fitted, "residuals") != n_diff:
        raise ValueError(f"Fitted field 'residuals' must have {n_diff} values.")


def validate_json_model(obj: dict) -> None:
    """
    Validate a JSON model object against the schema.

    Parameters
    ----------
    obj : dict
        JSON object to validate.

    Raises
    ------
    ValueError
        If the object does not conform to the schema.
    """
    if not isinstance(obj, dict):
        raise ValueError("JSON model must be a dictionary object.")

    if obj.get("version") != SCHEMA_VERSION:
        raise ValueError(
            f"Unsupported JSON model version {obj.get('version')!r}, "
            f"expected {SCHEMA_VERSION!r}."
        )

    for key, length in (("order", 3), ("seasonal_order", 4)):
        if key not in obj:
            raise ValueError(f"JSON model missing required field '{key}'.")
        _check_int_list(obj, key, length)

    for key in ("ridge", "max_condition"):
        if key in obj and (isinstance(obj[key], bool) or not isinstance(obj[key], (int, float))):
            raise ValueError(f"Field '{key}' must be a number.")

    if "fitted" in obj:
        _validate_fitted(obj["fitted"], obj["order"], obj["seasonal_order"])

    if "error_submodel" in obj:
        validate_json_model(obj["error_submodel"])

    if "metadata" in obj and not isinstance(obj["metadata"], dict):
        raise ValueError("Field 'metadata' must be a dictionary.")


__all__ = ["SCHEMA_VERSION", "json_model_schema", "validate_json_model"]
