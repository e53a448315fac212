"""JSON import and export for fitted models.

A serialized model carries its orders, solver settings and, once fitted,
everything :meth:`Model.predict` reads: the original series and regressors,
the fitted design matrix, the coefficients and the in-sample residuals. The
differenced arrays are re-derived on load. The error sub-model is nested
under ``"error_submodel"``.

See schema.py for the schema specification.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import numpy as np

from boxjenkins.timeseries import Model

from .schema import SCHEMA_VERSION, validate_json_model


def model_to_json(model: Model, metadata: Optional[dict] = None) -> dict:
    """
    Convert a Model to the JSON model format.

    Parameters
    ----------
    model : Model
        Model to convert, fitted or not.
    metadata : dict, optional
        Optional JSON-serializable metadata (producer, timestamp, notes).

    Returns
    -------
    dict
        JSON object following the schema defined in schema.py.
    """
    o, so = model.order, model.seasonal_order
    result: Dict[str, Any] = {
        "version": SCHEMA_VERSION,
        "order": [o.p, o.d, o.q],
        "seasonal_order": [so.p, so.d, so.q, so.s],
        "ridge": float(model.ridge),
        "max_condition": float(model.max_condition),
    }

    if model.is_fitted:
        result["fitted"] = {
            "series": model.series_original.tolist(),
            "n_exog": int(model.n_exog),
            "exog": model.exog_original.tolist(),
            "design": model.design_fit.tolist(),
            "coefficients": model.coefficients.tolist(),
            "residuals": model.residuals_fit.tolist(),
        }

    if model.error_submodel is not None:
        result["error_submodel"] = model_to_json(model.error_submodel)

    if metadata:
        result["metadata"] = metadata

    return result


def _restore(model: Model, obj: dict) -> None:
    if "fitted" in obj:
        fitted = obj["fitted"]
        exog = np.asarray(fitted["exog"], dtype=float).reshape(
            len(fitted["series"]), fitted["n_exog"]
        )
        model._set_fitted_state(
            fitted["series"],
            exog,
            fitted["design"],
            fitted["coefficients"],
            fitted["residuals"],
        )

    if model.error_submodel is not None and "error_submodel" in obj:
        _restore(model.error_submodel, obj["error_submodel"])


def json_to_model(obj: dict) -> Model:
    """
    Convert a JSON model object to a Model.

    Parameters
    ----------
    obj : dict
        JSON object following the schema defined in schema.py.

    Returns
    -------
    Model
        Reconstructed model. A fitted model predicts exactly like the one
        that was serialized.

    Raises
    ------
    ValueError
        If the object is invalid, or the orders say the model has MA terms
        but the fitted state lacks an error sub-model.
    """
    validate_json_model(obj)

    kwargs = {key: obj[key] for key in ("ridge", "max_condition") if key in obj}
    model = Model(tuple(obj["order"]), tuple(obj["seasonal_order"]), **kwargs)

    if model.error_submodel is None and "error_submodel" in obj:
        raise ValueError("JSON model has an 'error_submodel' but no MA terms.")
    if (
        model.error_submodel is not None
        and "fitted" in obj
        and "fitted" not in obj.get("error_submodel", {})
    ):
        raise ValueError("Fitted JSON model with MA terms needs a fitted 'error_submodel'.")

    _restore(model, obj)
    return model


def dump_json_model(model: Model, path: str, metadata: Optional[dict] = None) -> None:
    """
    Write a Model to a JSON file.

    Parameters
    ----------
    model : Model
        Model to write.
    path : str
        Path to output JSON file.
    metadata : dict, optional
        Optional metadata stored alongside the model.
    """
    obj = model_to_json(model, metadata=metadata)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)


def load_json_model(path: str) -> Model:
    """
    Load a Model from a JSON file.

    Parameters
    ----------
    path : str
        Path to input JSON file.

    Returns
    -------
    Model
        Loaded model.

    Raises
    ------
    ValueError
        If the file is not valid JSON or does not describe a model.
    FileNotFoundError
        If the file does not exist.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            obj = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"JSON model file not found: {path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in file {path}: {e}")

    return json_to_model(obj)


__all__ = [
    "model_to_json",
    "json_to_model",
    "dump_json_model",
    "load_json_model",
]
