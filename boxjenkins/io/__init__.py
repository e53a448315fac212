"""JSON import/export for boxjenkins models."""

from .json_model import dump_json_model, json_to_model, load_json_model, model_to_json
from .schema import SCHEMA_VERSION, json_model_schema, validate_json_model

__all__ = [
    "model_to_json",
    "json_to_model",
    "dump_json_model",
    "load_json_model",
    "json_model_schema",
    "validate_json_model",
    "SCHEMA_VERSION",
]
