"""Pydantic models as Result producers."""
from .errors import (
    ROOT_PATH,
    field_error_from_pydantic,
    format_path,
    validation_error_from_pydantic,
)
from .boundaries import ModelBoundary, validate_json, validate_model

__all__ = [
    "ROOT_PATH",
    "format_path",
    "field_error_from_pydantic",
    "validation_error_from_pydantic",
    "validate_model",
    "validate_json",
    "ModelBoundary",
]
