"""Validation at System Boundaries

Parse-don't-validate: untrusted data goes through a pydantic model once and
comes out as a Result. Validation problems are values (a ValidationError
listing every failing field); anything else the model raises propagates.

Usage:
    class SignUp(BaseModel):
        email: EmailStr
        age: int = Field(ge=0)

    match validate_model(SignUp, payload):
        case Success(form):
            ...
        case Failure(ValidationError(field_errors=fields)):
            ...
"""
from __future__ import annotations

from typing import Any, Generic, TypeVar

import pydantic

from railway.core.logging import get_logger
from railway.results.types import Failure, Result, Success

from .errors import validation_error_from_pydantic

M = TypeVar("M", bound=pydantic.BaseModel)

log = get_logger("railway.validation")


def validate_model(model_cls: type[M], data: Any, *, strict: bool | None = None) -> Result[M]:
    """Validate ``data`` (a mapping or object) into ``model_cls``."""
    try:
        return Success(model_cls.model_validate(data, strict=strict))
    except pydantic.ValidationError as e:
        log.debug("model_validation_failed", model=model_cls.__name__, error_count=e.error_count())
        return Failure(validation_error_from_pydantic(e))


def validate_json(model_cls: type[M], raw: str | bytes, *, strict: bool | None = None) -> Result[M]:
    """Validate a JSON document into ``model_cls``; malformed JSON is a validation failure too."""
    try:
        return Success(model_cls.model_validate_json(raw, strict=strict))
    except pydantic.ValidationError as e:
        log.debug("model_validation_failed", model=model_cls.__name__, error_count=e.error_count())
        return Failure(validation_error_from_pydantic(e))


class ModelBoundary(Generic[M]):
    """Stateless boundary validator bound to one model.

    Usage:
        sign_up = ModelBoundary(SignUp)
        result = sign_up.parse(request_data)
    """

    __slots__ = ("model", "strict")

    def __init__(self, model: type[M], *, strict: bool | None = None):
        self.model, self.strict = model, strict

    def parse(self, data: Any) -> Result[M]:
        return validate_model(self.model, data, strict=self.strict)

    def parse_json(self, raw: str | bytes) -> Result[M]:
        return validate_json(self.model, raw, strict=self.strict)
