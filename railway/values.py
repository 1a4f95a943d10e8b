"""Scalar Value Objects

Small immutable wrappers that can only be built from valid input. Each
exposes ``try_create(raw, field_name=None)`` returning a Result whose
failure is a single-field ``ValidationError``, so several of them combine
into one multi-field error:

    combine(
        EmailAddress.try_create(form["email"]),
        FirstName.try_create(form["first_name"]),
        Age.try_create(form["age"]),
    )

Subclass ``RequiredString`` (or any base here) to get a named type with
the same rules:

    class FirstName(RequiredString):
        __slots__ = ()
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, ClassVar, Generic, TypeVar

from railway.errors.types import ValidationError
from railway.results.types import Failure, Result, Success

T = TypeVar("T")

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _snake_case(name: str) -> str:
    return _WORD_BOUNDARY.sub("_", name).lower()


def _words(name: str) -> str:
    return _WORD_BOUNDARY.sub(" ", name)


@dataclass(frozen=True, slots=True)
class ScalarValue(ABC, Generic[T]):
    """Base for single-value objects.

    Abstract: subclasses implement ``_check`` returning the normalized
    primitive or a Failure; construction goes through ``try_create``/``create``.
    """
    value: T

    default_field: ClassVar[str] = "value"
    required_message: ClassVar[str] = "Value is required."

    @classmethod
    def field_for(cls, field_name: str | None) -> str:
        return field_name or cls.default_field

    @classmethod
    def invalid(cls, field: str, *messages: str) -> Failure:
        return Failure(ValidationError.for_field(field, *messages))

    @classmethod
    @abstractmethod
    def _check(cls, raw: Any, field: str) -> Result[T]:
        """Validate ``raw`` (never None) and return the value to wrap."""

    @classmethod
    def try_create(cls, raw: Any, field_name: str | None = None) -> Result[Any]:
        field = cls.field_for(field_name)
        if raw is None:
            return cls.invalid(field, cls.required_message)
        return cls._check(raw, field).map(cls)

    @classmethod
    def create(cls, raw: Any, field_name: str | None = None) -> Any:
        """Like ``try_create`` but raises ``ErrorException`` on invalid input."""
        return cls.try_create(raw, field_name).unwrap_or_raise()

    def __str__(self) -> str:
        return str(self.value)


class RequiredString(ScalarValue[str]):
    """Non-empty, non-blank string; surrounding whitespace is stripped.

    The default field and message derive from the class name, so
    ``FirstName`` fails as ``first_name: First Name cannot be empty.``
    """
    __slots__ = ()

    @classmethod
    def field_for(cls, field_name: str | None) -> str:
        return field_name or _snake_case(cls.__name__)

    @classmethod
    def _check(cls, raw: Any, field: str) -> Result[str]:
        if not isinstance(raw, str) or not raw.strip():
            return cls.invalid(field, f"{_words(cls.__name__)} cannot be empty.")
        return Success(raw.strip())


class EmailAddress(ScalarValue[str]):
    __slots__ = ()

    default_field = "email"
    required_message = "Email address is not valid."

    @classmethod
    def _check(cls, raw: Any, field: str) -> Result[str]:
        if isinstance(raw, str) and EMAIL_PATTERN.match(raw):
            return Success(raw)
        return cls.invalid(field, cls.required_message)


def _is_int(raw: Any) -> bool:
    return isinstance(raw, int) and not isinstance(raw, bool)


class _IntValue(ScalarValue[int]):
    __slots__ = ()

    @classmethod
    def _check(cls, raw: Any, field: str) -> Result[int]:
        if not _is_int(raw):
            return cls.invalid(field, "Value must be a valid integer.")
        return cls._check_int(raw, field)

    @classmethod
    @abstractmethod
    def _check_int(cls, raw: int, field: str) -> Result[int]:
        pass


class Age(_IntValue):
    """Age in whole years, 0 to 150 inclusive."""
    __slots__ = ()

    default_field = "age"
    required_message = "Age is required."
    max_age: ClassVar[int] = 150

    @classmethod
    def _check_int(cls, raw: int, field: str) -> Result[int]:
        if raw < 0:
            return cls.invalid(field, "Age must be non-negative.")
        if raw > cls.max_age:
            return cls.invalid(field, "Age is unrealistically high.")
        return Success(raw)


class PositiveInt(_IntValue):
    __slots__ = ()

    @classmethod
    def _check_int(cls, raw: int, field: str) -> Result[int]:
        if raw <= 0:
            return cls.invalid(field, "Value must be greater than zero.")
        return Success(raw)


class NonNegativeInt(_IntValue):
    __slots__ = ()

    @classmethod
    def _check_int(cls, raw: int, field: str) -> Result[int]:
        if raw < 0:
            return cls.invalid(field, "Value cannot be negative.")
        return Success(raw)


class Percentage(ScalarValue[Decimal]):
    """Percentage between 0 and 100 inclusive, stored as a Decimal."""
    __slots__ = ()

    default_field = "percentage"
    required_message = "Percentage is required."

    @classmethod
    def _check(cls, raw: Any, field: str) -> Result[Decimal]:
        if isinstance(raw, bool) or not isinstance(raw, (int, float, Decimal)):
            return cls.invalid(field, "Percentage must be a number.")
        value = Decimal(str(raw)) if isinstance(raw, float) else Decimal(raw)
        if value.is_nan() or not Decimal(0) <= value <= Decimal(100):
            return cls.invalid(field, "Percentage must be between 0 and 100.")
        return Success(value)

    def as_fraction(self) -> Decimal:
        return self.value / Decimal(100)
