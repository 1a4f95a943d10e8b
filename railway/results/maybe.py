"""Optional values and their bridge onto the railway."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, final

from railway.errors.exceptions import ResultAccessError

from .types import ErrorOrFactory, Result, Success, failure

T = TypeVar("T")
U = TypeVar("U")


@final
@dataclass(frozen=True, slots=True)
class Maybe(Generic[T]):
    """A value that may be absent. ``None`` is never a present value."""
    _value: T | None = None

    @classmethod
    def of(cls, value: T | None) -> Maybe[T]:
        return cls(value)

    @classmethod
    def none(cls) -> Maybe[Any]:
        return cls()

    @property
    def has_value(self) -> bool:
        return self._value is not None

    @property
    def has_no_value(self) -> bool:
        return self._value is None

    @property
    def value(self) -> T:
        if self._value is None:
            raise ResultAccessError("Maybe has no value")
        return self._value

    def value_or(self, default: T) -> T:
        return default if self._value is None else self._value

    def map(self, f: Callable[[T], U]) -> Maybe[U]:
        if self._value is None:
            return Maybe()
        return Maybe(f(self._value))

    def to_result(self, error: ErrorOrFactory) -> Result[T]:
        """Success with the value, else failure.

        A factory ``error`` is only called when the value is missing.
        """
        if self._value is None:
            return failure(error)
        return Success(self._value)

    @staticmethod
    def optional(value: T | None, f: Callable[[T], Result[U]]) -> Result[Maybe[U]]:
        """Validate an optional input: absent is fine, present must pass ``f``."""
        if value is None:
            return Success(Maybe())
        return f(value).map(Maybe.of)

    def __repr__(self) -> str:
        return "Maybe.none()" if self._value is None else f"Maybe.of({self._value!r})"


def to_result(maybe: Maybe[T], error: ErrorOrFactory) -> Result[T]:
    return maybe.to_result(error)
