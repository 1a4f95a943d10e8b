"""Error Taxonomy

Typed errors carried on the failure track of a Result. Every error has a
stable machine-readable ``code``, a human ``detail`` and an optional
``instance`` correlation token. The set of variants is closed: dispatch
on the variant with structural pattern matching, not on the code string.

Usage:
    from railway.errors import NotFoundError, ValidationError

    match error:
        case ValidationError(field_errors=fields):
            ...
        case NotFoundError():
            ...
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Iterable

VALIDATION_CODE = "validation.error"
AGGREGATE_CODE = "aggregate.error"


class ErrorKind(Enum):
    """Tag for each error variant."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    RATE_LIMIT = "rate_limit"
    SERVICE_UNAVAILABLE = "service_unavailable"
    DOMAIN = "domain"
    BAD_REQUEST = "bad_request"
    UNEXPECTED = "unexpected"
    AGGREGATE = "aggregate"

    @property
    def http_status(self) -> int:
        """Map error kind to appropriate HTTP status."""
        return _HTTP_STATUS[self]


_HTTP_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.RATE_LIMIT: 429,
    ErrorKind.SERVICE_UNAVAILABLE: 503,
    ErrorKind.DOMAIN: 422,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.UNEXPECTED: 500,
    ErrorKind.AGGREGATE: 500,
}


@dataclass(frozen=True, slots=True)
class Error:
    """Base error shape shared by all variants.

    Errors are immutable values compared structurally: two errors are equal
    when they are the same variant with equal fields.
    """
    detail: str
    code: str = "error"
    instance: str | None = None

    kind: ClassVar[ErrorKind | None] = None

    @property
    def status(self) -> int:
        return self.kind.http_status if self.kind else 500

    def combine(self, other: Error) -> Error:
        """Merge two independent errors (see ``merge_errors``)."""
        from .aggregation import merge_errors
        return merge_errors(self, other)

    def to_dict(self) -> dict[str, Any]:
        """Serialize as a problem-details style dictionary."""
        data: dict[str, Any] = {"code": self.code, "detail": self.detail, "status": self.status}
        if self.instance is not None:
            data["instance"] = self.instance
        return data

    def __str__(self) -> str:
        return f"[{self.code}] {self.detail}"


@dataclass(frozen=True, slots=True)
class NotFoundError(Error):
    code: str = "not.found.error"
    kind: ClassVar[ErrorKind] = ErrorKind.NOT_FOUND


@dataclass(frozen=True, slots=True)
class ConflictError(Error):
    code: str = "conflict.error"
    kind: ClassVar[ErrorKind] = ErrorKind.CONFLICT


@dataclass(frozen=True, slots=True)
class UnauthorizedError(Error):
    code: str = "unauthorized.error"
    kind: ClassVar[ErrorKind] = ErrorKind.UNAUTHORIZED


@dataclass(frozen=True, slots=True)
class ForbiddenError(Error):
    code: str = "forbidden.error"
    kind: ClassVar[ErrorKind] = ErrorKind.FORBIDDEN


@dataclass(frozen=True, slots=True)
class RateLimitError(Error):
    """Caller exceeded a quota; ``retry_after`` is in seconds when known."""
    code: str = "rate.limit.error"
    retry_after: float | None = None
    kind: ClassVar[ErrorKind] = ErrorKind.RATE_LIMIT


@dataclass(frozen=True, slots=True)
class ServiceUnavailableError(Error):
    code: str = "service.unavailable.error"
    retry_after: float | None = None
    kind: ClassVar[ErrorKind] = ErrorKind.SERVICE_UNAVAILABLE


@dataclass(frozen=True, slots=True)
class DomainError(Error):
    """A business rule was violated."""
    code: str = "domain.error"
    kind: ClassVar[ErrorKind] = ErrorKind.DOMAIN


@dataclass(frozen=True, slots=True)
class BadRequestError(Error):
    code: str = "bad.request.error"
    kind: ClassVar[ErrorKind] = ErrorKind.BAD_REQUEST


@dataclass(frozen=True, slots=True)
class UnexpectedError(Error):
    code: str = "unexpected.error"
    kind: ClassVar[ErrorKind] = ErrorKind.UNEXPECTED


@dataclass(frozen=True, slots=True)
class FieldError:
    """Messages reported against a single field."""
    field: str
    messages: tuple[str, ...]

    def __post_init__(self) -> None:
        messages = (self.messages,) if isinstance(self.messages, str) else tuple(self.messages)
        if not messages:
            raise ValueError(f"FieldError '{self.field}' requires at least one detail message")
        if any(not m or not m.strip() for m in messages):
            raise ValueError("Field detail cannot be null/empty")
        object.__setattr__(self, "messages", messages)

    def extend(self, messages: Iterable[str]) -> FieldError:
        return FieldError(self.field, (*self.messages, *messages))

    def __str__(self) -> str:
        return f"{self.field}: {', '.join(self.messages)}"


def _coalesce_fields(field_errors: Iterable[FieldError]) -> tuple[FieldError, ...]:
    """One entry per field, first-seen order, messages appended."""
    merged: dict[str, FieldError] = {}
    for fe in field_errors:
        merged[fe.field] = merged[fe.field].extend(fe.messages) if fe.field in merged else fe
    return tuple(merged.values())


def _join_unique(left: str, right: str, sep: str) -> str:
    parts: list[str] = []
    for part in (*left.split(sep), *right.split(sep)):
        if part and part not in parts:
            parts.append(part)
    return sep.join(parts)


@dataclass(frozen=True, slots=True)
class ValidationError(Error):
    """Field-level validation failures, one ``FieldError`` per field.

    Same-field entries are merged on construction, so ``field_errors``
    always holds distinct fields in insertion order.
    """
    detail: str = ""
    code: str = VALIDATION_CODE
    field_errors: tuple[FieldError, ...] = ()
    kind: ClassVar[ErrorKind] = ErrorKind.VALIDATION

    def __post_init__(self) -> None:
        field_errors = _coalesce_fields(self.field_errors)
        if not field_errors:
            raise ValueError("ValidationError: at least one field error must be supplied")
        object.__setattr__(self, "field_errors", field_errors)

    @classmethod
    def for_field(
        cls,
        field: str,
        *messages: str,
        detail: str = "",
        instance: str | None = None,
    ) -> ValidationError:
        return cls(detail=detail, instance=instance, field_errors=(FieldError(field, messages),))

    def and_(self, field: str, *messages: str) -> ValidationError:
        """Add messages for ``field``, appending if the field already failed."""
        return ValidationError(
            detail=self.detail,
            code=self.code,
            instance=self.instance,
            field_errors=(*self.field_errors, FieldError(field, messages)),
        )

    def merge(self, other: ValidationError) -> ValidationError:
        """Concatenate field lists left to right, merging same-named fields.

        Messages are appended, never deduplicated.
        """
        return ValidationError(
            detail=_join_unique(self.detail, other.detail, " | "),
            code=_join_unique(self.code, other.code, "+"),
            instance=self.instance if self.instance is not None else other.instance,
            field_errors=(*self.field_errors, *other.field_errors),
        )

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(fe.field for fe in self.field_errors)

    def messages_for(self, field: str) -> tuple[str, ...]:
        for fe in self.field_errors:
            if fe.field == field:
                return fe.messages
        return ()

    def to_dict(self) -> dict[str, Any]:
        data = Error.to_dict(self)
        data["errors"] = {fe.field: list(fe.messages) for fe in self.field_errors}
        return data

    def __str__(self) -> str:
        fields = "; ".join(str(fe) for fe in self.field_errors)
        return f"ValidationError [{self.code}] {fields}"


def _normalize_members(errors: Iterable[Error]) -> tuple[Error, ...]:
    """Flatten nested aggregates and coalesce validation members.

    All ValidationError members collapse into one, placed where the first
    one appeared. This keeps merging associative: any grouping of the same
    errors in the same order normalizes to the same tuple.
    """
    flat: list[Error] = []
    validation_at: int | None = None
    for error in errors:
        match error:
            case AggregateError(errors=members):
                nested = members
            case _:
                nested = (error,)
        for member in nested:
            match member:
                case ValidationError() if validation_at is not None:
                    flat[validation_at] = flat[validation_at].merge(member)
                case ValidationError():
                    validation_at = len(flat)
                    flat.append(member)
                case _:
                    flat.append(member)
    return tuple(flat)


@dataclass(frozen=True, slots=True)
class AggregateError(Error):
    """Independent failures that are not all validation errors.

    Members are kept in order and never deduplicated; nested aggregates are
    spliced in so the structure is at most one level deep.
    """
    detail: str = ""
    code: str = AGGREGATE_CODE
    errors: tuple[Error, ...] = ()
    kind: ClassVar[ErrorKind] = ErrorKind.AGGREGATE

    def __post_init__(self) -> None:
        errors = _normalize_members(self.errors)
        if not errors:
            raise ValueError("AggregateError requires at least one error")
        object.__setattr__(self, "errors", errors)
        if not self.detail:
            object.__setattr__(self, "detail", "; ".join(e.detail for e in errors if e.detail))

    @classmethod
    def of(cls, *errors: Error, instance: str | None = None) -> AggregateError:
        return cls(instance=instance, errors=errors)

    @property
    def status(self) -> int:
        return max(e.status for e in self.errors)

    def to_dict(self) -> dict[str, Any]:
        data = Error.to_dict(self)
        data["errors"] = [e.to_dict() for e in self.errors]
        return data

    def __len__(self) -> int:
        return len(self.errors)
