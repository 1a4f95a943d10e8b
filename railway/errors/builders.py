"""Error Builders

Ergonomic constructors that return a ready-made ``Failure`` for each error
variant, so call sites read as ``return not_found("User", user_id)``.
"""
from __future__ import annotations

from typing import Any

from railway.results.types import Failure

from .types import (
    BadRequestError,
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServiceUnavailableError,
    UnauthorizedError,
    UnexpectedError,
    ValidationError,
)


# =============================================================================
# Lookup and state
# =============================================================================

def not_found(entity: str, key: Any = None, *, instance: str | None = None) -> Failure:
    msg = f"{entity} not found"
    if key is not None:
        msg += f": {key}"
    return Failure(NotFoundError(msg, instance=instance))


def conflict(detail: str, *, instance: str | None = None) -> Failure:
    return Failure(ConflictError(detail, instance=instance))


def duplicate(entity: str, field: str, value: Any, *, instance: str | None = None) -> Failure:
    return conflict(f"{entity} with {field}='{value}' already exists", instance=instance)


# =============================================================================
# Access
# =============================================================================

def unauthorized(detail: str = "Authentication required", *, instance: str | None = None) -> Failure:
    return Failure(UnauthorizedError(detail, instance=instance))


def forbidden(resource: str | None = None, *, instance: str | None = None) -> Failure:
    msg = f"Access to '{resource}' is forbidden" if resource else "Access is forbidden"
    return Failure(ForbiddenError(msg, instance=instance))


# =============================================================================
# Capacity
# =============================================================================

def rate_limited(
    service: str, retry_after: float | None = None, *, instance: str | None = None
) -> Failure:
    return Failure(RateLimitError(
        f"Rate limited by '{service}'", instance=instance, retry_after=retry_after,
    ))


def service_unavailable(
    service: str,
    reason: str = "",
    retry_after: float | None = None,
    *,
    instance: str | None = None,
) -> Failure:
    msg = f"Service '{service}' unavailable"
    if reason:
        msg += f": {reason}"
    return Failure(ServiceUnavailableError(msg, instance=instance, retry_after=retry_after))


# =============================================================================
# Input and business rules
# =============================================================================

def bad_request(detail: str, *, instance: str | None = None) -> Failure:
    return Failure(BadRequestError(detail, instance=instance))


def validation(field: str, *messages: str, instance: str | None = None) -> Failure:
    """Single-field validation failure."""
    return Failure(ValidationError.for_field(field, *messages, instance=instance))


def domain(detail: str, *, instance: str | None = None) -> Failure:
    return Failure(DomainError(detail, instance=instance))


def precondition_failed(condition: str, reason: str = "", *, instance: str | None = None) -> Failure:
    msg = f"Precondition failed: {condition}"
    if reason:
        msg += f" ({reason})"
    return domain(msg, instance=instance)


# =============================================================================
# Internal
# =============================================================================

def unexpected(detail: str = "An unexpected error occurred", *, instance: str | None = None) -> Failure:
    return Failure(UnexpectedError(detail, instance=instance))
