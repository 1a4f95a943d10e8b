"""Typed errors for the failure track

Key components:
- Error and its closed set of variants (ValidationError, NotFoundError, ...)
- The merge policy used when independent results are combined
- ErrorException for leaving the railway at framework boundaries
- Builder functions returning ready-made failures

Usage:
    from railway.errors import NotFoundError, not_found

    def find_user(user_id: str) -> Result[User]:
        user = repo.get(user_id)
        if user is None:
            return not_found("User", user_id)
        return success(user)
"""
from .types import (
    AGGREGATE_CODE,
    VALIDATION_CODE,
    AggregateError,
    BadRequestError,
    ConflictError,
    DomainError,
    Error,
    ErrorKind,
    FieldError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServiceUnavailableError,
    UnauthorizedError,
    UnexpectedError,
    ValidationError,
)
from .aggregation import members, merge_all, merge_errors
from .exceptions import ErrorException, ResultAccessError, raise_error

# builders import the results package, which needs the modules above loaded
from .builders import (
    bad_request,
    conflict,
    domain,
    duplicate,
    forbidden,
    not_found,
    precondition_failed,
    rate_limited,
    service_unavailable,
    unauthorized,
    unexpected,
    validation,
)

__all__ = [
    # Taxonomy
    "Error",
    "ErrorKind",
    "FieldError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
    "ForbiddenError",
    "RateLimitError",
    "ServiceUnavailableError",
    "DomainError",
    "BadRequestError",
    "UnexpectedError",
    "AggregateError",
    "VALIDATION_CODE",
    "AGGREGATE_CODE",
    # Aggregation
    "members",
    "merge_errors",
    "merge_all",
    # Exceptions
    "ErrorException",
    "ResultAccessError",
    "raise_error",
    # Builders
    "not_found",
    "conflict",
    "duplicate",
    "unauthorized",
    "forbidden",
    "rate_limited",
    "service_unavailable",
    "bad_request",
    "validation",
    "domain",
    "precondition_failed",
    "unexpected",
]
