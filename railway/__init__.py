"""railway: a result algebra for Python

Computations return ``Success(value)`` or ``Failure(error)``. Dependent
steps chain with ``map``/``bind`` and stop at the first failure;
independent steps are gathered with ``combine``/``parallel`` and report
every failure at once.

Usage:
    from railway import Age, EmailAddress, RequiredString, combine

    result = combine(
        EmailAddress.try_create(form["email"]),
        RequiredString.try_create(form["name"], "name"),
        Age.try_create(form["age"]),
    ).map(lambda email, name, age: Person(email, name, age))
"""
# errors first: its builders import the results package
from .errors import (
    AGGREGATE_CODE,
    VALIDATION_CODE,
    AggregateError,
    BadRequestError,
    ConflictError,
    DomainError,
    Error,
    ErrorException,
    ErrorKind,
    FieldError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ResultAccessError,
    ServiceUnavailableError,
    UnauthorizedError,
    UnexpectedError,
    ValidationError,
    bad_request,
    conflict,
    domain,
    duplicate,
    forbidden,
    members,
    merge_all,
    merge_errors,
    not_found,
    precondition_failed,
    raise_error,
    rate_limited,
    service_unavailable,
    unauthorized,
    unexpected,
    validation,
)
from .results import (
    UNIT,
    CombinedValues,
    Failure,
    Maybe,
    ParallelBatch,
    Result,
    Success,
    Unit,
    and_then_async,
    await_parallel,
    bind_async,
    combine,
    combine_all,
    combine_async,
    compensate_async,
    ensure_async,
    failure,
    failure_if,
    from_exception,
    is_result,
    map_async,
    map_error_async,
    map_on_failure_async,
    match_async,
    parallel,
    recover_on_failure_async,
    sequence,
    success,
    success_if,
    success_unit,
    tap_async,
    tap_on_failure_async,
    to_result,
    traverse,
    traverse_async,
    try_result,
    try_result_async,
    unless_async,
    when_async,
)
from .core import (
    Settings,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    get_settings,
    traced,
    unbind_context,
)
from .resilience import BackoffStrategy, RetryConfig, RetryPolicy, retry_async, retryable
from .values import (
    Age,
    EmailAddress,
    NonNegativeInt,
    Percentage,
    PositiveInt,
    RequiredString,
    ScalarValue,
)
from .validation import ModelBoundary, validate_json, validate_model, validation_error_from_pydantic

__version__ = "0.1.0"

__all__ = [
    # Errors
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
    "members",
    "merge_errors",
    "merge_all",
    "ErrorException",
    "ResultAccessError",
    "raise_error",
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
    # Results
    "UNIT",
    "Unit",
    "Result",
    "Success",
    "Failure",
    "success",
    "failure",
    "success_if",
    "failure_if",
    "success_unit",
    "try_result",
    "try_result_async",
    "from_exception",
    "is_result",
    "CombinedValues",
    "combine",
    "combine_all",
    "traverse",
    "sequence",
    "map_async",
    "bind_async",
    "and_then_async",
    "tap_async",
    "tap_on_failure_async",
    "ensure_async",
    "map_error_async",
    "map_on_failure_async",
    "compensate_async",
    "recover_on_failure_async",
    "combine_async",
    "traverse_async",
    "match_async",
    "when_async",
    "unless_async",
    "ParallelBatch",
    "parallel",
    "await_parallel",
    "Maybe",
    "to_result",
    # Ambient
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "unbind_context",
    "traced",
    # Retry
    "BackoffStrategy",
    "RetryConfig",
    "RetryPolicy",
    "retry_async",
    "retryable",
    # Values
    "ScalarValue",
    "RequiredString",
    "EmailAddress",
    "Age",
    "PositiveInt",
    "NonNegativeInt",
    "Percentage",
    # Pydantic
    "validate_model",
    "validate_json",
    "validation_error_from_pydantic",
    "ModelBoundary",
]
