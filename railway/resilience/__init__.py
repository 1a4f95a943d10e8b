"""Resilience helpers for result-producing operations."""
from .retry import (
    BackoffCalculator,
    BackoffStrategy,
    ConstantBackoff,
    ExponentialBackoff,
    ExponentialJitterBackoff,
    LinearBackoff,
    RetryAttempt,
    RetryConfig,
    RetryPolicy,
    RetryResult,
    get_backoff_calculator,
    retry_async,
    retryable,
)

__all__ = [
    "BackoffStrategy",
    "BackoffCalculator",
    "ConstantBackoff",
    "LinearBackoff",
    "ExponentialBackoff",
    "ExponentialJitterBackoff",
    "get_backoff_calculator",
    "RetryConfig",
    "RetryAttempt",
    "RetryResult",
    "RetryPolicy",
    "retry_async",
    "retryable",
]
