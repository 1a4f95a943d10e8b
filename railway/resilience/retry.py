"""Retry Policies with Backoff and Jitter

Re-invokes a result-producing coroutine function while it returns a
Failure. Failures are values here: an exception raised by the operation is
not a failure and propagates immediately, without further attempts.

Usage:
    result = await retry_async(
        lambda: client.fetch(order_id),
        RetryConfig(max_retries=2, initial_delay_seconds=0.05),
        should_retry=lambda e: isinstance(e, ServiceUnavailableError),
    )
"""
from __future__ import annotations

import asyncio
import functools
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Any, Awaitable, Callable, Generic, TypeVar

from railway.core.config import get_settings
from railway.core.logging import get_logger
from railway.core.tracing import traced
from railway.errors.types import Error
from railway.results.types import Result

T = TypeVar("T")

log = get_logger("railway.retry")

Operation = Callable[..., Awaitable[Result[T]]]


class BackoffStrategy(Enum):
    """Available backoff strategies."""
    CONSTANT = auto()           # Fixed delay between retries
    LINEAR = auto()             # Linearly increasing delay
    EXPONENTIAL = auto()        # Delay multiplied on every retry
    EXPONENTIAL_JITTER = auto() # Exponential with random jitter


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior.

    ``max_retries`` counts retries, so an operation runs at most
    ``max_retries + 1`` times.
    """
    max_retries: int = 3
    initial_delay_seconds: float = 0.1
    backoff_multiplier: float = 2.0
    max_delay_seconds: float = 30.0
    strategy: BackoffStrategy = BackoffStrategy.EXPONENTIAL
    jitter_factor: float = 0.5  # 0-1, portion of delay that can be jitter

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if self.initial_delay_seconds < 0:
            raise ValueError("initial_delay_seconds must be non-negative")

    @classmethod
    def from_settings(cls, **overrides: Any) -> RetryConfig:
        """Defaults from ``RAILWAY_RETRY_*`` settings, with explicit overrides."""
        settings = get_settings()
        values: dict[str, Any] = {
            "max_retries": settings.RETRY_MAX_RETRIES,
            "initial_delay_seconds": settings.RETRY_INITIAL_DELAY_SECONDS,
            "backoff_multiplier": settings.RETRY_BACKOFF_MULTIPLIER,
            "max_delay_seconds": settings.RETRY_MAX_DELAY_SECONDS,
        }
        values.update(overrides)
        return cls(**values)


@dataclass
class RetryAttempt:
    """Information about a single attempt."""
    attempt_number: int
    started_at: datetime
    delay_seconds: float
    error: Error | None = None


@dataclass
class RetryResult(Generic[T]):
    """Result of a retry operation with full attempt history."""
    result: Result[T]
    attempts: list[RetryAttempt] = field(default_factory=list)
    total_duration_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.result.is_success

    @property
    def attempt_count(self) -> int:
        return len(self.attempts)


class BackoffCalculator(ABC):
    """Abstract base for backoff delay calculation."""

    @abstractmethod
    def calculate(self, retry: int, config: RetryConfig) -> float:
        """Calculate delay in seconds before the given retry (1-indexed)."""


class ConstantBackoff(BackoffCalculator):
    def calculate(self, retry: int, config: RetryConfig) -> float:
        return min(config.initial_delay_seconds, config.max_delay_seconds)


class LinearBackoff(BackoffCalculator):
    def calculate(self, retry: int, config: RetryConfig) -> float:
        return min(config.initial_delay_seconds * retry, config.max_delay_seconds)


class ExponentialBackoff(BackoffCalculator):
    def calculate(self, retry: int, config: RetryConfig) -> float:
        delay = config.initial_delay_seconds * (config.backoff_multiplier ** (retry - 1))
        return min(delay, config.max_delay_seconds)


class ExponentialJitterBackoff(BackoffCalculator):
    """Exponential backoff with equal jitter (±jitter_factor/2)."""

    def calculate(self, retry: int, config: RetryConfig) -> float:
        base = ExponentialBackoff().calculate(retry, config)
        jitter_range = base * config.jitter_factor
        jitter = random.uniform(-jitter_range / 2, jitter_range / 2)
        return max(0.0, min(base + jitter, config.max_delay_seconds))


_CALCULATORS: dict[BackoffStrategy, BackoffCalculator] = {
    BackoffStrategy.CONSTANT: ConstantBackoff(),
    BackoffStrategy.LINEAR: LinearBackoff(),
    BackoffStrategy.EXPONENTIAL: ExponentialBackoff(),
    BackoffStrategy.EXPONENTIAL_JITTER: ExponentialJitterBackoff(),
}


def get_backoff_calculator(strategy: BackoffStrategy) -> BackoffCalculator:
    """Factory for backoff calculators."""
    return _CALCULATORS[strategy]


async def _sleep(delay: float, cancel_event: asyncio.Event | None) -> None:
    """Sleep for ``delay``, waking early with CancelledError if the event fires."""
    if cancel_event is None:
        await asyncio.sleep(delay)
        return
    try:
        await asyncio.wait_for(cancel_event.wait(), timeout=delay)
    except asyncio.TimeoutError:
        return
    raise asyncio.CancelledError("retry cancelled")


class RetryPolicy(Generic[T]):
    """Retry policy for operations that may fail transiently.

    Usage:
        policy = RetryPolicy(RetryConfig(max_retries=3))
        outcome = await policy.execute(fetch_data)
        if not outcome.succeeded:
            log.error("fetch_failed", attempts=outcome.attempt_count)
    """

    def __init__(
        self,
        config: RetryConfig | None = None,
        should_retry: Callable[[Error], bool] | None = None,
    ):
        self.config = config or RetryConfig.from_settings()
        self._should_retry = should_retry
        self._calculator = get_backoff_calculator(self.config.strategy)

    def should_retry(self, error: Error, attempt: int) -> bool:
        """Whether another attempt follows a failure on ``attempt`` (1-indexed)."""
        if attempt > self.config.max_retries:
            return False
        return self._should_retry is None or self._should_retry(error)

    async def execute(
        self,
        fn: Operation[T],
        on_retry: Callable[[int, Error, float], Awaitable[None]] | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> RetryResult[T]:
        """Execute function with retry policy.

        Args:
            fn: Async function returning Result; called with ``cancel_event``
                when one is given
            on_retry: Optional callback before each retry (attempt, error, delay)
            cancel_event: Raises ``asyncio.CancelledError`` between attempts once set

        Returns:
            RetryResult with final result and attempt history
        """
        attempts: list[RetryAttempt] = []
        start_time = datetime.now(timezone.utc)
        attempt = 0

        while True:
            attempt += 1
            if cancel_event is not None and cancel_event.is_set():
                raise asyncio.CancelledError("retry cancelled")

            attempt_start = datetime.now(timezone.utc)
            result = await (fn() if cancel_event is None else fn(cancel_event))

            if result.is_success or not self.should_retry(result.error, attempt):
                attempts.append(RetryAttempt(
                    attempt_number=attempt,
                    started_at=attempt_start,
                    delay_seconds=0.0,
                    error=None if result.is_success else result.error,
                ))
                if result.is_failure and attempt > 1:
                    log.warning(
                        "retry_exhausted",
                        attempts=attempt,
                        error_code=result.error.code,
                    )
                end_time = datetime.now(timezone.utc)
                return RetryResult(
                    result=result,
                    attempts=attempts,
                    total_duration_seconds=(end_time - start_time).total_seconds(),
                )

            delay = self._calculator.calculate(attempt, self.config)
            attempts.append(RetryAttempt(
                attempt_number=attempt,
                started_at=attempt_start,
                delay_seconds=delay,
                error=result.error,
            ))
            log.info(
                "retry_scheduled",
                attempt=attempt,
                delay_seconds=delay,
                error_code=result.error.code,
            )

            if on_retry:
                await on_retry(attempt, result.error, delay)

            await _sleep(delay, cancel_event)


@traced("retry")
async def retry_async(
    operation: Operation[T],
    config: RetryConfig | None = None,
    should_retry: Callable[[Error], bool] | None = None,
    cancel_event: asyncio.Event | None = None,
) -> Result[T]:
    """Run ``operation`` until it succeeds or retries run out.

    Returns the first success or the last failure. ``should_retry(error)``
    returning False stops immediately with that failure.
    """
    outcome = await RetryPolicy[T](config, should_retry).execute(
        operation, cancel_event=cancel_event,
    )
    return outcome.result


def retryable(
    config: RetryConfig | None = None,
    should_retry: Callable[[Error], bool] | None = None,
):
    """Decorator to make an async result-returning function retryable.

    Usage:
        @retryable(RetryConfig(max_retries=3))
        async def fetch_data() -> Result[Data]:
            ...
    """
    def decorator(fn: Callable[..., Awaitable[Result[T]]]):
        @functools.wraps(fn)
        async def wrapper(*args, **kwargs) -> Result[T]:
            return await retry_async(lambda: fn(*args, **kwargs), config, should_retry)

        return wrapper
    return decorator
