"""Combinator Tracing

``traced(name)`` wraps a combinator so that, when ``TRACE_COMBINATORS``
is enabled, each call emits one ``combinator_completed`` debug event with
the outcome and, on failure, the error code. The wrapped function's
return value and exceptions pass through untouched.

Usage:
    @traced("combine")
    def combine(*results): ...
"""
from __future__ import annotations

import functools
import inspect
import time
from typing import Any, Callable, TypeVar

from .config import get_settings
from .logging import get_logger

F = TypeVar("F", bound=Callable[..., Any])

log = get_logger("railway.tracing")


def tracing_enabled() -> bool:
    return get_settings().TRACE_COMBINATORS


def _outcome(result: Any) -> dict[str, Any]:
    # Results are duck-typed so tracing does not depend on the results package
    if getattr(result, "is_failure", False):
        return {"outcome": "failure", "error_code": result.error.code}
    if getattr(result, "is_success", False):
        return {"outcome": "success"}
    return {"outcome": "returned"}


def _emit(name: str, started: float, **fields: Any) -> None:
    log.debug(
        "combinator_completed",
        combinator=name,
        duration_ms=round((time.perf_counter() - started) * 1000, 3),
        **fields,
    )


def traced(name: str) -> Callable[[F], F]:
    """Decorator emitting a trace event per call of a sync or async combinator."""

    def decorator(fn: F) -> F:
        if inspect.iscoroutinefunction(fn):
            @functools.wraps(fn)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                if not tracing_enabled():
                    return await fn(*args, **kwargs)
                started = time.perf_counter()
                try:
                    result = await fn(*args, **kwargs)
                except BaseException as e:
                    _emit(name, started, outcome="raised", exception=type(e).__name__)
                    raise
                _emit(name, started, **_outcome(result))
                return result

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if not tracing_enabled():
                return fn(*args, **kwargs)
            started = time.perf_counter()
            try:
                result = fn(*args, **kwargs)
            except BaseException as e:
                _emit(name, started, outcome="raised", exception=type(e).__name__)
                raise
            _emit(name, started, **_outcome(result))
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
