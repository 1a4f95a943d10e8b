"""Asynchronous Lifting

Every function here accepts either a Result or an awaitable of one, and a
callback that may be sync or async. The rule is always the same: await the
input if it is pending, apply the synchronous rule, and await whatever the
callback returns if it is awaitable.

Callbacks are called the way the synchronous methods call them. When a
``cancel_event`` is given it is also handed to callbacks that take an
extra positional parameter, and only on the branch that invokes them.

Usage:
    result = await bind_async(fetch_user(user_id), load_profile)
    result = await map_async(result, render, cancel_event=shutdown)
"""
from __future__ import annotations

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Iterable, TypeVar, Union

from railway.core.tracing import traced
from railway.errors.types import Error

from ._invoke import invoke_cancellable
from .combine import combine
from .types import ErrorOrFactory, Failure, Result, Success

T = TypeVar("T")
U = TypeVar("U")

ResultLike = Union[Result[T], Awaitable[Result[T]]]


async def settle(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it."""
    if inspect.isawaitable(value):
        return await value
    return value


async def _call(fn: Callable[..., Any], arg: Any, cancel_event: asyncio.Event | None) -> Any:
    return await settle(invoke_cancellable(fn, arg, cancel_event))


async def map_async(
    result: ResultLike[T],
    f: Callable[..., U | Awaitable[U]],
    cancel_event: asyncio.Event | None = None,
) -> Result[U]:
    match await settle(result):
        case Success(value):
            return Success(await _call(f, value, cancel_event))
        case failed:
            return failed


async def bind_async(
    result: ResultLike[T],
    f: Callable[..., Result[U] | Awaitable[Result[U]]],
    cancel_event: asyncio.Event | None = None,
) -> Result[U]:
    match await settle(result):
        case Success(value):
            return await _call(f, value, cancel_event)
        case failed:
            return failed


and_then_async = bind_async


async def tap_async(
    result: ResultLike[T],
    f: Callable[..., Any],
    cancel_event: asyncio.Event | None = None,
) -> Result[T]:
    resolved = await settle(result)
    if resolved.is_success:
        await _call(f, resolved.value, cancel_event)
    return resolved


async def tap_on_failure_async(
    result: ResultLike[T],
    f: Callable[..., Any],
    cancel_event: asyncio.Event | None = None,
) -> Result[T]:
    resolved = await settle(result)
    if resolved.is_failure:
        await _call(f, resolved.error, cancel_event)
    return resolved


async def ensure_async(
    result: ResultLike[T],
    predicate: Callable[..., bool | Awaitable[bool]],
    error: ErrorOrFactory,
    cancel_event: asyncio.Event | None = None,
) -> Result[T]:
    """Async ensure; the error factory may itself be async."""
    resolved = await settle(result)
    if resolved.is_failure:
        return resolved
    if await _call(predicate, resolved.value, cancel_event):
        return resolved
    if isinstance(error, Error):
        return Failure(error)
    return Failure(await _call(error, resolved.value, None))


async def map_error_async(
    result: ResultLike[T],
    f: Callable[..., Error | Awaitable[Error]],
    cancel_event: asyncio.Event | None = None,
) -> Result[T]:
    resolved = await settle(result)
    if resolved.is_success:
        return resolved
    return Failure(await _call(f, resolved.error, cancel_event))


map_on_failure_async = map_error_async


async def compensate_async(
    result: ResultLike[T],
    predicate_or_f: Callable[..., Any],
    f: Callable[..., Any] | None = None,
    cancel_event: asyncio.Event | None = None,
) -> Result[T]:
    """Async compensate; both the predicate and the recovery may be async."""
    resolved = await settle(result)
    if resolved.is_success:
        return resolved
    if f is None:
        return await _call(predicate_or_f, resolved.error, cancel_event)
    if await _call(predicate_or_f, resolved.error, None):
        return await _call(f, resolved.error, cancel_event)
    return resolved


recover_on_failure_async = compensate_async


async def combine_async(*results: ResultLike[Any]) -> Result[Any]:
    """Await every input concurrently, then ``combine`` them in order.

    All inputs are awaited even when one raises; the first exception in
    argument order is then re-raised.
    """
    settled = await asyncio.gather(*(settle(r) for r in results), return_exceptions=True)
    for outcome in settled:
        if isinstance(outcome, BaseException):
            raise outcome
    return combine(*settled)


@traced("traverse_async")
async def traverse_async(
    items: Iterable[T],
    f: Callable[..., Result[U] | Awaitable[Result[U]]],
    cancel_event: asyncio.Event | None = None,
) -> Result[list[U]]:
    """Sequential, short-circuiting traverse.

    Raises ``asyncio.CancelledError`` before the next element once
    ``cancel_event`` is set.
    """
    values: list[U] = []
    for item in items:
        if cancel_event is not None and cancel_event.is_set():
            raise asyncio.CancelledError("traverse_async cancelled")
        match await _call(f, item, cancel_event):
            case Success(value):
                values.append(value)
            case failed:
                return failed
    return Success(values)


async def match_async(
    result: ResultLike[T],
    on_success: Callable[[T], U | Awaitable[U]],
    on_failure: Callable[[Error], U | Awaitable[U]],
) -> U:
    match await settle(result):
        case Success(value):
            return await _call(on_success, value, None)
        case Failure(error):
            return await _call(on_failure, error, None)


async def _holds(condition: Any, value: Any) -> bool:
    if callable(condition):
        return bool(await _call(condition, value, None))
    return bool(condition)


async def when_async(
    result: ResultLike[T],
    condition: bool | Callable[[T], bool | Awaitable[bool]],
    f: Callable[..., Result[T] | Awaitable[Result[T]]],
    cancel_event: asyncio.Event | None = None,
) -> Result[T]:
    resolved = await settle(result)
    if resolved.is_success and await _holds(condition, resolved.value):
        return await _call(f, resolved.value, cancel_event)
    return resolved


async def unless_async(
    result: ResultLike[T],
    condition: bool | Callable[[T], bool | Awaitable[bool]],
    f: Callable[..., Result[T] | Awaitable[Result[T]]],
    cancel_event: asyncio.Event | None = None,
) -> Result[T]:
    resolved = await settle(result)
    if resolved.is_success and not await _holds(condition, resolved.value):
        return await _call(f, resolved.value, cancel_event)
    return resolved
