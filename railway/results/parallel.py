"""Concurrent Combinators

``parallel`` starts every producer as an asyncio task right away and
returns a ``ParallelBatch``. Awaiting the batch waits for all of them
(a failing producer never cancels its siblings) and then combines the
results in producer order, so errors accumulate exactly as ``combine``
would.

Usage:
    user, orders = (
        await parallel(lambda: fetch_user(uid), lambda: fetch_orders(uid))
    ).unwrap()

    result = await parallel(fetch_user, fetch_orders).bind(build_report)
"""
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Generator

from railway.core.logging import get_logger
from railway.core.tracing import traced

from ._invoke import invoke
from .asyncs import settle
from .combine import combine
from .types import Result, Success

log = get_logger("railway.parallel")

Producer = Callable[..., Awaitable[Result[Any]]]


class ParallelBatch:
    """Handle on a set of concurrently running producers."""

    def __init__(self, producers: tuple[Producer, ...], cancel_event: asyncio.Event | None = None):
        if not producers:
            raise ValueError("parallel() requires at least one producer")
        loop = asyncio.get_running_loop()
        self._tasks: list[asyncio.Future[Result[Any]]] = []
        try:
            for p in producers:
                pending = p() if cancel_event is None else p(cancel_event)
                self._tasks.append(asyncio.ensure_future(pending, loop=loop))
        except BaseException as e:
            # nothing will ever await the tasks already scheduled
            for task in self._tasks:
                task.cancel()
            log.debug(
                "parallel_start_failed",
                producer_index=len(self._tasks),
                error_type=type(e).__name__,
            )
            raise

    def __len__(self) -> int:
        return len(self._tasks)

    def __await__(self) -> Generator[Any, None, Result[Any]]:
        return self.when_all().__await__()

    @traced("parallel")
    async def when_all(self) -> Result[Any]:
        """Wait for every producer, then combine in producer order.

        If any producer raised, the first exception in producer order is
        re-raised once all producers have finished.
        """
        outcomes = await asyncio.gather(*self._tasks, return_exceptions=True)
        for index, outcome in enumerate(outcomes):
            if isinstance(outcome, BaseException):
                log.debug(
                    "parallel_producer_raised",
                    producer_index=index,
                    error_type=type(outcome).__name__,
                )
                raise outcome
        return combine(*outcomes)

    async def bind(self, f: Callable[..., Any]) -> Result[Any]:
        """Await the batch and, on success, call ``f`` with the values unpacked."""
        match await self.when_all():
            case Success(value):
                return await settle(invoke(f, value))
            case failed:
                return failed


def parallel(*producers: Producer, cancel_event: asyncio.Event | None = None) -> ParallelBatch:
    """Start ``producers`` concurrently; must be called from a running event loop.

    Each producer is a nullary callable returning an awaitable Result, or a
    unary one taking ``cancel_event`` when that is supplied.
    """
    return ParallelBatch(producers, cancel_event)


async def await_parallel(
    *producers: Producer,
    cancel_event: asyncio.Event | None = None,
) -> Result[Any]:
    """Run ``producers`` concurrently and combine their results."""
    return await parallel(*producers, cancel_event=cancel_event).when_all()
