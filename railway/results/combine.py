"""Accumulating Combinators

``combine`` gathers independent results: it never short-circuits, so
every failure is reported, merged by ``railway.errors.aggregation``.
``traverse`` maps a result-producing function over items and stops at the
first failure, the way dependent steps do.

Usage:
    combine(EmailAddress.try_create(email), Age.try_create(age)).map(
        lambda email, age: Person(email, age)
    )
"""
from __future__ import annotations

from functools import reduce
from typing import Any, Callable, Iterable, TypeVar

from railway.core.tracing import traced
from railway.errors.aggregation import merge_errors

from ._invoke import CombinedValues
from .types import Failure, Result, Success
from .unit import UNIT

T = TypeVar("T")
U = TypeVar("U")


def _items(value: Any) -> tuple[Any, ...]:
    return tuple(value) if isinstance(value, CombinedValues) else (value,)


def _join(left: Any, right: Any) -> Any:
    if left is UNIT:
        return right
    if right is UNIT:
        return left
    return CombinedValues((*_items(left), *_items(right)))


def combine_pair(left: Result[Any], right: Result[Any]) -> Result[Any]:
    """Binary combine: both successes pair up, failures merge."""
    match left, right:
        case Success(a), Success(b):
            return Success(_join(a, b))
        case Failure(e1), Failure(e2):
            return Failure(merge_errors(e1, e2))
        case Failure(), _:
            return left
        case _:
            return right


@traced("combine")
def combine(*results: Result[Any]) -> Result[Any]:
    """Left fold of the binary combine over ``results``."""
    if not results:
        raise ValueError("combine() requires at least one result")
    return reduce(combine_pair, results)


def combine_all(results: Iterable[Result[Any]]) -> Result[Any]:
    """``combine`` over an iterable; an empty one yields an empty success."""
    results = tuple(results)
    if not results:
        return Success(CombinedValues())
    return combine(*results)


@traced("traverse")
def traverse(items: Iterable[T], f: Callable[[T], Result[U]]) -> Result[list[U]]:
    """Apply ``f`` to each item in order, stopping at the first failure."""
    values: list[U] = []
    for item in items:
        match f(item):
            case Success(value):
                values.append(value)
            case failed:
                return failed
    return Success(values)


def sequence(results: Iterable[Result[T]]) -> Result[list[T]]:
    """Turn results into a result of a list, stopping at the first failure."""
    return traverse(results, lambda r: r)
