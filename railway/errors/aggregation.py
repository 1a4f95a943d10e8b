"""Error Aggregation Policy

How errors from independent branches are merged when results are combined:

- ValidationError + ValidationError -> one ValidationError, field lists
  concatenated left to right, same-named fields merged.
- anything else -> AggregateError of both sides' members, left to right,
  with nested aggregates spliced in rather than nested.

Identical errors from two branches are kept twice; nothing is deduplicated.
"""
from __future__ import annotations

from functools import reduce
from typing import Iterable

from .types import AggregateError, Error, ValidationError


def members(error: Error) -> tuple[Error, ...]:
    """The errors an error contributes to an aggregate."""
    match error:
        case AggregateError(errors=errors):
            return errors
        case _:
            return (error,)


def merge_errors(left: Error, right: Error) -> Error:
    """Merge two errors from independent branches."""
    match left, right:
        case ValidationError(), ValidationError():
            return left.merge(right)
        case _:
            return AggregateError(errors=(*members(left), *members(right)))


def merge_all(errors: Iterable[Error]) -> Error | None:
    """Left-fold ``merge_errors`` over ``errors``; None when there are none."""
    errors = list(errors)
    if not errors:
        return None
    return reduce(merge_errors, errors)
