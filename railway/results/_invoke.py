"""Calling user callbacks that may or may not take the current value.

One rule applies to every callback, sync or async:

- a callback with no positional parameter is called with nothing;
- a ``CombinedValues`` is spread over a callback with several positional
  parameters, so ``combine(a, b).map(lambda x, y: ...)`` works;
- otherwise the callback gets the value as its only argument.

A cancellation event, when one is given, takes the last positional slot of
a callback with at least two; callbacks with fewer never see it.
"""
from __future__ import annotations

import inspect
from typing import Any, Callable, NamedTuple


class CombinedValues(tuple):
    """Tuple of values produced by ``combine``.

    Combining a ``CombinedValues`` with another value extends it instead of
    nesting, so ``a.combine(b).combine(c)`` carries ``(a, b, c)``. Compares
    equal to a plain tuple with the same items.
    """
    __slots__ = ()


class _Shape(NamedTuple):
    positional: int
    variadic: bool


def _shape(fn: Callable[..., Any]) -> _Shape | None:
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        # builtins without a signature
        return None
    positional = sum(
        p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
        for p in params
    )
    variadic = any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params)
    return _Shape(positional, variadic)


def _arguments(shape: _Shape | None, arg: Any, reserved: int) -> tuple[Any, ...]:
    if shape is None:
        return (arg,)
    slots = shape.positional - reserved
    if isinstance(arg, CombinedValues) and slots > 1:
        return tuple(arg)
    if slots <= 0 and not shape.variadic:
        return ()
    return (arg,)


def invoke(fn: Callable[..., Any], arg: Any) -> Any:
    """Call ``fn`` with ``arg``, its spread items, or nothing, by signature."""
    return fn(*_arguments(_shape(fn), arg, 0))


def invoke_cancellable(fn: Callable[..., Any], arg: Any, cancel_event: Any = None) -> Any:
    """Like ``invoke``, appending ``cancel_event`` when ``fn`` has room for it."""
    shape = _shape(fn)
    if shape is None:
        return fn(arg) if cancel_event is None else fn(arg, cancel_event)
    if cancel_event is None or (shape.positional < 2 and not shape.variadic):
        return fn(*_arguments(shape, arg, 0))
    args = _arguments(shape, arg, 1)
    if shape.variadic or shape.positional > len(args):
        args = (*args, cancel_event)
    return fn(*args)
