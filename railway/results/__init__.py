"""Result container and combinators

Key components:
- Success / Failure and the sequential combinators on them
- combine / traverse for independent and per-item results
- Async lifting and concurrent ``parallel`` execution
- Maybe for optional values
"""
from .unit import UNIT, Unit
from .types import (
    Failure,
    Result,
    Success,
    failure,
    failure_if,
    from_exception,
    is_result,
    success,
    success_if,
    success_unit,
    try_result,
    try_result_async,
)
from .combine import CombinedValues, combine, combine_all, combine_pair, sequence, traverse
from .asyncs import (
    and_then_async,
    bind_async,
    combine_async,
    compensate_async,
    ensure_async,
    map_async,
    map_error_async,
    map_on_failure_async,
    match_async,
    recover_on_failure_async,
    settle,
    tap_async,
    tap_on_failure_async,
    traverse_async,
    unless_async,
    when_async,
)
from .parallel import ParallelBatch, await_parallel, parallel
from .maybe import Maybe, to_result

__all__ = [
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
    "combine_pair",
    "traverse",
    "sequence",
    "settle",
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
]
