from __future__ import annotations

import pickle

import pytest

from railway.errors import (
    AggregateError,
    ConflictError,
    DomainError,
    ErrorException,
    NotFoundError,
    ResultAccessError,
    UnexpectedError,
    ValidationError,
    bad_request,
    not_found,
    rate_limited,
    validation,
)
from railway.results import (
    UNIT,
    Failure,
    Success,
    Unit,
    failure,
    failure_if,
    from_exception,
    is_result,
    success,
    success_if,
    success_unit,
    try_result,
)

pytestmark = pytest.mark.unit


def never(*_args):
    raise AssertionError("callback must not be invoked")


# =============================================================================
# Construction and access
# =============================================================================


def test_success_and_failure_flags(user_missing) -> None:
    assert success(1).is_success and not success(1).is_failure
    assert failure(user_missing).is_failure and not failure(user_missing).is_success


def test_wrong_branch_access_raises(user_missing) -> None:
    with pytest.raises(ResultAccessError):
        success(1).error
    with pytest.raises(ResultAccessError):
        failure(user_missing).value


def test_failure_accepts_error_factory() -> None:
    assert failure(lambda: DomainError("late")) == Failure(DomainError("late"))


def test_success_if_and_failure_if(user_missing) -> None:
    assert success_if(True, 1, user_missing) == Success(1)
    assert success_if(False, 1, user_missing) == Failure(user_missing)
    assert failure_if(True, 1, user_missing) == Failure(user_missing)
    assert failure_if(False, 1, user_missing) == Success(1)


def test_success_unit_carries_unit_singleton() -> None:
    assert success_unit().value is UNIT
    assert Unit() is UNIT
    assert repr(UNIT) == "UNIT"
    assert pickle.loads(pickle.dumps(UNIT)) is UNIT


def test_is_result(user_missing) -> None:
    assert is_result(success(1))
    assert is_result(failure(user_missing))
    assert not is_result(1)


def test_pattern_matching(user_missing) -> None:
    match success(3):
        case Success(value):
            assert value == 3
        case Failure():
            pytest.fail("expected success")

    match failure(user_missing):
        case Failure(NotFoundError(detail=detail)):
            assert detail == "User not found: 42"
        case _:
            pytest.fail("expected not-found failure")


# =============================================================================
# Sequential combinators
# =============================================================================


def test_map(user_missing) -> None:
    assert success(2).map(lambda x: x * 10) == Success(20)
    assert failure(user_missing).map(never) == Failure(user_missing)


def test_map_identity() -> None:
    assert success("v").map(lambda x: x) == success("v")


def test_map_and_bind_accept_nullary_callbacks(user_missing) -> None:
    assert success(1).map(lambda: "constant") == Success("constant")
    assert success(1).bind(lambda: success(2)) == Success(2)
    assert failure(user_missing).map_error(lambda: ConflictError("replaced")) == Failure(ConflictError("replaced"))


def test_bind_returns_inner_result_as_is(user_missing) -> None:
    inner = Failure(ConflictError("taken"))
    assert success(1).bind(lambda _: inner) is inner
    assert success(1).and_then(lambda x: Success(x + 1)) == Success(2)


def test_bind_short_circuits(user_missing) -> None:
    start = failure(user_missing)
    assert start.bind(never).bind(never) is start


def test_bind_left_identity() -> None:
    f = lambda x: success(x * 2)  # noqa: E731
    assert success(21).bind(f) == f(21)


def test_tap_runs_on_success_only(user_missing) -> None:
    seen: list[object] = []
    ok = success(5)

    assert ok.tap(seen.append) is ok
    assert ok.tap(lambda: seen.append("nullary")) is ok
    assert failure(user_missing).tap(never).is_failure
    assert seen == [5, "nullary"]


def test_tap_on_failure_runs_on_failure_only(user_missing) -> None:
    seen: list[object] = []
    failed = failure(user_missing)

    assert failed.tap_on_failure(seen.append) is failed
    assert success(1).tap_on_failure(never) == Success(1)
    assert seen == [user_missing]


def test_ensure(user_missing) -> None:
    too_small = DomainError("too small")

    assert success(20).ensure(lambda v: v > 10, too_small) == Success(20)
    assert success(5).ensure(lambda v: v > 10, too_small) == Failure(too_small)
    assert failure(user_missing).ensure(never, too_small) == Failure(user_missing)


def test_ensure_error_factory_receives_value() -> None:
    result = success(5).ensure(lambda v: v > 10, lambda v: DomainError(f"{v} is too small"))
    assert result == Failure(DomainError("5 is too small"))


def test_ensure_error_factory_not_called_when_predicate_holds() -> None:
    assert success(50).ensure(lambda v: v > 10, never) == Success(50)


def test_map_error(user_missing) -> None:
    to_conflict = lambda e: ConflictError(e.detail)  # noqa: E731

    assert failure(user_missing).map_error(to_conflict) == Failure(ConflictError("User not found: 42"))
    assert failure(user_missing).map_on_failure(to_conflict).error.code == "conflict.error"
    assert success(1).map_error(never) == Success(1)


def test_when_and_unless(user_missing) -> None:
    times_ten = lambda v: Success(v * 10)  # noqa: E731

    assert success(2).when(True, times_ten) == Success(20)
    assert success(2).when(lambda v: v > 5, times_ten) == Success(2)
    assert success(2).unless(lambda v: v > 5, times_ten) == Success(20)
    assert success(2).unless(True, times_ten) == Success(2)
    assert failure(user_missing).when(True, never) == Failure(user_missing)


def test_exceptions_from_callbacks_propagate() -> None:
    with pytest.raises(ZeroDivisionError):
        success(0).map(lambda x: 1 / x)


# =============================================================================
# Terminal folds
# =============================================================================


def test_match(user_missing) -> None:
    assert success(2).match(lambda v: v + 1, never) == 3
    assert failure(user_missing).match(never, lambda e: e.code) == "not.found.error"


def test_switch_runs_side_effects(user_missing) -> None:
    seen: list[object] = []
    success(1).switch(seen.append, never)
    failure(user_missing).switch(never, seen.append)
    assert seen == [1, user_missing]


def test_match_error_dispatches_on_variant(user_missing, email_invalid) -> None:
    assert failure(user_missing).match_error(
        on_success=never,
        on_validation=never,
        on_not_found=lambda e: f"404 {e.detail}",
    ) == "404 User not found: 42"
    assert failure(email_invalid).match_error(
        never,
        on_validation=lambda e: e.fields,
        on_error=never,
    ) == ("email",)


def test_match_error_falls_back_to_on_error(version_conflict) -> None:
    assert failure(version_conflict).match_error(
        never, on_not_found=never, on_error=lambda e: e.status
    ) == 409


def test_match_error_on_aggregate(user_missing, version_conflict) -> None:
    agg = AggregateError.of(user_missing, version_conflict)
    assert failure(agg).match_error(never, on_aggregate=len) == 2


def test_match_error_without_handler_raises(version_conflict) -> None:
    with pytest.raises(ResultAccessError):
        failure(version_conflict).match_error(never, on_not_found=never)


def test_match_error_on_success_calls_on_success() -> None:
    assert success(7).match_error(on_success=lambda v: v * 2, on_error=never) == 14


def test_unwrap_family(user_missing) -> None:
    ok, failed = success(1), failure(user_missing)

    assert ok.unwrap() == 1
    assert ok.unwrap_or(0) == 1
    assert ok.unwrap_or_else(never) == 1
    assert ok.expect("needed") == 1
    assert failed.unwrap_or(0) == 0
    assert failed.unwrap_or_else(lambda e: e.code) == "not.found.error"
    assert failed.unwrap_error() is user_missing

    with pytest.raises(ResultAccessError):
        failed.unwrap()
    with pytest.raises(ResultAccessError):
        ok.unwrap_error()
    with pytest.raises(ResultAccessError, match="needed a user"):
        failed.expect("needed a user")


def test_unwrap_or_raise(user_missing) -> None:
    assert success(1).unwrap_or_raise() == 1
    with pytest.raises(ErrorException) as exc_info:
        failure(user_missing).unwrap_or_raise()
    assert exc_info.value.error is user_missing


# =============================================================================
# Recovery
# =============================================================================


def test_compensate_replaces_failure(user_missing) -> None:
    assert failure(user_missing).compensate(lambda: Success("guest")) == Success("guest")
    assert failure(user_missing).compensate(lambda e: Success(e.code)) == Success("not.found.error")


def test_compensate_can_return_another_failure(user_missing, version_conflict) -> None:
    assert failure(user_missing).compensate(lambda: Failure(version_conflict)) == Failure(version_conflict)


def test_compensate_skipped_on_success() -> None:
    assert success(1).compensate(never) == Success(1)
    assert success(1).compensate(never, never) == Success(1)


def test_compensate_predicate_gates_recovery(user_missing, version_conflict) -> None:
    is_not_found = lambda e: isinstance(e, NotFoundError)  # noqa: E731
    recovered = failure(user_missing).compensate(is_not_found, lambda: Success("default"))
    untouched = failure(version_conflict)

    assert recovered == Success("default")
    assert untouched.compensate(is_not_found, never) is untouched


def test_recover_on_failure_chains_left_to_right(user_missing) -> None:
    result = (
        failure(user_missing)
        .recover_on_failure(lambda: Failure(ConflictError("still failing")))
        .recover_on_failure(lambda e: Success(e.detail))
        .recover_on_failure(never)
    )
    assert result == Success("still failing")


# =============================================================================
# Exceptions to results
# =============================================================================


def test_try_result_captures_exceptions() -> None:
    assert try_result(lambda: 10 // 2) == Success(5)
    assert try_result(lambda: 1 / 0) == Failure(UnexpectedError("division by zero"))


def test_try_result_uses_type_name_for_empty_message() -> None:
    def boom():
        raise RuntimeError()

    assert try_result(boom).error.detail == "RuntimeError"


def test_try_result_with_mapper() -> None:
    def parse():
        return int("not a number")

    result = try_result(parse, lambda e: ValidationError.for_field("qty", str(e)))
    assert result.error.fields == ("qty",)


def test_try_result_does_not_catch_base_exceptions() -> None:
    def interrupt():
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        try_result(interrupt)


def test_from_exception() -> None:
    assert from_exception(ValueError("bad")) == Failure(UnexpectedError("bad"))
    assert from_exception(ValueError("bad"), lambda e: DomainError(str(e))) == Failure(DomainError("bad"))


# =============================================================================
# Builders
# =============================================================================


def test_builders_return_failures() -> None:
    assert not_found("User", 7) == Failure(NotFoundError("User not found: 7"))
    assert rate_limited("billing", 2.5).error.retry_after == 2.5
    assert validation("name", "required").error.messages_for("name") == ("required",)
    assert bad_request("missing body").error.status == 400
