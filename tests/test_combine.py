from __future__ import annotations

import pytest

from railway.errors import AggregateError, DomainError, ValidationError
from railway.results import (
    CombinedValues,
    Failure,
    Success,
    combine,
    combine_all,
    failure,
    sequence,
    success,
    success_unit,
    traverse,
)
from railway.values import Age, EmailAddress, RequiredString

pytestmark = pytest.mark.unit


# =============================================================================
# combine
# =============================================================================


def test_two_successes_pair_up() -> None:
    assert combine(success(1), success("a")) == Success((1, "a"))


def test_lone_failure_is_returned_as_is(user_missing) -> None:
    failed = failure(user_missing)

    assert combine(success(1), failed) is failed
    assert combine(failed, success(1)) is failed


def test_two_validations_merge_into_one(email_invalid, name_required) -> None:
    result = combine(failure(email_invalid), failure(name_required))

    assert result == Failure(email_invalid.merge(name_required))
    assert result.error.fields == ("email", "name")


def test_mixed_failures_aggregate(email_invalid, user_missing) -> None:
    result = combine(failure(email_invalid), failure(user_missing))

    assert isinstance(result.error, AggregateError)
    assert result.error.errors == (email_invalid, user_missing)


def test_identical_failures_are_not_deduplicated(user_missing) -> None:
    result = combine(failure(user_missing), failure(user_missing), failure(user_missing))
    assert result.error.errors == (user_missing,) * 3


def test_nary_combine_is_flat() -> None:
    assert combine(success(1), success(2), success(3)).value == (1, 2, 3)


def test_chained_combine_is_flat() -> None:
    result = success(1).combine(success(2)).combine(success(3))

    assert result.value == (1, 2, 3)
    assert isinstance(result.value, CombinedValues)


def test_tuple_values_are_not_spliced() -> None:
    assert combine(success((1, 2)), success(3)).value == ((1, 2), 3)


def test_unit_values_are_dropped() -> None:
    assert combine(success_unit(), success(5)) == Success(5)
    assert combine(success(5), success_unit(), success(6)).value == (5, 6)


def test_map_and_bind_spread_combined_values() -> None:
    combined = combine(success(1), success(2), success(3))

    assert combined.map(lambda a, b, c: a + b + c) == Success(6)
    assert combined.bind(lambda a, b, c: success(a * b * c)) == Success(6)
    assert success(1).combine(success(2)).map(lambda a, b: a + b) == Success(3)


def test_single_parameter_callback_receives_whole_combined_tuple() -> None:
    combined = combine(success(1), success(2))

    assert combined.map(lambda values: len(values)) == Success(2)
    assert combined.ensure(lambda low, high: low < high, DomainError("unordered")) == Success((1, 2))
    assert combined.ensure(lambda low, high: low > high, DomainError("unordered")) == Failure(
        DomainError("unordered")
    )


def test_nary_failures_keep_order(email_invalid, name_required, user_missing, version_conflict) -> None:
    result = combine(
        failure(user_missing),
        failure(email_invalid),
        success(1),
        failure(version_conflict),
        failure(name_required),
    )

    assert result.error.errors == (
        user_missing,
        email_invalid.merge(name_required),
        version_conflict,
    )


def test_combine_requires_arguments() -> None:
    with pytest.raises(ValueError):
        combine()


def test_single_argument_combine_is_identity() -> None:
    only = success(1)
    assert combine(only) is only


def test_combine_all() -> None:
    assert combine_all([]) == Success(())
    assert combine_all(success(i) for i in range(3)) == Success((0, 1, 2))


def test_value_objects_accumulate_into_one_validation_error() -> None:
    result = (
        EmailAddress.try_create("bad")
        .combine(RequiredString.try_create("", "name"))
        .combine(Age.try_create(-1))
    )

    assert isinstance(result.error, ValidationError)
    assert result.error.fields == ("email", "name", "age")
    assert result.error.messages_for("email") == ("Email address is not valid.",)
    assert result.error.messages_for("age") == ("Age must be non-negative.",)


def test_value_objects_combine_on_success() -> None:
    result = combine(EmailAddress.try_create("ada@example.com"), Age.try_create(36))

    email, age = result.value
    assert email == EmailAddress("ada@example.com")
    assert age.value == 36


# =============================================================================
# traverse / sequence
# =============================================================================


def test_traverse_maps_in_order() -> None:
    assert traverse([1, 2, 3], lambda x: success(x * 2)) == Success([2, 4, 6])


def test_traverse_empty_input() -> None:
    assert traverse([], lambda x: success(x)) == Success([])


def test_traverse_stops_at_first_failure() -> None:
    seen: list[int] = []

    def check(x: int):
        seen.append(x)
        return success(x) if x != 2 else failure(DomainError(f"bad {x}"))

    assert traverse([1, 2, 3, 4], check) == Failure(DomainError("bad 2"))
    assert seen == [1, 2]


def test_traverse_accepts_generators() -> None:
    assert traverse((n for n in range(3)), success) == Success([0, 1, 2])


def test_sequence(user_missing) -> None:
    assert sequence([success(1), success(2)]) == Success([1, 2])
    assert sequence([success(1), failure(user_missing), success(3)]) == Failure(user_missing)
