from __future__ import annotations

import pytest

from railway.errors import NotFoundError, ResultAccessError
from railway.results import Failure, Maybe, Success, success, to_result
from railway.values import EmailAddress

pytestmark = pytest.mark.unit


def test_of_and_none() -> None:
    assert Maybe.of(3).has_value
    assert Maybe.of(None).has_no_value
    assert Maybe.of(None) == Maybe.none()
    assert Maybe.of(0).value == 0


def test_value_on_empty_raises() -> None:
    with pytest.raises(ResultAccessError):
        Maybe.none().value


def test_value_or_and_map() -> None:
    assert Maybe.none().value_or("fallback") == "fallback"
    assert Maybe.of(2).map(lambda x: x + 1) == Maybe.of(3)
    assert Maybe.none().map(lambda x: pytest.fail("must not map")) == Maybe.none()


def test_to_result(user_missing) -> None:
    assert Maybe.of("ada").to_result(user_missing) == Success("ada")
    assert Maybe.none().to_result(user_missing) == Failure(user_missing)
    assert to_result(Maybe.of(1), user_missing) == Success(1)


def test_to_result_factory_is_lazy() -> None:
    calls: list[int] = []

    def make_error():
        calls.append(1)
        return NotFoundError("missing")

    assert Maybe.of(1).to_result(make_error) == Success(1)
    assert calls == []
    assert Maybe.none().to_result(make_error) == Failure(NotFoundError("missing"))
    assert calls == [1]


def test_optional_validates_present_values_only() -> None:
    assert Maybe.optional(None, EmailAddress.try_create) == Success(Maybe.none())
    assert Maybe.optional("ada@example.com", EmailAddress.try_create) == success(
        Maybe.of(EmailAddress("ada@example.com"))
    )
    assert Maybe.optional("nope", EmailAddress.try_create).error.fields == ("email",)


def test_repr() -> None:
    assert repr(Maybe.of(1)) == "Maybe.of(1)"
    assert repr(Maybe.none()) == "Maybe.none()"
