from __future__ import annotations

from decimal import Decimal

import pytest

from railway.errors import ErrorException, ValidationError
from railway.results import Success
from railway.values import (
    Age,
    EmailAddress,
    NonNegativeInt,
    Percentage,
    PositiveInt,
    RequiredString,
    ScalarValue,
)

pytestmark = pytest.mark.unit


class FirstName(RequiredString):
    __slots__ = ()


def only_message(result) -> tuple[str, str]:
    error = result.error
    assert isinstance(error, ValidationError)
    (field_error,) = error.field_errors
    (message,) = field_error.messages
    return field_error.field, message


def test_required_string_strips_and_rejects_blank() -> None:
    assert RequiredString.try_create("  ada ").value == RequiredString("ada")
    assert only_message(RequiredString.try_create("   ", "name")) == ("name", "Required String cannot be empty.")
    assert only_message(RequiredString.try_create(None, "name")) == ("name", "Value is required.")


def test_required_string_subclass_names_its_field() -> None:
    assert only_message(FirstName.try_create("")) == ("first_name", "First Name cannot be empty.")
    assert FirstName.try_create("Ada").value != RequiredString("Ada")


@pytest.mark.parametrize("raw", ["user@example.com", "john.doe+tag@company.co.uk"])
def test_email_accepts_valid_addresses(raw: str) -> None:
    assert EmailAddress.try_create(raw) == Success(EmailAddress(raw))


@pytest.mark.parametrize("raw", ["not-an-email", "@example.com", "a@b", None, 12])
def test_email_rejects_invalid_addresses(raw) -> None:
    assert only_message(EmailAddress.try_create(raw)) == ("email", "Email address is not valid.")


def test_email_uses_given_field_name() -> None:
    assert only_message(EmailAddress.try_create("bad", "contact_email"))[0] == "contact_email"


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        (-1, "Age must be non-negative."),
        (151, "Age is unrealistically high."),
        ("12", "Value must be a valid integer."),
        (True, "Value must be a valid integer."),
        (None, "Age is required."),
    ],
)
def test_age_rejections(raw, message) -> None:
    assert only_message(Age.try_create(raw)) == ("age", message)


@pytest.mark.parametrize("raw", [0, 36, 150])
def test_age_bounds_inclusive(raw: int) -> None:
    assert Age.try_create(raw).value.value == raw


def test_positive_and_non_negative_int() -> None:
    assert PositiveInt.try_create(1).is_success
    assert only_message(PositiveInt.try_create(0)) == ("value", "Value must be greater than zero.")
    assert NonNegativeInt.try_create(0).is_success
    assert only_message(NonNegativeInt.try_create(-5, "stock")) == ("stock", "Value cannot be negative.")


@pytest.mark.parametrize("raw", [0, 100, 12.5, Decimal("99.99")])
def test_percentage_accepts_range(raw) -> None:
    assert Percentage.try_create(raw).is_success


@pytest.mark.parametrize("raw", [-0.1, 100.01, float("nan")])
def test_percentage_rejects_out_of_range(raw) -> None:
    assert only_message(Percentage.try_create(raw)) == ("percentage", "Percentage must be between 0 and 100.")


def test_percentage_as_fraction() -> None:
    assert Percentage.create(25).as_fraction() == Decimal("0.25")


def test_create_raises_on_invalid_input() -> None:
    assert str(Age.create(30)) == "30"
    with pytest.raises(ErrorException) as exc_info:
        Age.create(-3)
    assert exc_info.value.error.fields == ("age",)


def test_scalar_value_bases_are_abstract() -> None:
    with pytest.raises(TypeError):
        ScalarValue(1)

    class Unfinished(ScalarValue[int]):
        __slots__ = ()

    with pytest.raises(TypeError):
        Unfinished(1)


def test_email_reports_missing_value_as_invalid() -> None:
    assert only_message(EmailAddress.try_create(None, "contact")) == ("contact", "Email address is not valid.")
