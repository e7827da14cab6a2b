"""Credential Validation — field policies for names, emails, passwords, addresses, ratings."""

import pytest

from store_ratings.core.domain_types import Role
from store_ratings.core.errors import InvalidInputError
from store_ratings.core.validate_credentials import (
    validate_address,
    validate_email,
    validate_name,
    validate_password,
    validate_rating_value,
    validate_role,
)


# ─── name ────────────────────────────────────────────────────────

def test_name_of_19_chars_rejected():
    with pytest.raises(InvalidInputError) as exc:
        validate_name("a" * 19)
    assert exc.value.field == "name"


def test_name_bounds_accepted():
    assert validate_name("a" * 20) == "a" * 20
    assert validate_name("a" * 60) == "a" * 60


def test_name_of_61_chars_rejected():
    with pytest.raises(InvalidInputError):
        validate_name("a" * 61)


def test_missing_name_rejected():
    with pytest.raises(InvalidInputError):
        validate_name(None)


def test_store_name_label_in_message():
    with pytest.raises(InvalidInputError, match="Store name"):
        validate_name("short", label="Store name")


# ─── email ───────────────────────────────────────────────────────

@pytest.mark.parametrize("email", [
    "user@example.com", "first.last@mail.example.org", "a-b_c@x-y.io",
])
def test_valid_emails(email):
    assert validate_email(email) == email


@pytest.mark.parametrize("email", [
    "", "plainaddress", "@example.com", "user@", "user@example", "user@example.toolong",
])
def test_invalid_emails(email):
    with pytest.raises(InvalidInputError) as exc:
        validate_email(email)
    assert exc.value.field == "email"


# ─── password ────────────────────────────────────────────────────

def test_password_policy_accepts_example():
    assert validate_password("Abcdefg1!") == "Abcdefg1!"


@pytest.mark.parametrize("password", [
    "Abc!efg",             # 7 chars
    "Abcdefghijklmno!x",   # 17 chars
    "abcdefg1!",           # no uppercase
    "Abcdefg12",           # no special
    "Abcdefg1?",           # ? is not in the special set
])
def test_password_policy_rejections(password):
    with pytest.raises(InvalidInputError):
        validate_password(password)


def test_password_field_name_propagates():
    with pytest.raises(InvalidInputError) as exc:
        validate_password("weak", field="newPassword")
    assert exc.value.field == "newPassword"


# ─── address ─────────────────────────────────────────────────────

def test_address_optional():
    assert validate_address(None) == ""


def test_address_max_length():
    assert validate_address("x" * 400) == "x" * 400
    with pytest.raises(InvalidInputError):
        validate_address("x" * 401)


# ─── role / rating ───────────────────────────────────────────────

def test_role_from_string():
    assert validate_role("owner") is Role.OWNER


def test_unknown_role_rejected():
    with pytest.raises(InvalidInputError):
        validate_role("superuser")


@pytest.mark.parametrize("value", [1, 2, 3, 4, 5])
def test_rating_in_range(value):
    assert validate_rating_value(value) == value


@pytest.mark.parametrize("value", [0, 6, -1, 3.0, "3", True, None])
def test_rating_out_of_range_or_wrong_type(value):
    with pytest.raises(InvalidInputError) as exc:
        validate_rating_value(value)
    assert exc.value.field == "rating"


def test_validators_return_input_unchanged():
    padded = "  Twenty Characters Long Name  "
    assert validate_name(padded) == padded
    assert validate_address("  5 High Street ") == "  5 High Street "
    assert validate_password("Abcdefg1!") == "Abcdefg1!"
