"""Password Hasher — salted bcrypt hashing and verification."""

import pytest

from store_ratings.core.errors import CredentialIntegrityError
from store_ratings.infrastructure.password_hasher import PasswordHasher


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


def test_hash_is_not_plaintext(hasher):
    digest = hasher.hash("Abcdefg1!")
    assert digest != "Abcdefg1!"
    assert digest.startswith("$2")


def test_same_password_gets_different_salts(hasher):
    assert hasher.hash("Abcdefg1!") != hasher.hash("Abcdefg1!")


def test_verify_correct_password(hasher):
    assert hasher.verify("Abcdefg1!", hasher.hash("Abcdefg1!")) is True


def test_verify_wrong_password(hasher):
    assert hasher.verify("Wrong123!", hasher.hash("Abcdefg1!")) is False


def test_cost_factor_embedded_in_hash(hasher):
    assert "$04$" in hasher.hash("Abcdefg1!")


@pytest.mark.parametrize("stored", ["", "plaintext-password", "$2b$04$short"])
def test_malformed_stored_hash_is_integrity_error(hasher, stored):
    with pytest.raises(CredentialIntegrityError):
        hasher.verify("Abcdefg1!", stored)


def test_dummy_verify_does_not_raise(hasher):
    hasher.dummy_verify()
