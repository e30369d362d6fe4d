"""Password hashing: round trip, salting, stored iteration count, malformed hashes."""

import pytest

from app.security.exceptions import PasswordHashError
from app.security.passwords import hash_password, verify_password


def test_hash_and_verify():
    encoded = hash_password("secret123", iterations=1000)
    assert encoded.startswith("pbkdf2_sha256$1000$")
    assert verify_password("secret123", encoded) is True
    assert verify_password("secret124", encoded) is False


def test_same_password_gets_different_salts():
    assert hash_password("secret123", iterations=1000) != hash_password("secret123", iterations=1000)


def test_stored_iterations_are_used():
    encoded = hash_password("secret123", iterations=1200)
    assert verify_password("secret123", encoded)


@pytest.mark.parametrize(
    "encoded",
    ["", "plaintext", "md5$1000$abc$def", "pbkdf2_sha256$many$abc$def"],
)
def test_malformed_hash_raises(encoded):
    with pytest.raises(PasswordHashError):
        verify_password("secret123", encoded)
