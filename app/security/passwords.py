"""PBKDF2 password hashing for the local auth provider. No global state."""

import base64
import hmac
import os

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from app.security.exceptions import PasswordHashError

HASH_SCHEME = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 480000
SALT_BYTES = 16


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    """Derive a 32-byte digest from the password and salt."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt,
        iterations=iterations,
    )
    return kdf.derive(password.encode("utf-8"))


def _b64(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii")


def hash_password(password: str, iterations: int = DEFAULT_ITERATIONS) -> str:
    """Return `scheme$iterations$salt$digest` with a fresh random salt."""
    salt = os.urandom(SALT_BYTES)
    digest = _derive(password, salt, iterations)
    return f"{HASH_SCHEME}${iterations}${_b64(salt)}${_b64(digest)}"


def verify_password(password: str, encoded: str) -> bool:
    """
    Check password against an encoded hash. The iteration count stored in the
    hash wins over the current default, so old hashes keep verifying.
    """
    try:
        scheme, iterations, salt, digest = encoded.split("$")
        if scheme != HASH_SCHEME:
            raise ValueError(scheme)
        expected = base64.urlsafe_b64decode(digest.encode("ascii"))
        actual = _derive(password, base64.urlsafe_b64decode(salt.encode("ascii")), int(iterations))
    except ValueError as e:
        raise PasswordHashError(f"Unsupported password hash: {e}") from e
    return hmac.compare_digest(expected, actual)
