"""Security: RBAC and password hashing. No FastAPI."""

from app.security.passwords import hash_password, verify_password
from app.security.rbac import RBACService

__all__ = [
    "RBACService",
    "hash_password",
    "verify_password",
]
