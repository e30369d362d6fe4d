"""Domain model for the signed-in actor. Pure business semantics, no ORM or infrastructure."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class UserRole(str, Enum):
    """The two roles a profile can carry."""

    STUDENT = "student"
    ADMIN = "admin"


@dataclass(frozen=True)
class Actor:
    """
    The identity every complaint operation runs as.
    Immutable: a session change replaces the whole Actor.
    """

    identifier: str
    email: str
    display_name: str
    role: UserRole
    department: Optional[str] = None
    student_id: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
