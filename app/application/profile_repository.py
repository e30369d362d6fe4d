"""Profile repository protocol. Application layer depends on this; infrastructure implements it."""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Protocol

from app.domain.models.actor import Actor, UserRole
from app.domain.models.complaint import Submitter


@dataclass(frozen=True)
class Profile:
    """Row of the profile store, keyed by the auth subject id."""

    user_id: str
    name: str
    email: str
    role: UserRole
    department: Optional[str] = None
    student_id: Optional[str] = None

    def to_actor(self) -> Actor:
        return Actor(
            identifier=self.user_id,
            email=self.email,
            display_name=self.name,
            role=self.role,
            department=self.department,
            student_id=self.student_id,
        )

    def to_submitter(self) -> Submitter:
        return Submitter(
            id=self.user_id,
            name=self.name,
            email=self.email,
            department=self.department,
            student_id=self.student_id,
        )


class ProfileRepository(Protocol):
    """Read access to profiles. Implementations raise ProfileLookupError when the store fails."""

    async def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        """Return the profile for one subject id, or None."""
        ...

    async def get_many(self, user_ids: Iterable[str]) -> Dict[str, Profile]:
        """Resolve several subject ids in one round-trip. Missing ids are absent from the result."""
        ...
