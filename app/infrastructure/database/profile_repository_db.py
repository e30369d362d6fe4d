"""DB-backed profile repository. Reads the profiles table."""

import logging
from typing import Dict, Iterable, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.exceptions import ProfileLookupError
from app.application.profile_repository import Profile
from app.domain.models.actor import UserRole
from app.infrastructure.database.models import ProfileRecord

logger = logging.getLogger(__name__)


def _to_profile(orm: ProfileRecord) -> Profile:
    return Profile(
        user_id=orm.user_id,
        name=orm.name,
        email=orm.email,
        role=UserRole(orm.role),
        department=orm.department,
        student_id=orm.student_id,
    )


class DbProfileRepository:
    """Implements ProfileRepository protocol. Store failures surface as ProfileLookupError."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        stmt = select(ProfileRecord).where(ProfileRecord.user_id == user_id)
        try:
            result = await self._session.execute(stmt)
            orm = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise ProfileLookupError(f"Profile lookup failed for {user_id}: {e}") from e
        if orm is None:
            return None
        try:
            return _to_profile(orm)
        except ValueError as e:
            raise ProfileLookupError(f"Profile for {user_id} has unknown role {orm.role!r}") from e

    async def get_many(self, user_ids: Iterable[str]) -> Dict[str, Profile]:
        ids = sorted(set(user_ids))
        if not ids:
            return {}
        stmt = select(ProfileRecord).where(ProfileRecord.user_id.in_(ids))
        try:
            result = await self._session.execute(stmt)
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            raise ProfileLookupError(f"Profile lookup failed: {e}") from e
        profiles: Dict[str, Profile] = {}
        for orm in rows:
            try:
                profiles[orm.user_id] = _to_profile(orm)
            except ValueError:
                # One unreadable profile must not break the rest of the batch
                logger.warning("profile_unreadable", extra={"user_id": orm.user_id})
        return profiles
