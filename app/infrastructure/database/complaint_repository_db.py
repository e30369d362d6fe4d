"""DB-backed complaint repository. Reads and writes the complaints table, joins profiles by a second query."""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.exceptions import ProfileLookupError
from app.application.profile_repository import Profile, ProfileRepository
from app.domain.exceptions import ComplaintNotFoundError
from app.domain.models.actor import Actor
from app.domain.models.complaint import (
    Complaint,
    ComplaintCategory,
    ComplaintDraft,
    ComplaintPriority,
    ComplaintStatus,
    Submitter,
)
from app.infrastructure.database.models import ComplaintRecord, utcnow
from app.security.rbac import RBACService

logger = logging.getLogger(__name__)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_complaint(orm: ComplaintRecord, submitter: Submitter) -> Complaint:
    return Complaint(
        id=orm.id,
        title=orm.title,
        description=orm.description,
        category=ComplaintCategory(orm.category),
        priority=ComplaintPriority(orm.priority),
        status=ComplaintStatus(orm.status),
        created_at=_as_utc(orm.created_at),
        updated_at=_as_utc(orm.updated_at),
        resolved_at=_as_utc(orm.resolved_at),
        admin_reply=orm.admin_reply,
        submitted_by=submitter,
    )


class DbComplaintRepository:
    """Implements ComplaintRepository protocol against PostgreSQL (SQLite locally)."""

    def __init__(
        self,
        session: AsyncSession,
        profiles: ProfileRepository,
        rbac: Optional[RBACService] = None,
    ) -> None:
        self._session = session
        self._profiles = profiles
        self._rbac = rbac or RBACService()

    async def list(self, actor: Actor) -> List[Complaint]:
        """Scoped by role, newest first, submitters resolved in exactly one extra query."""
        stmt = select(ComplaintRecord)
        if not self._rbac.has_permission(actor.role, "view_all"):
            stmt = stmt.where(ComplaintRecord.user_id == actor.identifier)
        stmt = stmt.order_by(ComplaintRecord.created_at.desc())

        result = await self._session.execute(stmt)
        rows = result.scalars().all()
        if not rows:
            return []

        profiles = await self._lookup_profiles({orm.user_id for orm in rows})
        complaints = []
        for orm in rows:
            profile = profiles.get(orm.user_id)
            submitter = profile.to_submitter() if profile else Submitter.unknown(orm.user_id)
            complaints.append(_to_complaint(orm, submitter))
        return complaints

    async def create(self, actor: Actor, draft: ComplaintDraft) -> Complaint:
        orm = ComplaintRecord(
            title=draft.title,
            description=draft.description,
            category=ComplaintCategory(draft.category).value,
            priority=ComplaintPriority(draft.priority).value,
            status=ComplaintStatus.PENDING.value,
            user_id=actor.identifier,
        )
        self._session.add(orm)
        await self._session.flush()
        await self._session.commit()
        await self._session.refresh(orm)
        submitter = Submitter(
            id=actor.identifier,
            name=actor.display_name,
            email=actor.email,
            department=actor.department,
            student_id=actor.student_id,
        )
        return _to_complaint(orm, submitter)

    async def update_status(
        self,
        complaint_id: str,
        status: ComplaintStatus,
        admin_reply: Optional[str] = None,
    ) -> None:
        stmt = select(ComplaintRecord).where(ComplaintRecord.id == complaint_id)
        result = await self._session.execute(stmt)
        orm = result.scalar_one_or_none()
        if orm is None:
            raise ComplaintNotFoundError(f"Complaint {complaint_id} not found")

        now = utcnow()
        if status == ComplaintStatus.RESOLVED:
            if orm.status != ComplaintStatus.RESOLVED.value or orm.resolved_at is None:
                orm.resolved_at = now
        else:
            orm.resolved_at = None
        orm.status = status.value
        if admin_reply is not None:
            orm.admin_reply = admin_reply
        orm.updated_at = now
        await self._session.commit()

    async def _lookup_profiles(self, user_ids: set) -> Dict[str, Profile]:
        try:
            return await self._profiles.get_many(user_ids)
        except ProfileLookupError as e:
            # Rows still render, with the fallback submitter
            logger.error("profile_lookup_failed", extra={"count": len(user_ids), "error": e.message})
            return {}
