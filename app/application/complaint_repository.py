"""Complaint repository protocol. Application layer depends on this; infrastructure implements it."""

from typing import List, Optional, Protocol

from app.domain.models.actor import Actor
from app.domain.models.complaint import Complaint, ComplaintDraft, ComplaintStatus


class ComplaintRepository(Protocol):
    """Store-level access to complaints. Role checks beyond list scoping belong to the caller."""

    async def list(self, actor: Actor) -> List[Complaint]:
        """
        Admins get every row; anyone else gets the rows they own.
        Newest first, with submitter profiles joined in one secondary lookup.
        """
        ...

    async def create(self, actor: Actor, draft: ComplaintDraft) -> Complaint:
        """Insert a pending complaint owned by actor. id and timestamps are assigned by the store."""
        ...

    async def update_status(
        self,
        complaint_id: str,
        status: ComplaintStatus,
        admin_reply: Optional[str] = None,
    ) -> None:
        """Set status (and reply, when given). Raise ComplaintNotFoundError if the id is unknown."""
        ...
