"""Complaint application service. Owns one view of the complaint list and keeps it fresh after mutations."""

import logging
from typing import List, Optional

from app.application.complaint_repository import ComplaintRepository
from app.domain.models.actor import Actor
from app.domain.models.complaint import Complaint, ComplaintDraft, ComplaintStatus
from app.domain.validators.complaint_validator import (
    validate_actor_present,
    validate_complaint_draft,
    validate_status,
)
from app.security.rbac import RBACService


class ComplaintService:
    """
    Application-layer orchestration only. No HTTP, no FastAPI, no direct infrastructure.

    Each instance belongs to a single presentation context (one request, one
    client session) and is never shared. Consistency strategy: every successful
    mutation is followed by a full reload of the list; there is no incremental
    merge. A reload failure after a committed mutation is logged, not raised.
    """

    def __init__(
        self,
        repository: ComplaintRepository,
        logger: logging.Logger,
        rbac: Optional[RBACService] = None,
    ) -> None:
        self._repository = repository
        self._logger = logger
        self._rbac = rbac or RBACService()
        self.complaints: List[Complaint] = []
        self.loading = False

    async def list(self, actor: Optional[Actor]) -> List[Complaint]:
        """Load the actor's scoped complaints into this view. Without an actor the view is left untouched."""
        if actor is None:
            return self.complaints
        self._rbac.check_permission(actor.role, "view")
        self.loading = True
        try:
            complaints = await self._repository.list(actor)
        finally:
            self.loading = False
        self.complaints = complaints
        self._logger.info(
            "complaints_listed",
            extra={"user_id": actor.identifier, "count": len(complaints)},
        )
        return complaints

    async def create(self, actor: Optional[Actor], draft: ComplaintDraft) -> Complaint:
        """Submit a complaint as actor (status pending), then reload the view."""
        actor = validate_actor_present(actor)
        self._rbac.check_permission(actor.role, "create")
        validate_complaint_draft(draft)

        complaint = await self._repository.create(actor, draft)
        self._logger.info(
            "complaint_created",
            extra={"complaint_id": complaint.id, "user_id": actor.identifier},
        )

        await self._reload(actor)
        return complaint

    async def update_status(
        self,
        actor: Optional[Actor],
        complaint_id: str,
        status: ComplaintStatus,
        admin_reply: Optional[str] = None,
    ) -> None:
        """
        Admin triage. Any status may follow any other. Raises AuthorizationError
        for non-admins and ComplaintNotFoundError for unknown ids; the view is
        only reloaded after a successful update.
        """
        actor = validate_actor_present(actor)
        self._rbac.check_permission(actor.role, "update_status")
        status = validate_status(status)

        await self._repository.update_status(complaint_id, status, admin_reply)
        self._logger.info(
            "complaint_status_updated",
            extra={
                "complaint_id": complaint_id,
                "user_id": actor.identifier,
                "status": status.value,
            },
        )

        await self._reload(actor)

    def find(self, complaint_id: str) -> Optional[Complaint]:
        """Look up a complaint in the currently loaded view."""
        return next((c for c in self.complaints if c.id == complaint_id), None)

    async def _reload(self, actor: Actor) -> None:
        try:
            await self.list(actor)
        except Exception as e:
            # Mutation already committed; keep the previous view.
            self._logger.error(
                "complaints_reload_failed",
                extra={"user_id": actor.identifier, "error": str(e)},
            )
