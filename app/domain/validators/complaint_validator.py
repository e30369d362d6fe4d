"""Validators for complaint domain rules. Pure functions, no infrastructure or DB access."""

from typing import Optional

from app.domain.exceptions import DomainValidationError
from app.domain.models.actor import Actor
from app.domain.models.complaint import (
    ComplaintCategory,
    ComplaintDraft,
    ComplaintPriority,
    ComplaintStatus,
)


def validate_actor_present(actor: Optional[Actor]) -> Actor:
    """Every mutation needs a signed-in actor. Raises DomainValidationError if absent."""
    if actor is None:
        raise DomainValidationError("User not authenticated")
    return actor


def validate_complaint_draft(draft: ComplaintDraft) -> None:
    """
    Structural check of a submission: non-empty text and known enum values.
    Minimum lengths are the caller's concern and are not re-checked here.
    """
    if not isinstance(draft.title, str) or not draft.title.strip():
        raise DomainValidationError("title must be set and non-empty")
    if not isinstance(draft.description, str) or not draft.description.strip():
        raise DomainValidationError("description must be set and non-empty")
    try:
        ComplaintCategory(draft.category)
    except ValueError as e:
        raise DomainValidationError(f"unknown category: {draft.category}") from e
    try:
        ComplaintPriority(draft.priority)
    except ValueError as e:
        raise DomainValidationError(f"unknown priority: {draft.priority}") from e


def validate_status(status: str) -> ComplaintStatus:
    """Coerce a raw status value. Any known status is accepted from any other."""
    try:
        return ComplaintStatus(status)
    except ValueError as e:
        raise DomainValidationError(f"unknown status: {status}") from e
