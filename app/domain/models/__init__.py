"""Domain models. Pure business entities."""

from app.domain.models.actor import Actor, UserRole
from app.domain.models.complaint import (
    CATEGORY_LABELS,
    PRIORITY_TAGS,
    STATUS_TAGS,
    UNKNOWN_SUBMITTER_NAME,
    Complaint,
    ComplaintCategory,
    ComplaintDraft,
    ComplaintPriority,
    ComplaintStatus,
    Submitter,
)

__all__ = [
    "Actor",
    "CATEGORY_LABELS",
    "Complaint",
    "ComplaintCategory",
    "ComplaintDraft",
    "ComplaintPriority",
    "ComplaintStatus",
    "PRIORITY_TAGS",
    "STATUS_TAGS",
    "Submitter",
    "UNKNOWN_SUBMITTER_NAME",
    "UserRole",
]
