"""Domain layer: models, schemas, validators, exceptions. Pure business logic only."""

from app.domain.exceptions import (
    ComplaintNotFoundError,
    DomainError,
    DomainValidationError,
)
from app.domain.models import (
    Actor,
    Complaint,
    ComplaintCategory,
    ComplaintDraft,
    ComplaintPriority,
    ComplaintStatus,
    Submitter,
    UserRole,
)
from app.domain.schemas import (
    ComplaintCreateRequest,
    ComplaintFilters,
    ComplaintResponse,
    ComplaintStats,
    StatusUpdateRequest,
)
from app.domain.validators import (
    validate_actor_present,
    validate_complaint_draft,
    validate_status,
)

__all__ = [
    "Actor",
    "Complaint",
    "ComplaintCategory",
    "ComplaintCreateRequest",
    "ComplaintDraft",
    "ComplaintFilters",
    "ComplaintNotFoundError",
    "ComplaintPriority",
    "ComplaintResponse",
    "ComplaintStats",
    "ComplaintStatus",
    "DomainError",
    "DomainValidationError",
    "StatusUpdateRequest",
    "Submitter",
    "UserRole",
    "validate_actor_present",
    "validate_complaint_draft",
    "validate_status",
]
