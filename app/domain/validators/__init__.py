"""Domain validators. Pure validation functions."""

from app.domain.validators.complaint_validator import (
    validate_actor_present,
    validate_complaint_draft,
    validate_status,
)

__all__ = [
    "validate_actor_present",
    "validate_complaint_draft",
    "validate_status",
]
