"""Domain schemas. Request/response and validation."""

from app.domain.schemas.auth import (
    ActorResponse,
    LoginRequest,
    RegisterRequest,
    TokenResponse,
)
from app.domain.schemas.complaint import (
    ComplaintCreateRequest,
    ComplaintFilters,
    ComplaintOptionsResponse,
    ComplaintResponse,
    ComplaintStats,
    StatusUpdateRequest,
    SubmitterResponse,
    TagOption,
)

__all__ = [
    "ActorResponse",
    "ComplaintCreateRequest",
    "ComplaintFilters",
    "ComplaintOptionsResponse",
    "ComplaintResponse",
    "ComplaintStats",
    "LoginRequest",
    "RegisterRequest",
    "StatusUpdateRequest",
    "SubmitterResponse",
    "TagOption",
    "TokenResponse",
]
