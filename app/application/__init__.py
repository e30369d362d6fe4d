# Application layer: services that orchestrate domain and infrastructure.

from app.application.auth_provider import (
    AuthEvent,
    AuthProvider,
    AuthSession,
    AuthUser,
    Subscription,
)
from app.application.complaint_repository import ComplaintRepository
from app.application.complaint_service import ComplaintService
from app.application.exceptions import (
    ApplicationError,
    AuthProviderError,
    ProfileLookupError,
)
from app.application.identity_service import AuthResult, IdentityResolver
from app.application.profile_repository import Profile, ProfileRepository

__all__ = [
    "ApplicationError",
    "AuthEvent",
    "AuthProvider",
    "AuthProviderError",
    "AuthResult",
    "AuthSession",
    "AuthUser",
    "ComplaintRepository",
    "ComplaintService",
    "IdentityResolver",
    "Profile",
    "ProfileLookupError",
    "ProfileRepository",
    "Subscription",
]
