"""Pydantic schemas for sign-up, sign-in and the current actor."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from app.domain.models.actor import UserRole


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=120)
    # Admin self-registration is gated by settings.allow_admin_signup in the auth provider
    role: UserRole = UserRole.STUDENT
    department: Optional[str] = None
    student_id: Optional[str] = None

    def profile_metadata(self) -> dict:
        """User metadata stored with the account and copied into the profile row."""
        return {
            "name": self.name,
            "role": self.role.value,
            "department": self.department,
            "student_id": self.student_id,
        }


class ActorResponse(BaseModel):
    identifier: str
    email: str
    display_name: str
    role: UserRole
    department: Optional[str] = None
    student_id: Optional[str] = None

    model_config = {"from_attributes": True}


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_at: datetime
    actor: Optional[ActorResponse] = None
