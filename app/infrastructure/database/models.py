# app/infrastructure/database/models.py

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, String, Text

from app.infrastructure.database.session import Base


def _uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseModel(Base):
    __abstract__ = True

    id = Column(String(36), primary_key=True, default=_uuid)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class AuthUserRecord(BaseModel):
    """Account store of the local auth provider."""

    __tablename__ = "auth_users"

    email = Column(String, nullable=False, unique=True, index=True)
    password_hash = Column(String, nullable=False)
    user_metadata = Column(JSON, nullable=True)


class ProfileRecord(BaseModel):
    __tablename__ = "profiles"

    user_id = Column(String(36), nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    department = Column(String, nullable=True)
    student_id = Column(String, nullable=True)
    role = Column(String, nullable=False, default="student")


class ComplaintRecord(BaseModel):
    """
    Stored complaint row. Only the owner id is kept here; submitter display
    fields come from profiles at read time.
    """

    __tablename__ = "complaints"

    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String, nullable=False, default="other")
    status = Column(String, nullable=False, default="pending", index=True)
    priority = Column(String, nullable=False, default="medium")
    user_id = Column(String(36), nullable=False, index=True)

    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
    admin_reply = Column(Text, nullable=True)
    attachments = Column(JSON, nullable=True)  # Reserved; never written
