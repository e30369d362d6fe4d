"""Pydantic schemas for the complaints API. Strict validation, no DB or infrastructure."""

from datetime import date, datetime, time
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.domain.models.complaint import (
    ComplaintCategory,
    ComplaintDraft,
    ComplaintPriority,
    ComplaintStatus,
)

TITLE_MIN_LENGTH = 5
DESCRIPTION_MIN_LENGTH = 20


def _as_bare_date(value) -> Optional[date]:
    """The date a date-only filter value stands for, or None if it carries a time."""
    if isinstance(value, str) and len(value.strip()) == 10:
        return date.fromisoformat(value.strip())
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class ComplaintCreateRequest(BaseModel):
    """Submission form. Length rules are enforced here, before the service is called."""

    title: str = Field(..., max_length=200)
    description: str
    category: ComplaintCategory = ComplaintCategory.OTHER
    priority: ComplaintPriority = ComplaintPriority.MEDIUM

    @field_validator("title")
    @classmethod
    def title_min_length(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title is required")
        if len(v.strip()) < TITLE_MIN_LENGTH:
            raise ValueError(f"Title must be at least {TITLE_MIN_LENGTH} characters")
        return v

    @field_validator("description")
    @classmethod
    def description_min_length(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Description is required")
        if len(v.strip()) < DESCRIPTION_MIN_LENGTH:
            raise ValueError(f"Description must be at least {DESCRIPTION_MIN_LENGTH} characters")
        return v

    def to_draft(self) -> ComplaintDraft:
        return ComplaintDraft(
            title=self.title,
            description=self.description,
            category=self.category,
            priority=self.priority,
        )


class StatusUpdateRequest(BaseModel):
    """Admin triage: new status and an optional reply to the student."""

    status: ComplaintStatus
    admin_reply: Optional[str] = Field(None, max_length=2000)


class ComplaintFilters(BaseModel):
    """
    Dashboard filters applied to an already-loaded complaint list. Both date
    bounds are inclusive; a bare date covers the whole day.
    """

    model_config = {"populate_by_name": True}

    status: Optional[ComplaintStatus] = None
    category: Optional[ComplaintCategory] = None
    priority: Optional[ComplaintPriority] = None
    department: Optional[str] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    search_query: Optional[str] = Field(None, alias="search")

    @field_validator("date_from", mode="before")
    @classmethod
    def date_from_start_of_day(cls, v):
        day = _as_bare_date(v)
        return datetime.combine(day, time.min) if day is not None else v

    @field_validator("date_to", mode="before")
    @classmethod
    def date_to_end_of_day(cls, v):
        day = _as_bare_date(v)
        return datetime.combine(day, time.max) if day is not None else v


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------

class SubmitterResponse(BaseModel):
    id: str
    name: str
    email: str
    department: Optional[str] = None
    student_id: Optional[str] = None

    model_config = {"from_attributes": True}


class ComplaintResponse(BaseModel):
    id: str
    title: str
    description: str
    category: ComplaintCategory
    priority: ComplaintPriority
    status: ComplaintStatus
    created_at: datetime
    updated_at: datetime
    resolved_at: Optional[datetime] = None
    admin_reply: Optional[str] = None
    submitted_by: SubmitterResponse

    model_config = {"from_attributes": True}


class ComplaintStats(BaseModel):
    """Dashboard counters over one loaded list."""

    total: int = 0
    pending: int = 0
    in_progress: int = 0
    resolved: int = 0
    rejected: int = 0
    urgent: int = 0


class TagOption(BaseModel):
    value: str
    label: str
    color: Optional[str] = None


class ComplaintOptionsResponse(BaseModel):
    categories: List[TagOption]
    priorities: List[TagOption]
    statuses: List[TagOption]
