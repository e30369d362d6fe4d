"""Domain model for complaints. Pure business semantics, no ORM or infrastructure."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Optional

UNKNOWN_SUBMITTER_NAME = "Unknown User"


class ComplaintCategory(str, Enum):
    ACADEMIC = "academic"
    FACILITY = "facility"
    STAFF = "staff"
    TECHNOLOGY = "technology"
    ACCOMMODATION = "accommodation"
    FOOD = "food"
    TRANSPORT = "transport"
    OTHER = "other"


class ComplaintPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ComplaintStatus(str, Enum):
    """
    Lifecycle status. Any status may follow any other: there is no
    transition table for complaints.
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    REJECTED = "rejected"


# Display tags served to dashboards. Values and labels are part of the public contract.
CATEGORY_LABELS: Dict[ComplaintCategory, str] = {
    ComplaintCategory.ACADEMIC: "Academic Issues",
    ComplaintCategory.FACILITY: "Facility Issues",
    ComplaintCategory.STAFF: "Staff Behavior",
    ComplaintCategory.TECHNOLOGY: "Technology Issues",
    ComplaintCategory.ACCOMMODATION: "Accommodation",
    ComplaintCategory.FOOD: "Food Services",
    ComplaintCategory.TRANSPORT: "Transportation",
    ComplaintCategory.OTHER: "Other",
}

PRIORITY_TAGS: Dict[ComplaintPriority, tuple[str, str]] = {
    ComplaintPriority.LOW: ("Low", "info"),
    ComplaintPriority.MEDIUM: ("Medium", "warning"),
    ComplaintPriority.HIGH: ("High", "destructive"),
    ComplaintPriority.URGENT: ("Urgent", "destructive"),
}

STATUS_TAGS: Dict[ComplaintStatus, tuple[str, str]] = {
    ComplaintStatus.PENDING: ("Pending", "warning"),
    ComplaintStatus.IN_PROGRESS: ("In Progress", "info"),
    ComplaintStatus.RESOLVED: ("Resolved", "success"),
    ComplaintStatus.REJECTED: ("Rejected", "muted"),
}


@dataclass(frozen=True)
class ComplaintDraft:
    """Fields a student supplies when submitting. Everything else is assigned on insert."""

    title: str
    description: str
    category: ComplaintCategory
    priority: ComplaintPriority


@dataclass(frozen=True)
class Submitter:
    """Profile fields joined onto a complaint at read time. May lag the profile store."""

    id: str
    name: str
    email: str
    department: Optional[str] = None
    student_id: Optional[str] = None

    @classmethod
    def unknown(cls, user_id: str) -> "Submitter":
        return cls(id=user_id, name=UNKNOWN_SUBMITTER_NAME, email="")


@dataclass(frozen=True)
class Complaint:
    """A complaint as handed to dashboards: stored row plus the submitter join."""

    id: str
    title: str
    description: str
    category: ComplaintCategory
    priority: ComplaintPriority
    status: ComplaintStatus
    created_at: datetime
    updated_at: datetime
    submitted_by: Submitter
    resolved_at: Optional[datetime] = None
    admin_reply: Optional[str] = None
