"""Dashboard queries over an already-loaded complaint list. Pure functions; the store is never touched."""

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from app.domain.models.complaint import (
    CATEGORY_LABELS,
    PRIORITY_TAGS,
    STATUS_TAGS,
    Complaint,
    ComplaintPriority,
    ComplaintStatus,
)
from app.domain.schemas.complaint import (
    ComplaintFilters,
    ComplaintOptionsResponse,
    ComplaintStats,
    TagOption,
)

URGENT_PRIORITIES = frozenset({ComplaintPriority.HIGH, ComplaintPriority.URGENT})


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _matches_search(complaint: Complaint, query: Optional[str]) -> bool:
    if not query or not query.strip():
        return True
    needle = query.strip().lower()
    return (
        needle in complaint.title.lower()
        or needle in complaint.description.lower()
        or needle in complaint.submitted_by.name.lower()
    )


def _matches(complaint: Complaint, filters: ComplaintFilters) -> bool:
    if filters.status is not None and complaint.status != filters.status:
        return False
    if filters.category is not None and complaint.category != filters.category:
        return False
    if filters.priority is not None and complaint.priority != filters.priority:
        return False
    if filters.department and complaint.submitted_by.department != filters.department:
        return False
    created_at = _as_utc(complaint.created_at)
    if filters.date_from is not None and created_at < _as_utc(filters.date_from):
        return False
    if filters.date_to is not None and created_at > _as_utc(filters.date_to):
        return False
    return _matches_search(complaint, filters.search_query)


def filter_complaints(complaints: Iterable[Complaint], filters: ComplaintFilters) -> List[Complaint]:
    """Apply dashboard filters. Input order (newest first) is preserved."""
    return [c for c in complaints if _matches(c, filters)]


def summarize(complaints: Iterable[Complaint]) -> ComplaintStats:
    """Counters shown on the dashboard cards."""
    stats = ComplaintStats()
    for c in complaints:
        stats.total += 1
        if c.status == ComplaintStatus.PENDING:
            stats.pending += 1
        elif c.status == ComplaintStatus.IN_PROGRESS:
            stats.in_progress += 1
        elif c.status == ComplaintStatus.RESOLVED:
            stats.resolved += 1
        elif c.status == ComplaintStatus.REJECTED:
            stats.rejected += 1
        if c.priority in URGENT_PRIORITIES:
            stats.urgent += 1
    return stats


def complaint_options() -> ComplaintOptionsResponse:
    """The closed tag sets with their labels and colors, in display order."""
    return ComplaintOptionsResponse(
        categories=[TagOption(value=k.value, label=v) for k, v in CATEGORY_LABELS.items()],
        priorities=[
            TagOption(value=k.value, label=label, color=color)
            for k, (label, color) in PRIORITY_TAGS.items()
        ],
        statuses=[
            TagOption(value=k.value, label=label, color=color)
            for k, (label, color) in STATUS_TAGS.items()
        ],
    )
