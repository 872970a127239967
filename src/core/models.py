"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any storage-specific row types.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional, Union

CATEGORY_VACCINE = "vaccine"
CATEGORY_DAILY_ACTIVITY = "daily_activity"
CATEGORY_GENERAL = "general"

PRIORITY_HIGH = "high"
PRIORITY_MEDIUM = "medium"
PRIORITY_LOW = "low"

_PRIORITY_RANKS = {
    PRIORITY_HIGH: 3,
    PRIORITY_MEDIUM: 2,
    PRIORITY_LOW: 1,
}


def priority_rank(priority: str) -> int:
    """Return the sort rank of a priority tier (higher sorts first)."""

    try:
        return _PRIORITY_RANKS[priority]
    except KeyError:
        raise ValueError(f"Unsupported priority: {priority}") from None


@dataclass(frozen=True)
class Pet:
    """Identity of a pet; only used to scope record lookups."""

    id: str
    name: str


@dataclass(frozen=True)
class VaccineDueDate:
    """Upcoming vaccination for a pet."""

    id: str
    label: str
    due_date: Union[date, datetime]


@dataclass(frozen=True)
class NotificationAction:
    """Navigation hint attached to a candidate."""

    kind: str
    target: str
    payload: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class NotificationCandidate:
    """A generated, not-yet-displayed notification."""

    id: str
    category: str
    title: str
    message: str
    priority: str
    created_at: datetime
    action: Optional[NotificationAction] = None
