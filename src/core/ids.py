"""Helpers for building deterministic notification ids and storage keys."""

from __future__ import annotations

from datetime import date
from typing import Optional

DISMISSAL_KEY_PREFIX = "dismissed_notifications_"


def day_string(day: date) -> str:
    """Return the ISO calendar-day string used in ids and keys."""

    return day.isoformat()


def vaccine_candidate_id(due_date_id: str, day: date) -> str:
    """Return the id of a vaccine reminder, stable for one local day."""

    return f"vaccine_{due_date_id}_{day_string(day)}"


def daily_activity_candidate_id(day: date) -> str:
    """Return the id of the (single) daily-activity reminder for a day."""

    return f"daily_activity_{day_string(day)}"


def dismissal_key(day: date) -> str:
    """Return the key-value store key holding a day's dismissed ids."""

    return f"{DISMISSAL_KEY_PREFIX}{day_string(day)}"


def parse_dismissal_key(key: str) -> Optional[date]:
    """Return the day encoded in a dismissal key, or None for foreign keys."""

    if not key.startswith(DISMISSAL_KEY_PREFIX):
        return None
    try:
        return date.fromisoformat(key[len(DISMISSAL_KEY_PREFIX) :])
    except ValueError:
        return None
