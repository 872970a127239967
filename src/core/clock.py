"""Local wall-clock helpers (core domain)."""

from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Optional

DAY_PART_MORNING = "morning"
DAY_PART_AFTERNOON = "afternoon"
DAY_PART_EVENING = "evening"
DAY_PART_QUIET = "quiet"


def classify_day_part(now: datetime) -> str:
    """Map a local time to its day-part bucket.

    - morning: 06:00-11:59
    - afternoon: 12:00-17:59
    - evening: 18:00-22:59
    - quiet: 23:00-05:59 (wraps midnight)
    """

    hour = now.hour
    if 6 <= hour <= 11:
        return DAY_PART_MORNING
    if 12 <= hour <= 17:
        return DAY_PART_AFTERNOON
    if 18 <= hour <= 22:
        return DAY_PART_EVENING
    return DAY_PART_QUIET


def local_today(now: datetime) -> date:
    """Return the calendar day of a local timestamp."""

    return now.date()


class SystemClock:
    """ClockPort backed by the system clock.

    With no tz the clock reports naive local wall-clock time; with a tz it
    reports aware time in that zone so day boundaries follow the user.
    """

    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        self._tz = tz

    def now(self) -> datetime:
        if self._tz is None:
            return datetime.now()
        return datetime.now(self._tz)
