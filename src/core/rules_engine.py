"""Notification rules (core domain).

Both rules are pure functions of their inputs and the supplied "now", so the
aggregator can call them with whatever snapshot the collaborators returned.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from core.clock import (
    DAY_PART_AFTERNOON,
    DAY_PART_EVENING,
    DAY_PART_MORNING,
    classify_day_part,
    local_today,
)
from core.config import NotificationConfig
from core.ids import daily_activity_candidate_id, vaccine_candidate_id
from core.models import (
    CATEGORY_DAILY_ACTIVITY,
    CATEGORY_VACCINE,
    PRIORITY_HIGH,
    PRIORITY_MEDIUM,
    NotificationAction,
    NotificationCandidate,
    VaccineDueDate,
)

VACCINE_TITLE = "Vaccination reminder"
DAILY_ACTIVITY_TITLE = "Today's log"

MEDICAL_HISTORY_TARGET = "medical_history"
DAILY_RECORD_TARGET = "daily_record"

_DAILY_ACTIVITY_MESSAGES = {
    DAY_PART_MORNING: (
        PRIORITY_MEDIUM,
        "Start today's log and keep track of your pet's health!",
    ),
    DAY_PART_AFTERNOON: (
        PRIORITY_MEDIUM,
        "Nothing logged yet today. How about recording a walk or a meal?",
    ),
    DAY_PART_EVENING: (
        PRIORITY_HIGH,
        "Time for an end-of-day review. Log today's activities to complete the day.",
    ),
}


def _as_local_day(value: Union[date, datetime], now: datetime) -> date:
    if not isinstance(value, datetime):
        return value
    if value.tzinfo is not None:
        if now.tzinfo is not None:
            value = value.astimezone(now.tzinfo)
        else:
            # Naive "now" is system local time.
            value = value.astimezone().replace(tzinfo=None)
    return value.date()


def days_until(due: Union[date, datetime], now: datetime) -> int:
    """Return whole calendar days from today to the due date.

    Time of day is ignored on both sides, so a due date later today is 0 and
    anything tomorrow is 1 regardless of the hour.
    """

    return (_as_local_day(due, now) - local_today(now)).days


def _vaccine_message(label: str, remaining: int, urgent_days: int) -> tuple[str, str]:
    if remaining == 0:
        return PRIORITY_HIGH, f"{label} is due today."
    if remaining <= urgent_days:
        return PRIORITY_HIGH, f"{label} is due in {remaining} day(s)."
    return PRIORITY_MEDIUM, f"{label} is due within a week (in {remaining} day(s))."


def build_vaccine_candidates(
    due_dates: Iterable[VaccineDueDate],
    now: datetime,
    config: NotificationConfig,
) -> List[NotificationCandidate]:
    """Return reminders for vaccines due within the horizon, in input order.

    Overdue entries (negative days) and entries past the horizon produce
    nothing.
    """

    today = local_today(now)
    candidates: List[NotificationCandidate] = []
    for entry in due_dates:
        remaining = days_until(entry.due_date, now)
        if remaining < 0 or remaining > config.vaccine_horizon_days:
            continue

        priority, message = _vaccine_message(entry.label, remaining, config.vaccine_urgent_days)
        candidates.append(
            NotificationCandidate(
                id=vaccine_candidate_id(entry.id, today),
                category=CATEGORY_VACCINE,
                title=VACCINE_TITLE,
                message=message,
                priority=priority,
                created_at=now,
                action=NotificationAction(
                    kind="navigate",
                    target=MEDICAL_HISTORY_TARGET,
                    payload={"vaccine_id": entry.id},
                ),
            )
        )
    return candidates


def build_daily_activity_candidate(
    has_record_today: bool,
    now: datetime,
) -> Optional[NotificationCandidate]:
    """Return today's logging reminder, or None.

    Nothing is emitted once a record exists for today, nor during quiet hours.
    """

    if has_record_today:
        return None

    tier = _DAILY_ACTIVITY_MESSAGES.get(classify_day_part(now))
    if tier is None:
        return None

    priority, message = tier
    return NotificationCandidate(
        id=daily_activity_candidate_id(local_today(now)),
        category=CATEGORY_DAILY_ACTIVITY,
        title=DAILY_ACTIVITY_TITLE,
        message=message,
        priority=priority,
        created_at=now,
        action=NotificationAction(kind="navigate", target=DAILY_RECORD_TARGET),
    )
