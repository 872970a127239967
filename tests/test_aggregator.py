from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta

from core.aggregator import NotificationAggregator
from core.config import NotificationConfig
from core.models import (
    CATEGORY_DAILY_ACTIVITY,
    CATEGORY_VACCINE,
    PRIORITY_HIGH,
    PRIORITY_MEDIUM,
    Pet,
    VaccineDueDate,
)
from fakes import FakeActivityRecords, FakePetContext, FakeVaccineRecords, FixedClock

PET = Pet(id="pet1", name="Mochi")


def _due(vaccine_id: str, label: str, now: datetime, days: int) -> VaccineDueDate:
    return VaccineDueDate(id=vaccine_id, label=label, due_date=now.date() + timedelta(days=days))


def _generate(
    now: datetime,
    vaccines: FakeVaccineRecords,
    activity: FakeActivityRecords,
    pet_context: FakePetContext = FakePetContext(PET),
    config: NotificationConfig = NotificationConfig(),
):
    aggregator = NotificationAggregator(
        vaccine_records=vaccines,
        activity_records=activity,
        clock=FixedClock(now),
        config=config,
    )
    return asyncio.run(aggregator.generate(pet_context))


def test_returns_empty_when_no_active_pet() -> None:
    vaccines = FakeVaccineRecords()
    result = _generate(datetime(2024, 6, 10, 9), vaccines, FakeActivityRecords(), FakePetContext(None))
    assert result == []
    assert vaccines.calls == []


def test_returns_empty_when_pet_lookup_fails(caplog) -> None:
    with caplog.at_level(logging.ERROR):
        result = _generate(
            datetime(2024, 6, 10, 9),
            FakeVaccineRecords(),
            FakeActivityRecords(),
            FakePetContext(error=RuntimeError("database locked")),
        )
    assert result == []
    assert "active pet" in caplog.text


def test_vaccine_due_tomorrow_and_no_record_in_the_morning() -> None:
    now = datetime(2024, 6, 10, 9, 0)
    vaccines = FakeVaccineRecords([_due("rabies", "Rabies", now, 1)])

    result = _generate(now, vaccines, FakeActivityRecords())

    assert [(c.category, c.priority) for c in result] == [
        (CATEGORY_VACCINE, PRIORITY_HIGH),
        (CATEGORY_DAILY_ACTIVITY, PRIORITY_MEDIUM),
    ]
    assert result[0].message == "Rabies is due in 1 day(s)."
    assert vaccines.calls == ["pet1"]


def test_far_vaccine_and_existing_record_yield_nothing() -> None:
    now = datetime(2024, 6, 10, 9, 0)
    vaccines = FakeVaccineRecords([_due("rabies", "Rabies", now, 9)])
    activity = FakeActivityRecords(recorded_days=[now.date()])

    assert _generate(now, vaccines, activity) == []
    assert activity.calls == [("pet1", now.date())]


def test_equal_priorities_keep_rule_order_in_the_evening() -> None:
    now = datetime(2024, 6, 10, 20, 0)
    vaccines = FakeVaccineRecords(
        [
            _due("lepto", "Lepto", now, 6),
            _due("rabies", "Rabies", now, 0),
        ]
    )

    result = _generate(now, vaccines, FakeActivityRecords())

    assert [c.id for c in result] == [
        "vaccine_rabies_2024-06-10",
        "daily_activity_2024-06-10",
        "vaccine_lepto_2024-06-10",
    ]
    assert [c.priority for c in result] == [PRIORITY_HIGH, PRIORITY_HIGH, PRIORITY_MEDIUM]


def test_output_is_sorted_by_priority_descending() -> None:
    now = datetime(2024, 6, 10, 13, 0)
    vaccines = FakeVaccineRecords(
        [
            _due("a", "Lepto", now, 5),
            _due("b", "Parvo", now, 2),
            _due("c", "Rabies", now, 7),
            _due("d", "Kennel cough", now, 0),
        ]
    )

    result = _generate(now, vaccines, FakeActivityRecords())

    assert [c.id.split("_")[1] for c in result[:2]] == ["b", "d"]
    assert [c.priority for c in result] == [
        PRIORITY_HIGH,
        PRIORITY_HIGH,
        PRIORITY_MEDIUM,
        PRIORITY_MEDIUM,
        PRIORITY_MEDIUM,
    ]
    # Medium tier: vaccines in input order, then the afternoon reminder.
    assert [c.id for c in result[2:]] == [
        "vaccine_a_2024-06-10",
        "vaccine_c_2024-06-10",
        "daily_activity_2024-06-10",
    ]


def test_vaccine_lookup_failure_keeps_activity_candidate(caplog) -> None:
    now = datetime(2024, 6, 10, 19, 0)
    vaccines = FakeVaccineRecords(error=RuntimeError("medical table missing"))

    with caplog.at_level(logging.ERROR):
        result = _generate(now, vaccines, FakeActivityRecords())

    assert [c.category for c in result] == [CATEGORY_DAILY_ACTIVITY]
    assert "Vaccine reminder check failed" in caplog.text


def test_activity_lookup_failure_keeps_vaccine_candidates() -> None:
    now = datetime(2024, 6, 10, 10, 0)
    vaccines = FakeVaccineRecords([_due("rabies", "Rabies", now, 0)])
    activity = FakeActivityRecords(error=RuntimeError("records unavailable"))

    result = _generate(now, vaccines, activity)

    assert [c.category for c in result] == [CATEGORY_VACCINE]


def test_disabled_vaccine_reminders_skip_the_lookup() -> None:
    now = datetime(2024, 6, 10, 10, 0)
    vaccines = FakeVaccineRecords([_due("rabies", "Rabies", now, 0)])

    result = _generate(
        now,
        vaccines,
        FakeActivityRecords(),
        config=NotificationConfig(vaccine_enabled=False),
    )

    assert [c.category for c in result] == [CATEGORY_DAILY_ACTIVITY]
    assert vaccines.calls == []


def test_disabled_daily_activity_reminders() -> None:
    now = datetime(2024, 6, 10, 10, 0)
    activity = FakeActivityRecords()

    result = _generate(
        now,
        FakeVaccineRecords(),
        activity,
        config=NotificationConfig(daily_activity_enabled=False),
    )

    assert result == []
    assert activity.calls == []


def test_generation_is_deterministic_for_fixed_inputs() -> None:
    now = datetime(2024, 6, 10, 20, 0)
    vaccines = FakeVaccineRecords([_due("rabies", "Rabies", now, 3)])

    first = _generate(now, vaccines, FakeActivityRecords())
    second = _generate(now, vaccines, FakeActivityRecords())

    assert first == second
