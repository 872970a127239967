"""Ports (interfaces) used by the notification core.

Ports define the minimal contracts for record lookups, persistence and time
so that the core can be reused with different backends.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol

from core.models import Pet, VaccineDueDate


class PetContextPort(Protocol):
    """Resolves the pet the user is currently looking at."""

    async def get_active_pet(self) -> Optional[Pet]:
        ...


class VaccineRecordsPort(Protocol):
    """Medical-history lookups required by the vaccine rule."""

    async def get_vaccine_due_dates(self, pet_id: str) -> list[VaccineDueDate]:
        ...


class ActivityRecordsPort(Protocol):
    """Daily-record lookups required by the activity rule."""

    async def has_activity_record_on(self, pet_id: str, day: date) -> bool:
        ...


class KeyValueStorePort(Protocol):
    """String key-value persistence used for dismissal sets."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str) -> None:
        ...


class ClockPort(Protocol):
    """Source of the current local time."""

    def now(self) -> datetime:
        ...
