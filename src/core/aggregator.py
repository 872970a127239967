"""Notification aggregation.

This module is storage-agnostic. It only relies on ports for record lookups
and time, and guarantees that no lookup failure reaches the caller:
1) Resolve the active pet (none -> nothing to notify about)
2) Run the vaccine rule and the daily-activity rule independently
3) Concatenate, vaccine candidates first
4) Stable sort by priority, highest first
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from core.clock import local_today
from core.config import NotificationConfig
from core.models import NotificationCandidate, Pet, priority_rank
from core.ports import ActivityRecordsPort, ClockPort, PetContextPort, VaccineRecordsPort
from core.rules_engine import build_daily_activity_candidate, build_vaccine_candidates

LOGGER = logging.getLogger(__name__)


class NotificationAggregator:
    """Runs every notification rule and merges the results."""

    def __init__(
        self,
        vaccine_records: VaccineRecordsPort,
        activity_records: ActivityRecordsPort,
        clock: ClockPort,
        config: Optional[NotificationConfig] = None,
    ) -> None:
        self._vaccine_records = vaccine_records
        self._activity_records = activity_records
        self._clock = clock
        self._config = config or NotificationConfig()

    async def generate(self, pet_context: PetContextPort) -> List[NotificationCandidate]:
        """Return today's candidates for the active pet, highest priority first."""

        try:
            now = self._clock.now()
            pet = await pet_context.get_active_pet()
        except Exception:
            LOGGER.exception("Failed to resolve the active pet")
            return []
        if pet is None:
            return []

        candidates = await self._vaccine_candidates(pet, now)
        activity = await self._daily_activity_candidate(pet, now)
        if activity is not None:
            candidates.append(activity)

        # sorted() is stable, so equal tiers keep rule order and input order.
        return sorted(candidates, key=lambda candidate: priority_rank(candidate.priority), reverse=True)

    async def _vaccine_candidates(self, pet: Pet, now: datetime) -> List[NotificationCandidate]:
        if not self._config.vaccine_enabled:
            return []
        try:
            due_dates = await self._vaccine_records.get_vaccine_due_dates(pet.id)
            return build_vaccine_candidates(due_dates, now, self._config)
        except Exception:
            LOGGER.exception("Vaccine reminder check failed for pet %s", pet.id)
            return []

    async def _daily_activity_candidate(
        self, pet: Pet, now: datetime
    ) -> Optional[NotificationCandidate]:
        if not self._config.daily_activity_enabled:
            return None
        try:
            has_record = await self._activity_records.has_activity_record_on(pet.id, local_today(now))
            return build_daily_activity_candidate(has_record, now)
        except Exception:
            LOGGER.exception("Daily record check failed for pet %s", pet.id)
            return None
