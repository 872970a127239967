"""Per-day dismissal memory (core domain).

Dismissed candidate ids are stored as a JSON list under a key scoped to the
local calendar day, so a dismissal only suppresses the same id until the day
changes. Storage failures never reach the caller: dismiss() gives up quietly
and is_dismissed() answers False.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import date
from typing import Iterable, List, Optional

from core.clock import local_today
from core.ids import dismissal_key
from core.models import NotificationCandidate
from core.ports import ClockPort, KeyValueStorePort

LOGGER = logging.getLogger(__name__)


def _decode_ids(key: str, raw: Optional[str]) -> List[str]:
    if raw is None:
        return []
    try:
        decoded = json.loads(raw)
    except ValueError:
        LOGGER.warning("Ignoring corrupt dismissal set under %s", key)
        return []
    if not isinstance(decoded, list):
        LOGGER.warning("Ignoring corrupt dismissal set under %s", key)
        return []
    return [str(item) for item in decoded]


class DismissalStore:
    """Records and answers "was this candidate dismissed today?"."""

    def __init__(self, store: KeyValueStorePort, clock: ClockPort) -> None:
        self._store = store
        self._clock = clock
        self._locks: dict[date, asyncio.Lock] = {}

    def _today(self) -> date:
        return local_today(self._clock.now())

    def _lock_for(self, day: date) -> asyncio.Lock:
        lock = self._locks.get(day)
        if lock is None:
            # Only today's lock is ever needed again.
            self._locks = {day: asyncio.Lock()}
            lock = self._locks[day]
        return lock

    async def _load(self, day: date) -> List[str]:
        key = dismissal_key(day)
        return _decode_ids(key, await self._store.get(key))

    async def dismiss(self, notification_id: str) -> None:
        """Add an id to today's dismissed set (idempotent)."""

        try:
            day = self._today()
            async with self._lock_for(day):
                dismissed = await self._load(day)
                if notification_id in dismissed:
                    return
                dismissed.append(notification_id)
                await self._store.set(dismissal_key(day), json.dumps(dismissed))
        except Exception:
            LOGGER.exception("Failed to persist dismissal of %s", notification_id)

    async def is_dismissed(self, notification_id: str) -> bool:
        """Return True iff the id was dismissed today."""

        try:
            dismissed = await self._load(self._today())
        except Exception:
            LOGGER.exception("Failed to read dismissal state for %s", notification_id)
            return False
        return notification_id in dismissed

    async def filter_dismissed(
        self, candidates: Iterable[NotificationCandidate]
    ) -> List[NotificationCandidate]:
        """Drop candidates dismissed today, keeping the order of the rest."""

        candidates = list(candidates)
        try:
            dismissed = set(await self._load(self._today()))
        except Exception:
            LOGGER.exception("Failed to read dismissal state; showing all notifications")
            return candidates
        return [candidate for candidate in candidates if candidate.id not in dismissed]
