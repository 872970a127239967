"""SQLite storage adapter.

Implements the core lookup ports and the key-value port using a simple
SQLite database. Every call is a single local round trip.
"""

from __future__ import annotations

import sqlite3
import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from core.ids import DISMISSAL_KEY_PREFIX, parse_dismissal_key
from core.models import Pet, VaccineDueDate


class SQLiteStorage:
    """Thin SQLite wrapper that satisfies the lookup and key-value ports."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create tables if they do not exist.

        Tables:
        - kv_store: string key-value pairs (per-day dismissal sets)
        - pets: pet identities; the earliest-created pet is the active one
        - vaccine_due_dates: upcoming vaccinations per pet
        - activity_records: daily log entries per pet
        """

        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS pets (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    created_at TIMESTAMP NOT NULL
                )
                """
            )
            # due_date is an ISO calendar day (YYYY-MM-DD).
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS vaccine_due_dates (
                    id TEXT PRIMARY KEY,
                    pet_id TEXT NOT NULL REFERENCES pets(id),
                    label TEXT NOT NULL,
                    due_date TEXT NOT NULL
                )
                """
            )
            # record_date is the local calendar day the entry belongs to.
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS activity_records (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    pet_id TEXT NOT NULL REFERENCES pets(id),
                    record_date TEXT NOT NULL,
                    note TEXT
                )
                """
            )

    async def get(self, key: str) -> Optional[str]:
        """Return the stored value for a key, if any."""

        with self._connect() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else None

    async def set(self, key: str, value: str) -> None:
        """Upsert a key-value pair."""

        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )

    async def get_active_pet(self) -> Optional[Pet]:
        """Return the earliest-created pet, if any pet exists."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT id, name FROM pets ORDER BY created_at, rowid LIMIT 1"
            ).fetchone()
        return Pet(id=row["id"], name=row["name"]) if row else None

    async def get_vaccine_due_dates(self, pet_id: str) -> list[VaccineDueDate]:
        """Return a pet's vaccine due dates, soonest first."""

        with self._connect() as conn:
            rows = conn.execute(
                """
                SELECT id, label, due_date FROM vaccine_due_dates
                WHERE pet_id = ?
                ORDER BY due_date, rowid
                """,
                (pet_id,),
            ).fetchall()
        return [
            VaccineDueDate(
                id=row["id"],
                label=row["label"],
                due_date=date.fromisoformat(row["due_date"]),
            )
            for row in rows
        ]

    async def has_activity_record_on(self, pet_id: str, day: date) -> bool:
        """Check if a pet has at least one record for a calendar day."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT 1 FROM activity_records WHERE pet_id = ? AND record_date = ? LIMIT 1",
                (pet_id, day.isoformat()),
            ).fetchone()
        return row is not None

    def add_pet(self, name: str) -> Pet:
        """Insert a pet and return it."""

        pet = Pet(id=uuid.uuid4().hex, name=name)
        created_at = datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO pets (id, name, created_at) VALUES (?, ?, ?)",
                (pet.id, pet.name, created_at.isoformat()),
            )
        return pet

    def add_vaccine_due_date(self, pet_id: str, label: str, due_date: date) -> VaccineDueDate:
        """Insert an upcoming vaccination for a pet and return it."""

        entry = VaccineDueDate(id=uuid.uuid4().hex, label=label, due_date=due_date)
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO vaccine_due_dates (id, pet_id, label, due_date) VALUES (?, ?, ?, ?)",
                (entry.id, pet_id, entry.label, due_date.isoformat()),
            )
        return entry

    def add_activity_record(self, pet_id: str, day: date, note: Optional[str] = None) -> None:
        """Append a daily log entry for a pet."""

        with self._connect() as conn:
            conn.execute(
                "INSERT INTO activity_records (pet_id, record_date, note) VALUES (?, ?, ?)",
                (pet_id, day.isoformat(), note),
            )

    def cleanup_dismissals(self, today: date, retention_days: int) -> int:
        """Delete dismissal sets older than the retention window.

        Returns the number of keys removed. Keys that do not parse as a
        dismissal day are left untouched.
        """

        cutoff = today - timedelta(days=retention_days)
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT key FROM kv_store WHERE key LIKE ?",
                (f"{DISMISSAL_KEY_PREFIX}%",),
            ).fetchall()
            stale = []
            for row in rows:
                day = parse_dismissal_key(row["key"])
                if day is not None and day < cutoff:
                    stale.append((row["key"],))
            conn.executemany("DELETE FROM kv_store WHERE key = ?", stale)
        return len(stale)
