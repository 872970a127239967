"""Application entry point for the pawlog notification tool."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from datetime import date
from logging.handlers import RotatingFileHandler
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from art import tprint

import settings
from adapters.notification_formatting import render_candidates
from adapters.sqlite_storage import SQLiteStorage
from core.aggregator import NotificationAggregator
from core.clock import SystemClock, local_today
from core.config import DismissalConfig, NotificationConfig
from core.dismissals import DismissalStore

NAME = "PAWLOG"
FONT = "small"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/pawlog.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _build_clock() -> SystemClock:
    if not settings.TIMEZONE:
        return SystemClock()
    try:
        return SystemClock(ZoneInfo(settings.TIMEZONE))
    except ZoneInfoNotFoundError:
        raise RuntimeError(f"Unknown timezone in config: {settings.TIMEZONE}") from None


def _notification_config() -> NotificationConfig:
    return NotificationConfig(
        vaccine_enabled=settings.VACCINE_NOTIFICATIONS_ENABLED,
        daily_activity_enabled=settings.DAILY_ACTIVITY_NOTIFICATIONS_ENABLED,
        vaccine_horizon_days=settings.VACCINE_HORIZON_DAYS,
        vaccine_urgent_days=settings.VACCINE_URGENT_DAYS,
    )


def _open_storage(clock: SystemClock) -> SQLiteStorage:
    logger = logging.getLogger(__name__)
    storage = SQLiteStorage(settings.DB_PATH)
    storage.init_db()
    dismissal_config = DismissalConfig(retention_days=settings.DISMISSAL_RETENTION_DAYS)
    removed = storage.cleanup_dismissals(local_today(clock.now()), dismissal_config.retention_days)
    logger.info("Dismissal cleanup removed %s stale day(s)", removed)
    return storage


async def _show_notifications(storage: SQLiteStorage, clock: SystemClock, mode: str = "table") -> None:
    aggregator = NotificationAggregator(
        vaccine_records=storage,
        activity_records=storage,
        clock=clock,
        config=_notification_config(),
    )
    dismissals = DismissalStore(storage, clock)
    candidates = await aggregator.generate(storage)
    visible = await dismissals.filter_dismissed(candidates)
    logging.getLogger(__name__).info(
        "Generated %s notification(s), %s visible", len(candidates), len(visible)
    )
    render_candidates(visible, mode=mode)


async def _dismiss(storage: SQLiteStorage, clock: SystemClock, notification_id: str) -> None:
    dismissals = DismissalStore(storage, clock)
    await dismissals.dismiss(notification_id)
    print(f"Dismissed {notification_id} for today.")


def _require_active_pet(storage: SQLiteStorage):
    pet = asyncio.run(storage.get_active_pet())
    if pet is None:
        raise RuntimeError("No pet registered yet; run 'pawlog add-pet <name>' first")
    return pet


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="pawlog")
    subparsers = parser.add_subparsers(dest="command")

    notifications_parser = subparsers.add_parser("notifications", help="Show today's notifications")
    notifications_parser.add_argument("--plain", action="store_true", help="One line per notification")

    dismiss_parser = subparsers.add_parser("dismiss", help="Hide a notification for the rest of today")
    dismiss_parser.add_argument("notification_id")

    pet_parser = subparsers.add_parser("add-pet", help="Register a pet")
    pet_parser.add_argument("name")

    vaccine_parser = subparsers.add_parser("add-vaccine", help="Add an upcoming vaccination")
    vaccine_parser.add_argument("label")
    vaccine_parser.add_argument("due_date", type=date.fromisoformat, help="YYYY-MM-DD")

    log_parser = subparsers.add_parser("log-activity", help="Record an activity for today")
    log_parser.add_argument("note", nargs="?")

    args = parser.parse_args(argv)

    _print_banner()
    _configure_logging()
    clock = _build_clock()
    storage = _open_storage(clock)

    if args.command == "dismiss":
        asyncio.run(_dismiss(storage, clock, args.notification_id))
        return
    if args.command == "add-pet":
        pet = storage.add_pet(args.name)
        print(f"Registered {pet.name} ({pet.id}).")
        return
    if args.command == "add-vaccine":
        pet = _require_active_pet(storage)
        storage.add_vaccine_due_date(pet.id, args.label, args.due_date)
        print(f"Added {args.label} for {pet.name}, due {args.due_date.isoformat()}.")
        return
    if args.command == "log-activity":
        pet = _require_active_pet(storage)
        storage.add_activity_record(pet.id, local_today(clock.now()), args.note)
        print(f"Logged today's activity for {pet.name}.")
        return
    mode = "plain" if getattr(args, "plain", False) else "table"
    asyncio.run(_show_notifications(storage, clock, mode))


if __name__ == "__main__":
    main()
