"""Static configuration for pawlog.

All user-editable settings (timezone, reminder switches, dismissal retention,
logging) live in a single JSON file for quick edits without touching Python.
"""

import json
import os

from dotenv import load_dotenv

load_dotenv()

_SOURCE_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def resolve_project_root(source_root: str, cwd: str) -> str:
    """Return the directory holding config.json, the database and logs.

    A source checkout ships config.json next to src/; an installed copy
    lives in site-packages, so it falls back to the working directory.
    """

    if os.path.exists(os.path.join(source_root, "config.json")):
        return source_root
    return cwd


PROJECT_ROOT = resolve_project_root(_SOURCE_ROOT, os.getcwd())

# Where to store the SQLite database.
DB_PATH = os.getenv("PAWLOG_DB_PATH") or os.path.join(PROJECT_ROOT, "pawlog.db")

CONFIG_PATH = os.getenv("PAWLOG_CONFIG") or os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# IANA timezone name for day boundaries; None uses the system local time.
TIMEZONE = _CONFIG.get("timezone")

# Reminder switches and thresholds.
# - VACCINE_HORIZON_DAYS: only vaccines due within this many days are shown
# - VACCINE_URGENT_DAYS: due dates this close are raised as high priority
_notifications = _CONFIG.get("notifications", {})
VACCINE_NOTIFICATIONS_ENABLED = bool(_notifications.get("vaccine_enabled", True))
DAILY_ACTIVITY_NOTIFICATIONS_ENABLED = bool(_notifications.get("daily_activity_enabled", True))
VACCINE_HORIZON_DAYS = int(_notifications.get("vaccine_horizon_days", 7))
VACCINE_URGENT_DAYS = int(_notifications.get("vaccine_urgent_days", 3))

# Dismissal sets older than this are deleted at start-up.
_dismissals = _CONFIG.get("dismissals", {})
DISMISSAL_RETENTION_DAYS = int(_dismissals.get("retention_days", 7))

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
