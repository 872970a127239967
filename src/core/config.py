"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NotificationConfig:
    """Switches and thresholds for the notification rules."""

    vaccine_enabled: bool = True
    daily_activity_enabled: bool = True
    # Reminders are only raised for vaccines due within this many days.
    vaccine_horizon_days: int = 7
    # Due dates this close (or today) are raised as high priority.
    vaccine_urgent_days: int = 3


@dataclass(frozen=True)
class DismissalConfig:
    """Retention for per-day dismissal sets."""

    retention_days: int = 7
