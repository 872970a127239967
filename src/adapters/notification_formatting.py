"""Console formatting helpers for notification candidates.

Keeping formatting here prevents drift between the list and dismiss commands
and keeps output consistent regardless of the terminal.
"""

from __future__ import annotations

from typing import Iterable, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from core.models import PRIORITY_HIGH, PRIORITY_LOW, PRIORITY_MEDIUM, NotificationCandidate

_PRIORITY_STYLES = {
    PRIORITY_HIGH: "bold red",
    PRIORITY_MEDIUM: "yellow",
    PRIORITY_LOW: "dim",
}


def format_candidate(candidate: NotificationCandidate) -> str:
    """Return a single plain-text line describing a candidate."""

    line = f"[{candidate.priority.upper()}] {candidate.title}: {candidate.message}"
    if candidate.action is not None:
        line = f"{line} -> {candidate.action.target}"
    return f"{line} ({candidate.id})"


def _build_table(candidates: list[NotificationCandidate]) -> Table:
    table = Table(title="Notifications", show_lines=False)
    table.add_column("Priority")
    table.add_column("Title")
    table.add_column("Message")
    table.add_column("Id", style="dim")
    for candidate in candidates:
        style = _PRIORITY_STYLES.get(candidate.priority, "")
        table.add_row(
            Text(candidate.priority, style=style),
            candidate.title,
            candidate.message,
            candidate.id,
        )
    return table


def render_candidates(
    candidates: Iterable[NotificationCandidate],
    console: Optional[Console] = None,
    mode: str = "table",
) -> None:
    """Print candidates to the console in the requested mode."""

    if mode not in {"table", "plain"}:
        raise ValueError(f"Unsupported render mode: {mode}")

    console = console or Console()
    candidates = list(candidates)
    if not candidates:
        console.print("No notifications right now.")
        return

    if mode == "table":
        console.print(_build_table(candidates))
        return
    for candidate in candidates:
        console.print(format_candidate(candidate), markup=False, highlight=False, soft_wrap=True)
