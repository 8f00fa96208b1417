"""Logging-consistency statistics for a daily log."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Iterable

from trueweight.tracking.models import LogEntry


@dataclass(frozen=True)
class LoggingStats:
    """How completely and how regularly the log has been kept.

    A streak is a run of consecutive calendar days that each have both a
    weight and a calorie value. The current streak only counts if the
    most recent entry is from today or yesterday.
    """

    total_days: int = 0
    days_with_weight: int = 0
    days_with_calories: int = 0
    complete_data_pct: float = 0.0
    longest_streak: int = 0
    current_streak: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _is_complete(entry: LogEntry) -> bool:
    return entry.weight is not None and entry.previous_day_calories is not None


def logging_stats(entries: Iterable[LogEntry], today: date) -> LoggingStats:
    """
    Count logged days and complete-data streaks.

    Args:
        entries: Log entries in any order, unique dates
        today: Reference date for the current streak

    Returns:
        LoggingStats (all zero for an empty log)
    """
    ordered = sorted(entries, key=lambda e: e.date)
    if not ordered:
        return LoggingStats()

    complete = sum(1 for e in ordered if _is_complete(e))

    streak = 0
    longest = 0
    previous = None
    for entry in ordered:
        if not _is_complete(entry):
            streak = 0
        elif previous is not None and (entry.date - previous).days == 1:
            streak += 1
        else:
            streak = 1
        longest = max(longest, streak)
        previous = entry.date

    days_since_last = (today - ordered[-1].date).days
    return LoggingStats(
        total_days=len(ordered),
        days_with_weight=sum(1 for e in ordered if e.weight is not None),
        days_with_calories=sum(1 for e in ordered if e.previous_day_calories is not None),
        complete_data_pct=complete / len(ordered) * 100.0,
        longest_streak=longest,
        current_streak=streak if days_since_last <= 1 else 0,
    )
