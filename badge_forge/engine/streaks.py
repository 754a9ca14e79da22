"""
Calendar streak predicates.

Dates are calendar dates in UTC. The week streak looks for seven consecutive
days anywhere in the history; the month streak only considers the four ISO
weeks ending at the most recent activity.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Sequence, Set, Tuple

from badge_forge.domain.models import ActivityRecord

WEEK_STREAK_DAYS = 7
MONTH_STREAK_WEEKS = 4


def previous_iso_week(year: int, week: int) -> Tuple[int, int]:
    """Step back one ISO week, rolling over into the prior ISO year."""
    if week > 1:
        return year, week - 1
    # Dec 28 always falls in the last ISO week of its year.
    return year - 1, date(year - 1, 12, 28).isocalendar()[1]


def is_week_streak(records: Sequence[ActivityRecord]) -> bool:
    """At least one activity per day for 7 consecutive days, anywhere in history."""
    if len(records) < WEEK_STREAK_DAYS:
        return False

    dates: List[date] = sorted({record.created_at.date() for record in records})
    if len(dates) < WEEK_STREAK_DAYS:
        return False

    for start in range(len(dates) - WEEK_STREAK_DAYS + 1):
        first = dates[start]
        if all(
            dates[start + offset] == first + timedelta(days=offset)
            for offset in range(1, WEEK_STREAK_DAYS)
        ):
            return True
    return False


def is_month_streak(records: Sequence[ActivityRecord]) -> bool:
    """At least one activity per ISO week for the 4 weeks ending at the latest one."""
    if len(records) < MONTH_STREAK_WEEKS:
        return False

    weeks: Set[Tuple[int, int]] = set()
    for record in records:
        iso = record.created_at.date().isocalendar()
        weeks.add((iso[0], iso[1]))

    most_recent = max(record.created_at for record in records).date().isocalendar()
    year, week = most_recent[0], most_recent[1]

    for _ in range(MONTH_STREAK_WEEKS):
        if (year, week) not in weeks:
            return False
        year, week = previous_iso_week(year, week)
    return True


__all__ = [
    "MONTH_STREAK_WEEKS",
    "WEEK_STREAK_DAYS",
    "is_month_streak",
    "is_week_streak",
    "previous_iso_week",
]
