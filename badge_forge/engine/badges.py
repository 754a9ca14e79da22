"""
Badge assignment.

Badges are only ever added. Level tiers nest: the 250 check runs only when
``level_100`` is granted in the same call, and the 500 check only when
``level_250`` is. A user who already holds ``level_100`` therefore never
picks up the higher tiers from a later update (see DESIGN.md, "Tiered badge
thresholds").
"""

from __future__ import annotations

from typing import List, Sequence

from badge_forge.domain.models import ActivityRecord, Badge
from badge_forge.engine.streaks import is_month_streak, is_week_streak

LEVEL_TIERS = (
    (100, Badge.LEVEL_100),
    (250, Badge.LEVEL_250),
    (500, Badge.LEVEL_500),
)
VERIFIED_ACTIVITY_THRESHOLD = 30


def _assign_level_tiers(badges: List[str], level: int) -> None:
    for threshold, badge in LEVEL_TIERS:
        if level < threshold or badge.value in badges:
            return
        badges.append(badge.value)


def assign_badges(
    current_badges: List[str],
    new_level: int,
    records: Sequence[ActivityRecord],
) -> List[str]:
    """
    Add earned badges to ``current_badges`` in place and return it.

    Evaluation order: level tiers, then month streak, then week streak.
    Existing badges are never removed or duplicated.
    """
    _assign_level_tiers(current_badges, new_level)

    if Badge.MONTH_STREAK.value not in current_badges and is_month_streak(records):
        current_badges.append(Badge.MONTH_STREAK.value)
    if Badge.WEEK_STREAK.value not in current_badges and is_week_streak(records):
        current_badges.append(Badge.WEEK_STREAK.value)
    return current_badges


def compute_verified(current: bool, activity_count: int) -> bool:
    """Verification turns on at the activity threshold and is never reset."""
    return current or activity_count >= VERIFIED_ACTIVITY_THRESHOLD


__all__ = [
    "LEVEL_TIERS",
    "VERIFIED_ACTIVITY_THRESHOLD",
    "assign_badges",
    "compute_verified",
]
