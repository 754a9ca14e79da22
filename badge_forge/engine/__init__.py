"""
Level and badge engine for Badge Forge.

Pure functions only: no I/O, no clock. The processor feeds them the records
it loaded and persists what they return.
"""

from badge_forge.engine.badges import (
    LEVEL_TIERS,
    VERIFIED_ACTIVITY_THRESHOLD,
    assign_badges,
    compute_verified,
)
from badge_forge.engine.level import U32_MAX, compute_level, total_like_count
from badge_forge.engine.streaks import is_month_streak, is_week_streak, previous_iso_week

__all__ = [
    "LEVEL_TIERS",
    "U32_MAX",
    "VERIFIED_ACTIVITY_THRESHOLD",
    "assign_badges",
    "compute_level",
    "compute_verified",
    "is_month_streak",
    "is_week_streak",
    "previous_iso_week",
    "total_like_count",
]
