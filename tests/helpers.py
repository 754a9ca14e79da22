"""Shared builders for tests."""

from __future__ import annotations

import itertools
from datetime import date, datetime, time, timezone

from badge_forge.domain.models import ActivityRecord

_ids = itertools.count(1)


def make_activity(day: date, like_count: int = 0, user_id: int = 1, hour: int = 12) -> ActivityRecord:
    """Build an activity on ``day`` at ``hour`` UTC."""
    return ActivityRecord(
        id=next(_ids),
        user_id=user_id,
        like_count=like_count,
        created_at=datetime.combine(day, time(hour=hour), tzinfo=timezone.utc),
    )
