from __future__ import annotations

from datetime import date, timedelta

from badge_forge.domain.models import Badge
from badge_forge.engine.badges import VERIFIED_ACTIVITY_THRESHOLD, assign_badges, compute_verified
from tests.helpers import make_activity

LEVEL_100 = Badge.LEVEL_100.value
LEVEL_250 = Badge.LEVEL_250.value
LEVEL_500 = Badge.LEVEL_500.value


def test_level_badges_from_empty_set():
    assert assign_badges([], 99, []) == []
    assert assign_badges([], 100, []) == [LEVEL_100]
    assert assign_badges([], 250, []) == [LEVEL_100, LEVEL_250]
    assert assign_badges([], 500, []) == [LEVEL_100, LEVEL_250, LEVEL_500]


def test_existing_level_100_blocks_higher_tiers():
    # Higher tiers are only reachable in the call that grants level_100.
    assert assign_badges([LEVEL_100], 500, []) == [LEVEL_100]


def test_existing_level_250_with_level_100_adds_nothing():
    assert assign_badges([LEVEL_100, LEVEL_250], 1000, []) == [LEVEL_100, LEVEL_250]


def test_no_duplicates():
    badges = [LEVEL_100]
    assign_badges(badges, 100, [])
    assert badges == [LEVEL_100]


def test_mutates_in_place_and_keeps_unknown_badges():
    badges = ["founder"]
    result = assign_badges(badges, 120, [])
    assert result is badges
    assert badges == ["founder", LEVEL_100]


def test_streak_badges_order_month_then_week():
    start = date(2025, 1, 6)  # Monday, ISO week 2
    records = [make_activity(start + timedelta(days=offset)) for offset in range(22)]
    badges = assign_badges([], 0, records)
    assert badges == [Badge.MONTH_STREAK.value, Badge.WEEK_STREAK.value]


def test_streak_badges_are_not_duplicated():
    start = date(2025, 1, 6)
    records = [make_activity(start + timedelta(days=offset)) for offset in range(7)]
    badges = assign_badges([Badge.WEEK_STREAK.value], 0, records)
    assert badges == [Badge.WEEK_STREAK.value]


def test_badges_are_never_removed():
    badges = [LEVEL_100, Badge.WEEK_STREAK.value, Badge.MONTH_STREAK.value]
    assert assign_badges(badges, 0, []) == [LEVEL_100, Badge.WEEK_STREAK.value, Badge.MONTH_STREAK.value]


def test_compute_verified():
    assert compute_verified(False, VERIFIED_ACTIVITY_THRESHOLD - 1) is False
    assert compute_verified(False, VERIFIED_ACTIVITY_THRESHOLD) is True
    assert compute_verified(True, 0) is True
