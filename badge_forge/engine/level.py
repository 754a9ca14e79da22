"""
Level arithmetic.

Counters are unsigned 32-bit quantities. Exceeding that range traps with
``LevelOverflowError`` rather than wrapping or saturating.
"""

from __future__ import annotations

from typing import Iterable

from badge_forge.domain.models import ActivityRecord
from badge_forge.errors import LevelOverflowError

U32_MAX = 2**32 - 1


def _checked_add(a: int, b: int) -> int:
    total = a + b
    if total > U32_MAX:
        raise LevelOverflowError(f"u32 overflow: {a} + {b}")
    return total


def _check_u32(name: str, value: int) -> None:
    if value < 0 or value > U32_MAX:
        raise LevelOverflowError(f"{name}={value} is outside the u32 range")


def compute_level(recipe_count: int, total_likes: int) -> int:
    """Level is the overflow-checked sum of recipe count and total likes."""
    _check_u32("recipe_count", recipe_count)
    _check_u32("total_likes", total_likes)
    return _checked_add(recipe_count, total_likes)


def total_like_count(records: Iterable[ActivityRecord]) -> int:
    total = 0
    for record in records:
        total = _checked_add(total, record.like_count)
    return total


__all__ = ["U32_MAX", "compute_level", "total_like_count"]
