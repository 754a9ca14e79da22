"""
Record store interfaces consumed by the processor.

All calls are treated as fallible remote I/O: implementations raise
StoreError for transport or driver failures and never retry internally.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

from badge_forge.domain.models import ActivityRecord, UserRecord, UserUpdate
from badge_forge.errors import InvalidUserIdError


def parse_bigint_id(raw: str) -> int:
    """Parse a positive integer key, raising InvalidUserIdError otherwise."""
    text = raw.strip()
    if not text.isdigit():
        raise InvalidUserIdError(raw)
    value = int(text)
    if value <= 0 or value > 2**63 - 1:
        raise InvalidUserIdError(raw)
    return value


@runtime_checkable
class UserStore(Protocol):
    def parse_user_id(self, raw: str) -> int:
        ...

    async def fetch_user(self, user_id: int) -> Optional[UserRecord]:
        ...

    async def update_user(self, user_id: int, update: UserUpdate) -> None:
        ...


@runtime_checkable
class ActivityStore(Protocol):
    async def fetch_activities_by_owner(self, user_id: int) -> List[ActivityRecord]:
        ...


@runtime_checkable
class RecordStore(UserStore, ActivityStore, Protocol):
    """A store that serves both users and their activity records."""


__all__ = ["ActivityStore", "RecordStore", "UserStore", "parse_bigint_id"]
