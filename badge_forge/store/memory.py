"""
Dict-backed record store, used by tests and local experiments.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from badge_forge.domain.models import ActivityRecord, UserRecord, UserUpdate
from badge_forge.errors import StoreError
from badge_forge.store.abstract import parse_bigint_id


class InMemoryRecordStore:
    def __init__(self) -> None:
        self.users: Dict[int, UserRecord] = {}
        self.activities: List[ActivityRecord] = []
        self.update_calls = 0

    def parse_user_id(self, raw: str) -> int:
        return parse_bigint_id(raw)

    def add_user(self, user_id: int, **fields) -> UserRecord:
        user = UserRecord(id=user_id, **fields)
        self.users[user_id] = user
        return user

    def add_activity(self, user_id: int, created_at: datetime, like_count: int = 0) -> ActivityRecord:
        record = ActivityRecord(
            id=len(self.activities) + 1,
            user_id=user_id,
            like_count=like_count,
            created_at=created_at,
        )
        self.activities.append(record)
        return record

    async def fetch_user(self, user_id: int) -> Optional[UserRecord]:
        return self.users.get(user_id)

    async def fetch_activities_by_owner(self, user_id: int) -> List[ActivityRecord]:
        return [record for record in self.activities if record.user_id == user_id]

    async def update_user(self, user_id: int, update: UserUpdate) -> None:
        current = self.users.get(user_id)
        if current is None:
            raise StoreError(f"Failed to update user badges: no user {user_id}")
        self.update_calls += 1
        self.users[user_id] = current.model_copy(update=update.model_dump())


__all__ = ["InMemoryRecordStore"]
