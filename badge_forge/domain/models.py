"""
Domain models for Badge Forge.

Defines the update request accepted by the queue, the user and activity
records read from the record store, and the closed set of badges. Models are
frozen so a request handed to the queue cannot change after submission.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Badge(str, Enum):
    LEVEL_100 = "level_100"
    LEVEL_250 = "level_250"
    LEVEL_500 = "level_500"
    WEEK_STREAK = "week_streak"
    MONTH_STREAK = "month_streak"


class UpdateRequest(BaseModel):
    """
    A request to recompute one user's level and badges.

    ``request_id`` and ``created_at`` may be left empty by the caller; the
    queue fills them in via :meth:`normalized` before the request becomes
    visible to anyone.
    """

    user_id: str = Field(..., description="Identifier of the user to recompute.")
    request_id: str = Field("", description="Unique request identifier.")
    created_at: Optional[datetime] = Field(None, description="Submission timestamp.")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @field_validator("user_id")
    @classmethod
    def _user_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("user_id must not be empty")
        return value

    @field_validator("created_at")
    @classmethod
    def _normalize_created_at(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        value = _as_utc(value)
        # The Unix epoch is what an unset timestamp looks like on the wire.
        if value == _EPOCH:
            return None
        return value

    def normalized(self, now: Optional[datetime] = None) -> "UpdateRequest":
        """Return a copy with a generated request_id and timestamp where absent."""
        updates = {}
        if not self.request_id:
            updates["request_id"] = str(uuid.uuid4())
        if self.created_at is None:
            updates["created_at"] = now or datetime.now(timezone.utc)
        if not updates:
            return self
        return self.model_copy(update=updates)


class UserRecord(BaseModel):
    """
    Representation of a row in the `users` table.
    """

    id: int = Field(..., description="Primary key.")
    name: Optional[str] = Field(None)
    email: Optional[str] = Field(None)
    level: int = Field(0, ge=0)
    badges: List[str] = Field(default_factory=list)
    verified: bool = Field(False)

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @field_validator("badges", mode="before")
    @classmethod
    def _default_badges(cls, value):
        return [] if value is None else value

    @field_validator("verified", mode="before")
    @classmethod
    def _default_verified(cls, value):
        return False if value is None else value


class ActivityRecord(BaseModel):
    """
    Representation of a row in the `recipes` table.
    """

    id: int = Field(..., description="Primary key.")
    user_id: int = Field(..., description="Owning user.")
    like_count: int = Field(0, ge=0)
    created_at: datetime = Field(..., description="Creation timestamp (UTC).")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @field_validator("created_at")
    @classmethod
    def _created_at_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)


class UserUpdate(BaseModel):
    """The full replacement written back to a user after recomputation."""

    level: int = Field(..., ge=0)
    badges: List[str]
    verified: bool

    model_config = {"frozen": True}


__all__ = ["Badge", "UpdateRequest", "UserRecord", "ActivityRecord", "UserUpdate"]
