"""Pydantic schemas for API request/response validation."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from badge_forge.domain.models import UpdateRequest


class UpdateBadgesBody(BaseModel):
    """Body of POST /update; missing fields are filled in by the queue."""

    user_id: str = Field(..., min_length=1, pattern=r"\S")
    request_id: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_request(self) -> UpdateRequest:
        return UpdateRequest(
            user_id=self.user_id,
            request_id=self.request_id or "",
            created_at=self.created_at,
        )


class QueuedResponse(BaseModel):
    status: str = "queued"
    user_id: str


class QueueStatusResponse(BaseModel):
    status: str = "ok"
    pending_count: int
    pending_requests: List[UpdateRequest]


class HealthResponse(BaseModel):
    status: str = "ok"


class VersionResponse(BaseModel):
    version: str


__all__ = [
    "HealthResponse",
    "QueueStatusResponse",
    "QueuedResponse",
    "UpdateBadgesBody",
    "VersionResponse",
]
