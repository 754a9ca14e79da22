"""HTTP routes: badge update submission, queue status, health and version."""

from __future__ import annotations

import hmac
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from starlette import status

from badge_forge import __version__
from badge_forge.api.schemas import (
    HealthResponse,
    QueuedResponse,
    QueueStatusResponse,
    UpdateBadgesBody,
    VersionResponse,
)
from badge_forge.config import Settings
from badge_forge.errors import QueueDeliveryError
from badge_forge.queue.abstract import BadgeUpdateQueue
from badge_forge.utils.logging import get_logger

log = get_logger(__name__)


def get_queue(request: Request) -> BadgeUpdateQueue:
    return request.app.state.queue


def require_api_key(
    request: Request,
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
) -> None:
    """Reject requests whose X-API-Key header does not match API_KEY."""
    settings: Settings = request.app.state.settings
    if x_api_key is None or not hmac.compare_digest(
        x_api_key.encode(), settings.api_key.encode()
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API key",
        )


protected_router = APIRouter(tags=["badges"], dependencies=[Depends(require_api_key)])
public_router = APIRouter(tags=["health"])


@protected_router.post("/update", response_model=QueuedResponse)
async def update_badges(
    body: UpdateBadgesBody,
    queue: BadgeUpdateQueue = Depends(get_queue),
) -> QueuedResponse:
    """Queue a level and badge recomputation for one user."""
    try:
        await queue.submit(body.to_request())
    except QueueDeliveryError as exc:
        log.error("Failed to queue badge update", extra={"user_id": body.user_id})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc
    return QueuedResponse(user_id=body.user_id)


@protected_router.get("/status", response_model=QueueStatusResponse)
async def queue_status(
    queue: BadgeUpdateQueue = Depends(get_queue),
) -> QueueStatusResponse:
    pending = await queue.list_pending()
    return QueueStatusResponse(pending_count=len(pending), pending_requests=pending)


@public_router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse()


@public_router.get("/version", response_model=VersionResponse)
async def version() -> VersionResponse:
    return VersionResponse(version=__version__)


__all__ = ["protected_router", "public_router", "require_api_key"]
