"""
FastAPI application factory for Badge Forge.

When no queue is injected, the lifespan opens the Postgres pool, builds the
bounded queue and starts the processor; everything is torn down in reverse
order on shutdown.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from badge_forge import __version__
from badge_forge.api.routes import protected_router, public_router
from badge_forge.config import Settings, get_settings
from badge_forge.infrastructure.db_factory import open_async_pool
from badge_forge.processor import BadgeForgeProcessor
from badge_forge.queue.abstract import BadgeUpdateQueue
from badge_forge.queue.in_memory import InMemoryQueue
from badge_forge.store.postgres import PostgresRecordStore
from badge_forge.utils.logging import get_logger

log = get_logger(__name__)


@asynccontextmanager
async def _postgres_lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    pool = await open_async_pool(
        dsn=settings.dsn,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    queue = InMemoryQueue(settings.queue_capacity)
    processor = BadgeForgeProcessor(PostgresRecordStore(pool), queue)
    app.state.queue = queue
    app.state.processor = processor
    processor.start()
    log.info("Badge Forge API started", extra={"queue_capacity": settings.queue_capacity})
    try:
        yield
    finally:
        try:
            await processor.stop()
        finally:
            await pool.close()


@asynccontextmanager
async def _injected_lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield


def create_app(
    queue: Optional[BadgeUpdateQueue] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the API.

    Parameters
    ----------
    queue : BadgeUpdateQueue | None
        Pre-built queue (its consumer is the caller's business). If None, the
        Postgres-backed queue and processor are created at startup.
    settings : Settings | None
        Defaults to the cached environment settings.
    """
    app = FastAPI(
        title="Badge Forge",
        version=__version__,
        lifespan=_postgres_lifespan if queue is None else _injected_lifespan,
    )
    app.state.settings = settings or get_settings()
    app.state.queue = queue
    app.include_router(protected_router)
    app.include_router(public_router)
    return app


__all__ = ["create_app"]
