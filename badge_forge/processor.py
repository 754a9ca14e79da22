"""
Badge Forge processor: the single consumer of the badge update queue.

For each request it loads the user and their recipes, runs the level and
badge engine, writes the result back and then confirms the request with the
queue, whether or not the pipeline succeeded. Requests are processed strictly
one at a time; failures are logged and dropped (no retry, no dead letters).

Usage:
    queue = InMemoryQueue(capacity=100)
    processor = BadgeForgeProcessor(store, queue)
    processor.start()
    ...
    await processor.stop()
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Optional, Tuple

from badge_forge.domain.models import UpdateRequest, UserUpdate
from badge_forge.engine import assign_badges, compute_level, compute_verified, total_like_count
from badge_forge.errors import BadgeForgeError, LevelOverflowError, UserNotFoundError
from badge_forge.queue.abstract import BadgeUpdateQueue
from badge_forge.queue.channel import ChannelClosed
from badge_forge.store.abstract import RecordStore
from badge_forge.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome of one successful pipeline run."""

    user_id: str
    level: int
    badges: Tuple[str, ...] = ()
    verified: bool = False
    activity_count: int = 0


class BadgeForgeProcessor:
    """
    Consumes update requests and persists recomputed levels and badges.

    The record store is injected; the processor holds no global state.
    """

    def __init__(self, store: RecordStore, queue: BadgeUpdateQueue) -> None:
        self.store = store
        self.queue = queue
        self.processed = 0
        self.failed = 0
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> "asyncio.Task[None]":
        """Spawn the consumer task. Must be called from a running event loop."""
        if self.running:
            raise RuntimeError("Badge Forge Processor is already running")
        self._task = asyncio.get_running_loop().create_task(
            self.run(), name="badge-forge-processor"
        )
        return self._task

    async def stop(self) -> None:
        """Close the queue and wait for the consumer to drain and exit."""
        self.queue.close()
        if self._task is not None:
            await self._task

    async def run(self) -> None:
        log.info("Badge Forge Processor started")
        try:
            while True:
                try:
                    request = await self.queue.receive()
                except ChannelClosed:
                    break
                await self._handle(request)
        finally:
            log.info(
                "Badge Forge Processor stopped",
                extra={"processed": self.processed, "failed": self.failed},
            )

    async def _handle(self, request: UpdateRequest) -> None:
        start = time.perf_counter()
        try:
            result = await self.process_request(request)
        except BadgeForgeError as exc:
            self.failed += 1
            log.error(
                f"Error processing badge update request: {exc}",
                extra={
                    "user_id": request.user_id,
                    "request_id": request.request_id,
                    "reason": type(exc).__name__,
                },
            )
        except LevelOverflowError:
            log.critical(
                "Level arithmetic overflowed; stopping processor",
                extra={"user_id": request.user_id, "request_id": request.request_id},
            )
            raise
        except Exception as exc:
            self.failed += 1
            log.exception(
                f"Error processing badge update request: {exc}",
                extra={
                    "user_id": request.user_id,
                    "request_id": request.request_id,
                    "reason": type(exc).__name__,
                },
            )
        else:
            self.processed += 1
            log.info(
                f"Updated level and badges for user {result.user_id}: "
                f"level {result.level}, badges {list(result.badges)}",
                extra={
                    "user_id": result.user_id,
                    "request_id": request.request_id,
                    "level": result.level,
                    "verified": result.verified,
                    "duration_seconds": round(time.perf_counter() - start, 4),
                },
            )
        finally:
            await self.queue.mark_done(request.request_id)

    async def process_request(self, request: UpdateRequest) -> ProcessingResult:
        """Run the recompute pipeline for one request."""
        log.info(
            f"Processing badge update for user: {request.user_id}",
            extra={"user_id": request.user_id, "request_id": request.request_id},
        )
        user_id = self.store.parse_user_id(request.user_id)

        user = await self.store.fetch_user(user_id)
        if user is None:
            raise UserNotFoundError(request.user_id)

        records = await self.store.fetch_activities_by_owner(user_id)

        level = compute_level(len(records), total_like_count(records))
        badges = assign_badges(list(user.badges), level, records)
        verified = compute_verified(user.verified, len(records))

        await self.store.update_user(
            user_id, UserUpdate(level=level, badges=badges, verified=verified)
        )
        return ProcessingResult(
            user_id=request.user_id,
            level=level,
            badges=tuple(badges),
            verified=verified,
            activity_count=len(records),
        )


__all__ = ["BadgeForgeProcessor", "ProcessingResult"]
