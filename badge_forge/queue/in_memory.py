"""
Bounded in-memory badge update queue.

One insertion-ordered map ``request_id -> UpdateRequest`` is the authoritative
pending set; a BoundedChannel of capacity N carries the same (immutable)
request objects to the consumer. ``submit`` records the request as pending
first and then pushes it, suspending while the channel is full. That
suspension is the only backpressure in the system.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Dict, List, Optional, Set

from badge_forge.domain.models import UpdateRequest
from badge_forge.errors import QueueDeliveryError
from badge_forge.queue.abstract import AbstractBadgeUpdateQueue
from badge_forge.queue.channel import BoundedChannel, ChannelClosed
from badge_forge.utils.logging import get_logger

log = get_logger(__name__)


def _retrieve_failure(task: "asyncio.Task[None]") -> None:
    # The submitter may have stopped waiting; mark the outcome as observed.
    if not task.cancelled():
        task.exception()


class InMemoryQueue(AbstractBadgeUpdateQueue):
    """
    Process-local queue; contents are lost on restart.

    A caller that cancels or times out a blocked ``submit`` does not withdraw
    the request: the hand-off keeps running and the request is delivered once
    the consumer makes room.
    """

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        self._channel: BoundedChannel[UpdateRequest] = BoundedChannel(capacity)
        self._pending: Dict[str, UpdateRequest] = {}
        self._lock = asyncio.Lock()
        self._deliveries: Set[asyncio.Task[None]] = set()

    @property
    def closed(self) -> bool:
        return self._channel.closed

    async def submit(
        self, request: UpdateRequest, now: Optional[datetime] = None
    ) -> UpdateRequest:
        request = request.normalized(now or datetime.now(timezone.utc))
        if self._channel.closed:
            raise QueueDeliveryError("Failed to enqueue badge update request: channel closed")

        async with self._lock:
            self._pending[request.request_id] = request
            pending = len(self._pending)
        log.info(
            f"Queue size: {pending} requests pending",
            extra={"request_id": request.request_id, "user_id": request.user_id, "pending": pending},
        )

        delivery = asyncio.ensure_future(self._deliver(request))
        self._deliveries.add(delivery)
        delivery.add_done_callback(self._deliveries.discard)
        delivery.add_done_callback(_retrieve_failure)
        await asyncio.shield(delivery)
        return request

    async def _deliver(self, request: UpdateRequest) -> None:
        try:
            await self._channel.send(request)
        except ChannelClosed as exc:
            # Nobody will ever consume it; do not leave it pending forever.
            async with self._lock:
                self._pending.pop(request.request_id, None)
            log.error(
                "Badge update request dropped: channel closed",
                extra={"request_id": request.request_id, "user_id": request.user_id},
            )
            raise QueueDeliveryError(
                f"Failed to enqueue badge update request: {exc}"
            ) from exc

    async def list_pending(self) -> List[UpdateRequest]:
        async with self._lock:
            return list(self._pending.values())

    async def mark_done(self, request_id: str) -> None:
        async with self._lock:
            self._pending.pop(request_id, None)

    async def receive(self) -> UpdateRequest:
        return await self._channel.receive()

    def close(self) -> None:
        if not self._channel.closed:
            log.info("Badge update queue closed", extra={"buffered": self._channel.qsize()})
        self._channel.close()


__all__ = ["InMemoryQueue"]
