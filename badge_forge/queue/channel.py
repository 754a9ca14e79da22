"""
Bounded asyncio hand-off channel with close semantics.

``asyncio.Queue`` provides the FIFO buffer and the suspension of senders while
it is full; this wrapper adds a permanent ``close()`` that wakes blocked
senders and lets the receiver drain what is already buffered.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Generic, TypeVar

T = TypeVar("T")


class ChannelClosed(Exception):
    """Raised by send() after close(), and by receive() once closed and drained."""


class BoundedChannel(Generic[T]):
    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._buffer: asyncio.Queue[T] = asyncio.Queue(maxsize=capacity)
        self._closed = asyncio.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def qsize(self) -> int:
        return self._buffer.qsize()

    def close(self) -> None:
        self._closed.set()

    async def _race_close(self, operation: Awaitable[T]) -> T:
        op_task = asyncio.ensure_future(operation)
        closed_task = asyncio.ensure_future(self._closed.wait())
        try:
            await asyncio.wait({op_task, closed_task}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            closed_task.cancel()
            if not op_task.done():
                op_task.cancel()
                try:
                    await op_task
                except asyncio.CancelledError:
                    pass
        if op_task.cancelled():
            raise ChannelClosed("channel closed")
        return op_task.result()

    async def send(self, item: T) -> None:
        """Push ``item``, suspending while the buffer is full."""
        if self.closed:
            raise ChannelClosed("channel closed")
        try:
            self._buffer.put_nowait(item)
            return
        except asyncio.QueueFull:
            pass
        await self._race_close(self._buffer.put(item))

    async def receive(self) -> T:
        """Pop the next item, suspending while empty; buffered items survive close()."""
        while True:
            try:
                return self._buffer.get_nowait()
            except asyncio.QueueEmpty:
                pass
            if self.closed:
                raise ChannelClosed("channel closed")
            try:
                return await self._race_close(self._buffer.get())
            except ChannelClosed:
                # Loop once more to drain anything that landed as we closed.
                continue


__all__ = ["BoundedChannel", "ChannelClosed"]
