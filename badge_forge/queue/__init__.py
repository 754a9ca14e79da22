"""
Queue package for Badge Forge.

Re-exports the queue interfaces, the bounded channel and the in-memory queue
so downstream code can import from `badge_forge.queue` directly.
"""

from badge_forge.queue.abstract import AbstractBadgeUpdateQueue, BadgeUpdateQueue
from badge_forge.queue.channel import BoundedChannel, ChannelClosed
from badge_forge.queue.in_memory import InMemoryQueue

__all__ = [
    # Abstracts
    "AbstractBadgeUpdateQueue",
    "BadgeUpdateQueue",
    # Channel
    "BoundedChannel",
    "ChannelClosed",
    # Concrete queues
    "InMemoryQueue",
]
