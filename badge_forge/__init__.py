"""
Badge Forge - asynchronous level and badge recomputation for users.

This package accepts requests to recompute a user's gamification level and
badge set, serializes them through a bounded in-memory queue, and processes
them with a single consumer against a record store:

- Level & badge engine (pure level arithmetic, tiered badges, streaks)
- Bounded badge update queue with pending-state visibility
- Badge Forge processor (the queue's only consumer)
- Postgres and in-memory record stores
- A FastAPI surface and a Typer CLI
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from badge_forge.config import Settings, get_settings
from badge_forge.domain.models import ActivityRecord, Badge, UpdateRequest, UserRecord, UserUpdate
from badge_forge.engine import (
    assign_badges,
    compute_level,
    compute_verified,
    is_month_streak,
    is_week_streak,
)
from badge_forge.errors import (
    BadgeForgeError,
    InvalidUserIdError,
    LevelOverflowError,
    QueueDeliveryError,
    StoreError,
    UserNotFoundError,
)
from badge_forge.processor import BadgeForgeProcessor, ProcessingResult
from badge_forge.queue import BadgeUpdateQueue, InMemoryQueue
from badge_forge.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "ActivityRecord",
    "Badge",
    "UpdateRequest",
    "UserRecord",
    "UserUpdate",
    # Engine
    "assign_badges",
    "compute_level",
    "compute_verified",
    "is_month_streak",
    "is_week_streak",
    # Errors
    "BadgeForgeError",
    "InvalidUserIdError",
    "LevelOverflowError",
    "QueueDeliveryError",
    "StoreError",
    "UserNotFoundError",
    # Queue & processing
    "BadgeForgeProcessor",
    "BadgeUpdateQueue",
    "InMemoryQueue",
    "ProcessingResult",
    # Logging
    "configure_logging",
    "get_logger",
]
