"""
Domain package for Badge Forge.

Exports the core domain models used across the queue, engine and processor.
Keep this package focused on data definitions and validation concerns.
"""

from badge_forge.domain.models import (
    ActivityRecord,
    Badge,
    UpdateRequest,
    UserRecord,
    UserUpdate,
)

__all__ = [
    "ActivityRecord",
    "Badge",
    "UpdateRequest",
    "UserRecord",
    "UserUpdate",
]
