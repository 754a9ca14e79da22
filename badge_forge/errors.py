"""
Error taxonomy for Badge Forge.

Validation, not-found and store errors end a single request's pipeline and are
logged by the processor. Delivery errors surface synchronously from
``submit``. ``LevelOverflowError`` is a programming error and is never
swallowed.
"""

from __future__ import annotations


class BadgeForgeError(Exception):
    """Base class for recoverable Badge Forge failures."""


class InvalidUserIdError(BadgeForgeError, ValueError):
    """The user identifier cannot be parsed into the store's key type."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"Invalid user ID format: {user_id}")
        self.user_id = user_id


class UserNotFoundError(BadgeForgeError, LookupError):
    def __init__(self, user_id: str) -> None:
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class StoreError(BadgeForgeError):
    """An I/O failure talking to the record store."""


class QueueDeliveryError(BadgeForgeError):
    """The queue's hand-off channel is closed; the request was not accepted."""


class LevelOverflowError(OverflowError):
    """An unsigned 32-bit counter or level exceeded its range."""


__all__ = [
    "BadgeForgeError",
    "InvalidUserIdError",
    "UserNotFoundError",
    "StoreError",
    "QueueDeliveryError",
    "LevelOverflowError",
]
