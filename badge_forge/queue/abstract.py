"""
Badge update queue interfaces.

Producers call ``submit`` and may observe in-flight work with
``list_pending``; the single consumer calls ``receive`` and confirms each
request with ``mark_done``. Concrete queues should implement the
BadgeUpdateQueue protocol or subclass AbstractBadgeUpdateQueue.
"""

from __future__ import annotations

import abc
from typing import List, Protocol, runtime_checkable

from badge_forge.domain.models import UpdateRequest


@runtime_checkable
class BadgeUpdateQueue(Protocol):
    """
    Common interface for badge update queues.
    """

    async def submit(self, request: UpdateRequest) -> UpdateRequest:
        """
        Accept a request for eventual processing.

        Parameters
        ----------
        request : UpdateRequest
            The request; ``request_id`` and ``created_at`` are filled in when
            absent before the request becomes visible to any reader.

        Returns
        -------
        UpdateRequest
            The normalized request as stored and delivered.

        Raises
        ------
        QueueDeliveryError
            If the hand-off channel is permanently closed.
        """
        ...

    async def list_pending(self) -> List[UpdateRequest]:
        """Snapshot of requests submitted and not yet marked done."""
        ...

    async def mark_done(self, request_id: str) -> None:
        """Forget ``request_id``; unknown ids are ignored."""
        ...

    async def receive(self) -> UpdateRequest:
        """Next request for the consumer; raises ChannelClosed once shut down."""
        ...

    def close(self) -> None:
        """Permanently close the hand-off channel."""
        ...


class AbstractBadgeUpdateQueue(abc.ABC):
    """
    Optional ABC helper for class-based implementations.
    """

    @abc.abstractmethod
    async def submit(self, request: UpdateRequest) -> UpdateRequest:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    async def list_pending(self) -> List[UpdateRequest]:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    async def mark_done(self, request_id: str) -> None:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    async def receive(self) -> UpdateRequest:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def close(self) -> None:  # pragma: no cover - interface only
        raise NotImplementedError


__all__ = ["BadgeUpdateQueue", "AbstractBadgeUpdateQueue"]
