"""Notifier port for broadcasting playback changes."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...domain.shared.events import DomainEvent, EventHandler


class Notifier(ABC):
    """Publishes events to topics; delivery is fire-and-forget."""

    @abstractmethod
    async def publish(self, topic: str, event: DomainEvent) -> None:
        """Publish an event to every subscriber of a topic."""
        ...

    @abstractmethod
    def subscribe(self, topic: str, handler: EventHandler) -> None:
        """Register a handler for a topic."""
        ...

    @abstractmethod
    def unsubscribe(self, topic: str, handler: EventHandler) -> None:
        """Remove a previously registered handler."""
        ...
