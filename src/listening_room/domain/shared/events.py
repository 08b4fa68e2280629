"""Topic-keyed event bus for publishing and subscribing to domain events."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from collections.abc import Awaitable, Callable
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from listening_room.domain.shared.datetime_utils import utcnow
from listening_room.domain.shared.messages import LogTemplates
from listening_room.domain.shared.types import NonEmptyStr, UtcDatetimeField

logger = logging.getLogger(__name__)

EventHandler = Callable[["DomainEvent"], Awaitable[None]]


class DomainEvent(BaseModel):
    """Base class for all domain events."""

    model_config = ConfigDict(frozen=True)

    event_id: NonEmptyStr = Field(default_factory=lambda: str(uuid4()))
    occurred_at: UtcDatetimeField = Field(default_factory=utcnow)


class EventBus:
    """In-memory pub/sub bus keyed by topic name.

    Handlers of a topic are called concurrently. Exceptions in handlers are
    logged but do not prevent other handlers from running, and never reach
    the publisher.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, topic: str, handler: EventHandler) -> None:
        self._handlers[topic].append(handler)
        logger.debug(LogTemplates.SUBSCRIBED, topic)

    def unsubscribe(self, topic: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(topic, [])
        if handler in handlers:
            handlers.remove(handler)
            logger.debug(LogTemplates.UNSUBSCRIBED, topic)
        if not handlers:
            self._handlers.pop(topic, None)

    def subscriber_count(self, topic: str) -> int:
        return len(self._handlers.get(topic, []))

    async def publish(self, topic: str, event: DomainEvent) -> None:
        event_name = type(event).__name__
        handlers = list(self._handlers.get(topic, []))

        if not handlers:
            logger.debug(LogTemplates.NO_SUBSCRIBERS, event_name, topic)
            return

        logger.debug(LogTemplates.PUBLISHING, event_name, len(handlers), topic)

        async def safe_call(handler: EventHandler) -> None:
            try:
                await handler(event)
            except Exception as e:
                logger.exception(LogTemplates.HANDLER_FAILED, event_name, topic, e)

        async with asyncio.TaskGroup() as tg:
            for handler in handlers:
                tg.create_task(safe_call(handler))

    def clear(self) -> None:
        """Remove all subscriptions."""
        self._handlers.clear()
        logger.debug(LogTemplates.SUBSCRIPTIONS_CLEARED)


_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Get or create the global event bus singleton."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus


def reset_event_bus() -> None:
    """Reset the global event bus (for testing)."""
    global _event_bus
    if _event_bus is not None:
        _event_bus.clear()
    _event_bus = None
