"""Notifier adapter backed by the in-process topic event bus."""

from __future__ import annotations

from typing import TYPE_CHECKING

from listening_room.application.interfaces.notifier import Notifier

if TYPE_CHECKING:
    from listening_room.domain.shared.events import DomainEvent, EventBus, EventHandler


class EventBusNotifier(Notifier):
    def __init__(self, event_bus: EventBus) -> None:
        self._bus = event_bus

    async def publish(self, topic: str, event: DomainEvent) -> None:
        await self._bus.publish(topic, event)

    def subscribe(self, topic: str, handler: EventHandler) -> None:
        self._bus.subscribe(topic, handler)

    def unsubscribe(self, topic: str, handler: EventHandler) -> None:
        self._bus.unsubscribe(topic, handler)
