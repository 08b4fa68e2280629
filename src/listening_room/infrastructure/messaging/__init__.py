"""Pub/sub notifier adapters."""

from listening_room.infrastructure.messaging.event_bus_notifier import EventBusNotifier

__all__ = [
    "EventBusNotifier",
]
