"""
Application Interfaces (Ports)

Abstract interfaces for infrastructure the application layer depends on.
"""

from listening_room.application.interfaces.notifier import Notifier

__all__ = [
    "Notifier",
]
