"""
Domain Layer

Contains pure business logic organized by bounded contexts:
- shared/: Clock, event bus, value types and exceptions
- library/: Tracks and the playback state machine
"""

from listening_room.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
