"""SQLite repository implementations."""

from listening_room.infrastructure.persistence.repositories.track_repository import (
    SQLiteTrackRepository,
)

__all__ = [
    "SQLiteTrackRepository",
]
