"""
Library Bounded Context

Tracks owned by users and the playback state machine that moves them
between stopped, playing and paused.
"""

from listening_room.domain.library.entities import NewTrack, Track
from listening_room.domain.library.events import PlaybackEvent, TrackPaused, TrackPlayed
from listening_room.domain.library.repository import TrackRepository
from listening_room.domain.library.services import PlaybackStateMachine
from listening_room.domain.library.value_objects import (
    PauseFields,
    PlaybackStatus,
    PlaybackTransition,
    PlayFields,
)

__all__ = [
    # Entities
    "Track",
    "NewTrack",
    # Value Objects
    "PlaybackStatus",
    "PlayFields",
    "PauseFields",
    "PlaybackTransition",
    # Events
    "PlaybackEvent",
    "TrackPlayed",
    "TrackPaused",
    # Repository
    "TrackRepository",
    # Services
    "PlaybackStateMachine",
]
