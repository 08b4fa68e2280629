"""Domain events published to a user's room topic."""

from __future__ import annotations

from typing import Literal

from listening_room.domain.library.entities import Track
from listening_room.domain.shared.constants import Topics
from listening_room.domain.shared.events import DomainEvent
from listening_room.domain.shared.types import NonNegativeInt, UserIdInt


class PlaybackEvent(DomainEvent):
    """Base class for playback state changes of a user's track."""

    user_id: UserIdInt
    track: Track

    @property
    def topic(self) -> str:
        return room_topic(self.user_id)


class TrackPlayed(PlaybackEvent):
    event_type: Literal["play"] = "play"
    elapsed: NonNegativeInt = 0

    @classmethod
    def from_track(cls, track: Track, elapsed: int) -> TrackPlayed:
        return cls(user_id=track.user_id, track=track, elapsed=elapsed)


class TrackPaused(PlaybackEvent):
    event_type: Literal["pause"] = "pause"

    @classmethod
    def from_track(cls, track: Track) -> TrackPaused:
        return cls(user_id=track.user_id, track=track)


def room_topic(user_id: int) -> str:
    """Topic every listener of ``user_id``'s room subscribes to."""
    return Topics.room(user_id)
