"""Immutable value objects for the library bounded context."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from listening_room.domain.shared.types import PlaybackInstant, TrackIdInt, UserIdInt


class PlaybackStatus(Enum):
    """Playback status of a single track.

    Transitions:
    - STOPPED -> PLAYING (play)
    - PAUSED -> PLAYING (resume)
    - PLAYING -> PLAYING (re-play keeps the clock)
    - PLAYING -> PAUSED, PAUSED -> PAUSED (pause)
    - PLAYING/PAUSED -> STOPPED only when another track of the user becomes active
    """

    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"

    @classmethod
    def active_states(cls) -> frozenset[PlaybackStatus]:
        return frozenset({cls.PLAYING, cls.PAUSED})

    @property
    def is_active(self) -> bool:
        return self in PlaybackStatus.active_states()


class PlayFields(BaseModel):
    """Fields a play transition is allowed to write."""

    model_config = ConfigDict(frozen=True)

    status: Literal[PlaybackStatus.PLAYING] = PlaybackStatus.PLAYING
    played_at: PlaybackInstant

    def columns(self) -> dict[str, Any]:
        return {"status": self.status, "played_at": self.played_at}


class PauseFields(BaseModel):
    """Fields a pause transition is allowed to write."""

    model_config = ConfigDict(frozen=True)

    status: Literal[PlaybackStatus.PAUSED] = PlaybackStatus.PAUSED
    paused_at: PlaybackInstant

    def columns(self) -> dict[str, Any]:
        return {"status": self.status, "paused_at": self.paused_at}


TransitionFields = PlayFields | PauseFields


class PlaybackTransition(BaseModel):
    """A computed state change, applied by the store as one atomic unit.

    Every other track of ``user_id`` whose status is in ``demote_from`` is set
    to stopped, then ``target_fields`` are written to ``track_id``.
    """

    model_config = ConfigDict(frozen=True)

    user_id: UserIdInt
    track_id: TrackIdInt
    target_fields: TransitionFields
    demote_from: frozenset[PlaybackStatus] = PlaybackStatus.active_states()

    @property
    def target_status(self) -> PlaybackStatus:
        return self.target_fields.status
