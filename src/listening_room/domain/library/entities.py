"""Core domain entities for the library bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from listening_room.domain.library.value_objects import PlaybackStatus
from listening_room.domain.shared.datetime_utils import utcnow
from listening_room.domain.shared.messages import ErrorMessages
from listening_room.domain.shared.types import (
    DurationSeconds,
    NonEmptyStr,
    PlaybackTimestamp,
    TrackIdInt,
    TrackTitleStr,
    UserIdInt,
    UtcDatetimeField,
)


class NewTrack(BaseModel):
    """Catalog data for a track that has not been stored yet."""

    model_config = ConfigDict(frozen=True)

    user_id: UserIdInt
    title: TrackTitleStr
    artist: NonEmptyStr | None = None
    duration_seconds: DurationSeconds = 0
    mp3_filepath: NonEmptyStr | None = None


class Track(BaseModel):
    """Snapshot of a stored track and its playback fields.

    ``played_at`` is the logical start of the playback clock: for a playing
    track the elapsed time is ``now - played_at``. Resuming shifts it back by
    the time already listened, so no separate accumulator is stored.
    ``paused_at`` only carries meaning while the track is paused.
    """

    model_config = ConfigDict(frozen=True)

    id: TrackIdInt
    user_id: UserIdInt
    title: TrackTitleStr
    artist: NonEmptyStr | None = None
    duration_seconds: DurationSeconds = 0
    mp3_filepath: NonEmptyStr | None = None

    status: PlaybackStatus = PlaybackStatus.STOPPED
    played_at: PlaybackTimestamp = None
    paused_at: PlaybackTimestamp = None
    inserted_at: UtcDatetimeField = Field(default_factory=utcnow)

    @model_validator(mode="after")
    def _check_playback_fields(self) -> Track:
        if self.status is PlaybackStatus.PLAYING and self.played_at is None:
            raise ValueError(ErrorMessages.PLAYING_WITHOUT_PLAYED_AT)
        if self.status is PlaybackStatus.PAUSED:
            if self.played_at is None or self.paused_at is None:
                raise ValueError(ErrorMessages.PAUSED_WITHOUT_TIMESTAMPS)
            if self.paused_at < self.played_at:
                raise ValueError(ErrorMessages.PAUSED_BEFORE_PLAYED)
        return self

    @property
    def is_playing(self) -> bool:
        return self.status is PlaybackStatus.PLAYING

    @property
    def is_paused(self) -> bool:
        return self.status is PlaybackStatus.PAUSED

    @property
    def is_stopped(self) -> bool:
        return self.status is PlaybackStatus.STOPPED

    @property
    def is_active(self) -> bool:
        return self.status.is_active

    @property
    def duration_formatted(self) -> str:
        """Format duration as MM:SS or HH:MM:SS."""
        hours, remainder = divmod(self.duration_seconds, 3600)
        minutes, seconds = divmod(remainder, 60)

        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}"
