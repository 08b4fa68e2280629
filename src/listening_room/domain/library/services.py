"""
Library Domain Services

The playback state machine: given a track snapshot and the current time it
computes the fields a transition writes and which peer tracks it demotes.
It never touches storage; the store applies the returned transition.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from listening_room.domain.library.entities import Track
from listening_room.domain.library.value_objects import (
    PauseFields,
    PlaybackStatus,
    PlaybackTransition,
    PlayFields,
)
from listening_room.domain.shared.datetime_utils import seconds_between, truncate_to_second
from listening_room.domain.shared.exceptions import InvalidOperationError, InvalidStateError


class PlaybackStateMachine:
    """Computes play/pause transitions and elapsed playback time."""

    @classmethod
    def request_play(cls, track: Track, now: datetime) -> PlaybackTransition:
        """Plan a play (or resume) of ``track``.

        Args:
            track: Current snapshot of the track.
            now: Current UTC time.

        Returns:
            Transition setting the track playing and demoting the user's other
            active tracks.
        """
        now = truncate_to_second(now)

        match track.status:
            case PlaybackStatus.PLAYING:
                played_at = track.played_at
            case PlaybackStatus.PAUSED:
                # Rewind the start so that now - played_at equals the time
                # already listened before the pause.
                elapsed = seconds_between(track.played_at, track.paused_at)
                played_at = now - timedelta(seconds=elapsed)
            case PlaybackStatus.STOPPED:
                played_at = now
            case _:
                raise InvalidStateError(track.status)

        return PlaybackTransition(
            user_id=track.user_id,
            track_id=track.id,
            target_fields=PlayFields(played_at=truncate_to_second(played_at)),
        )

    @classmethod
    def request_pause(cls, track: Track, now: datetime) -> PlaybackTransition:
        """Plan a pause of ``track``.

        ``paused_at`` is always the current time, also for a track that is
        already paused. A stopped track has no running clock and cannot be
        paused.

        Raises:
            InvalidOperationError: If the track is stopped.
        """
        match track.status:
            case PlaybackStatus.PLAYING | PlaybackStatus.PAUSED:
                paused_at = truncate_to_second(now)
            case PlaybackStatus.STOPPED:
                raise InvalidOperationError(operation="pause", current_state=track.status.value)
            case _:
                raise InvalidStateError(track.status)

        return PlaybackTransition(
            user_id=track.user_id,
            track_id=track.id,
            target_fields=PauseFields(paused_at=paused_at),
        )

    @classmethod
    def elapsed(cls, track: Track, now: datetime) -> int:
        """Seconds of the track listened to so far.

        Args:
            track: Snapshot of the track.
            now: Live (non-truncated) clock reading.

        Raises:
            InvalidStateError: If the status is not a known playback status.
        """
        match track.status:
            case PlaybackStatus.PLAYING:
                return seconds_between(track.played_at, now)
            case PlaybackStatus.PAUSED:
                return seconds_between(track.played_at, track.paused_at)
            case PlaybackStatus.STOPPED:
                return 0
            case _:
                raise InvalidStateError(track.status)
