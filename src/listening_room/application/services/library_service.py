"""Library Application Service - play, pause and inspect a user's tracks."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ...domain.library.events import TrackPaused, TrackPlayed, room_topic
from ...domain.shared.exceptions import EntityNotFoundError, InvariantViolationError
from ...domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from collections.abc import Callable

    from ...domain.library.entities import Track
    from ...domain.library.events import PlaybackEvent
    from ...domain.library.repository import TrackRepository
    from ...domain.library.services import PlaybackStateMachine
    from ...domain.shared.clock import Clock
    from ...domain.shared.events import EventHandler
    from ..interfaces.notifier import Notifier

logger = logging.getLogger(__name__)


class LibraryService:
    """Composes the state machine, track store and notifier.

    Every play or pause runs as: compute the transition, apply it in one store
    transaction, then publish the result to the owner's room topic. Store
    errors propagate to the caller unchanged; publish errors are logged only,
    since the committed state is the authoritative effect.
    """

    def __init__(
        self,
        *,
        track_repository: TrackRepository,
        state_machine: PlaybackStateMachine,
        notifier: Notifier,
        clock: Clock,
    ) -> None:
        self._track_repo = track_repository
        self._state_machine = state_machine
        self._notifier = notifier
        self._clock = clock

    async def play(self, track_id: int) -> None:
        """Start or resume a track, stopping the owner's other active track."""
        logger.info(LogTemplates.PLAY_REQUESTED, track_id)
        track = await self.get_track(track_id)

        transition = self._state_machine.request_play(track, self._clock.now())
        updated = await self._track_repo.apply_transition(transition)

        await self._publish(
            updated, lambda: TrackPlayed.from_track(updated, self.elapsed(updated))
        )

    async def pause(self, track: Track) -> None:
        """Pause a track, stopping any other active track of the owner."""
        logger.info(LogTemplates.PAUSE_REQUESTED, track.id, track.user_id)

        transition = self._state_machine.request_pause(track, self._clock.now())
        updated = await self._track_repo.apply_transition(transition)

        await self._publish(updated, lambda: TrackPaused.from_track(updated))

    async def current_active(self, user_id: int) -> Track | None:
        """Return the user's playing or paused track, if any.

        Raises:
            InvariantViolationError: If the store holds more than one active
                track for the user.
        """
        active = await self._track_repo.list_active(user_id)
        if len(active) > 1:
            logger.error(
                LogTemplates.ACTIVE_TRACKS_CORRUPT,
                user_id,
                len(active),
                [track.id for track in active],
            )
            raise InvariantViolationError(
                "AT_MOST_ONE_ACTIVE_TRACK",
                ErrorMessages.MULTIPLE_ACTIVE_TRACKS.format(user_id=user_id, count=len(active)),
            )
        return active[0] if active else None

    def elapsed(self, track: Track) -> int:
        """Seconds listened so far, using a live clock reading."""
        return self._state_machine.elapsed(track, self._clock.now())

    async def get_track(self, track_id: int) -> Track:
        track = await self._track_repo.get(track_id)
        if track is None:
            raise EntityNotFoundError("Track", track_id)
        return track

    async def list_tracks(self, limit: int = 100) -> list[Track]:
        return await self._track_repo.list_tracks(limit)

    def subscribe(self, user_id: int, handler: EventHandler) -> None:
        """Listen to playback changes in ``user_id``'s room."""
        self._notifier.subscribe(room_topic(user_id), handler)

    def unsubscribe(self, user_id: int, handler: EventHandler) -> None:
        self._notifier.unsubscribe(room_topic(user_id), handler)

    async def _publish(self, track: Track, build_event: Callable[[], PlaybackEvent]) -> None:
        """Best-effort notification; the committed transition stands regardless."""
        topic = room_topic(track.user_id)
        try:
            event = build_event()
            await self._notifier.publish(topic, event)
        except Exception:
            logger.exception(LogTemplates.PUBLISH_FAILED, track.id, topic)
