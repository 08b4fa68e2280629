"""
Library Domain Repository Interfaces

Abstract base classes defining the contracts for track persistence.
Implementations live in the infrastructure layer.
"""

from abc import ABC, abstractmethod

from listening_room.domain.library.entities import NewTrack, Track
from listening_room.domain.library.value_objects import PlaybackTransition


class TrackRepository(ABC):
    """Abstract repository for tracks and their playback fields.

    All playback mutation goes through :meth:`apply_transition`, which is the
    single serialization point for transitions of the same user.
    """

    @abstractmethod
    async def get(self, track_id: int) -> Track | None:
        """Retrieve a track by ID.

        Args:
            track_id: The track primary key.

        Returns:
            The track if found, None otherwise.
        """
        ...

    @abstractmethod
    async def create(self, new_track: NewTrack) -> Track:
        """Store a new track in stopped status.

        Args:
            new_track: Catalog data for the track.

        Returns:
            The stored track with its assigned ID.
        """
        ...

    @abstractmethod
    async def delete(self, track_id: int) -> bool:
        """Delete a track.

        Args:
            track_id: The track primary key.

        Returns:
            True if the track was deleted, False if it didn't exist.
        """
        ...

    @abstractmethod
    async def list_tracks(self, limit: int = 100) -> list[Track]:
        """List tracks in insertion order.

        Args:
            limit: Maximum number of tracks to return.
        """
        ...

    @abstractmethod
    async def list_for_user(self, user_id: int) -> list[Track]:
        """List every track owned by a user, in insertion order."""
        ...

    @abstractmethod
    async def list_active(self, user_id: int) -> list[Track]:
        """List the user's tracks that are playing or paused.

        Returns every matching row so callers can detect a broken
        at-most-one-active invariant instead of silently picking one.
        """
        ...

    @abstractmethod
    async def apply_transition(self, transition: PlaybackTransition) -> Track:
        """Apply a playback transition as one atomic unit.

        Demotes the user's other tracks whose status is in
        ``transition.demote_from`` to stopped, then writes
        ``transition.target_fields`` to the target track. Either both writes
        commit or neither does.

        Args:
            transition: The transition computed by the state machine.

        Returns:
            The target track as stored after the transition.

        Raises:
            EntityNotFoundError: If the target track does not exist.
            ConflictError: If the store could not complete the transaction.
        """
        ...
