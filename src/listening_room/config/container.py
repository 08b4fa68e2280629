"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for the database, repositories, notifier and
services. Components are created on-demand and cached for reuse.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ..application.interfaces.notifier import Notifier
    from ..application.services.library_service import LibraryService
    from ..domain.library.repository import TrackRepository
    from ..domain.library.services import PlaybackStateMachine
    from ..domain.shared.clock import Clock
    from ..domain.shared.events import EventBus
    from ..infrastructure.persistence.database import Database
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed. Tests may
    pre-populate a private slot (for example ``_clock``) to swap an
    implementation before it is first used.
    """

    settings: Settings

    # Persistence layer
    _database: Database | None = None
    _track_repository: TrackRepository | None = None

    # Infrastructure adapters
    _clock: Clock | None = None
    _event_bus: EventBus | None = None
    _notifier: Notifier | None = None

    # Domain services
    _playback_state_machine: PlaybackStateMachine | None = None

    # Application services
    _library_service: LibraryService | None = None

    # === Database ===

    @property
    def database(self) -> Database:
        """Get the database connection manager."""
        if self._database is None:
            from ..infrastructure.persistence.database import Database

            self._database = Database(self.settings.database.url, settings=self.settings.database)
        return self._database

    # === Repositories ===

    @property
    def track_repository(self) -> TrackRepository:
        """Get the track repository."""
        if self._track_repository is None:
            from ..infrastructure.persistence.repositories.track_repository import (
                SQLiteTrackRepository,
            )

            self._track_repository = SQLiteTrackRepository(self.database)
        return self._track_repository

    # === Infrastructure Adapters ===

    @property
    def clock(self) -> Clock:
        """Get the time source."""
        if self._clock is None:
            from ..domain.shared.clock import SystemClock

            self._clock = SystemClock()
        return self._clock

    @property
    def event_bus(self) -> EventBus:
        """Get the in-process topic event bus."""
        if self._event_bus is None:
            from ..domain.shared.events import get_event_bus

            self._event_bus = get_event_bus()
        return self._event_bus

    @property
    def notifier(self) -> Notifier:
        """Get the notifier publishing to room topics."""
        if self._notifier is None:
            from ..infrastructure.messaging.event_bus_notifier import EventBusNotifier

            self._notifier = EventBusNotifier(self.event_bus)
        return self._notifier

    # === Domain Services ===

    @property
    def playback_state_machine(self) -> PlaybackStateMachine:
        """Get the playback state machine."""
        if self._playback_state_machine is None:
            from ..domain.library.services import PlaybackStateMachine

            self._playback_state_machine = PlaybackStateMachine()
        return self._playback_state_machine

    # === Application Services ===

    @property
    def library_service(self) -> LibraryService:
        """Get the library application service."""
        if self._library_service is None:
            from ..application.services.library_service import LibraryService

            self._library_service = LibraryService(
                track_repository=self.track_repository,
                state_machine=self.playback_state_machine,
                notifier=self.notifier,
                clock=self.clock,
            )
        return self._library_service

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Initialize all async resources."""
        await self.database.initialize()

    async def shutdown(self) -> None:
        """Shutdown and cleanup all resources."""
        if self._event_bus is not None:
            self._event_bus.clear()

        if self._database is not None:
            await self._database.close()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
