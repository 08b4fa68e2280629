from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
import pytest_asyncio

from listening_room.domain.shared.clock import Clock

# ============================================================================
# Clock
# ============================================================================


class ManualClock(Clock):
    """Clock that only moves when a test tells it to."""

    def __init__(self, start: float = 1000) -> None:
        self._now = datetime.fromtimestamp(start, tz=UTC)

    def now(self) -> datetime:
        return self._now

    def set(self, unix_seconds: float) -> None:
        self._now = datetime.fromtimestamp(unix_seconds, tz=UTC)

    def advance(self, seconds: float) -> None:
        self._now += timedelta(seconds=seconds)


@pytest.fixture
def clock():
    return ManualClock()


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def in_memory_database():
    """Create an in-memory SQLite database for testing."""
    from listening_room.infrastructure.persistence.database import Database

    db = Database(":memory:")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def file_database(tmp_path):
    """Create a file-backed SQLite database so connections can run concurrently."""
    from listening_room.infrastructure.persistence.database import Database

    db = Database(f"sqlite:///{tmp_path / 'room.db'}")
    await db.initialize()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def track_repository(in_memory_database):
    """Create a track repository with in-memory database."""
    from listening_room.infrastructure.persistence.repositories.track_repository import (
        SQLiteTrackRepository,
    )

    return SQLiteTrackRepository(in_memory_database)


# ============================================================================
# Notification Fixtures
# ============================================================================


@pytest.fixture
def event_bus():
    from listening_room.domain.shared.events import EventBus

    return EventBus()


@pytest.fixture
def notifier(event_bus):
    from listening_room.infrastructure.messaging.event_bus_notifier import EventBusNotifier

    return EventBusNotifier(event_bus)


@pytest.fixture
def make_library_service(notifier, clock):
    """Build a LibraryService over a given repository."""
    from listening_room.application.services.library_service import LibraryService
    from listening_room.domain.library.services import PlaybackStateMachine

    def _make(repository, *, notifier_override=None):
        return LibraryService(
            track_repository=repository,
            state_machine=PlaybackStateMachine(),
            notifier=notifier_override or notifier,
            clock=clock,
        )

    return _make


@pytest.fixture
def library_service(make_library_service, track_repository):
    return make_library_service(track_repository)


@pytest.fixture
def room_events(library_service):
    """Events published to user 1's room."""
    received = []

    async def handler(event):
        received.append(event)

    library_service.subscribe(1, handler)
    return received


# ============================================================================
# Domain Entity Fixtures
# ============================================================================


@pytest.fixture
def sample_new_track():
    from listening_room.domain.library.entities import NewTrack

    return NewTrack(
        user_id=1,
        title="Test Track",
        artist="Test Artist",
        duration_seconds=180,
        mp3_filepath="priv/uploads/songs/test.mp3",
    )


@pytest.fixture
def create_track(track_repository):
    """Store a stopped track for a user and return it."""
    from listening_room.domain.library.entities import NewTrack

    async def _create(user_id: int = 1, title: str = "Track"):
        return await track_repository.create(NewTrack(user_id=user_id, title=title))

    return _create
