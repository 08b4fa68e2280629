"""SQLite implementation of the track repository."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

import aiosqlite
from pydantic import ValidationError

from listening_room.domain.library.entities import NewTrack, Track
from listening_room.domain.library.repository import TrackRepository
from listening_room.domain.library.value_objects import PlaybackStatus, PlaybackTransition
from listening_room.domain.shared.constants import SQLErrors
from listening_room.domain.shared.datetime_utils import UtcDateTime, utcnow
from listening_room.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    InvariantViolationError,
)
from listening_room.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)


class SQLiteTrackRepository(TrackRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    async def get(self, track_id: int) -> Track | None:
        row = await self._db.fetch_one("SELECT * FROM tracks WHERE id = ?", (track_id,))
        return self._row_to_track(row) if row else None

    async def create(self, new_track: NewTrack) -> Track:
        inserted_at = utcnow()
        async with self._db.transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO tracks (
                    user_id, title, artist, duration_seconds, mp3_filepath,
                    status, inserted_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    new_track.user_id,
                    new_track.title,
                    new_track.artist,
                    new_track.duration_seconds,
                    new_track.mp3_filepath,
                    PlaybackStatus.STOPPED.value,
                    UtcDateTime(inserted_at).iso,
                ),
            )
            track_id = cursor.lastrowid

        logger.debug(LogTemplates.TRACK_CREATED, track_id, new_track.user_id)
        return Track(
            id=track_id,
            **new_track.model_dump(),
            status=PlaybackStatus.STOPPED,
            inserted_at=inserted_at,
        )

    async def delete(self, track_id: int) -> bool:
        async with self._db.transaction() as conn:
            cursor = await conn.execute("DELETE FROM tracks WHERE id = ?", (track_id,))
            deleted = cursor.rowcount > 0

        if deleted:
            logger.debug(LogTemplates.TRACK_DELETED, track_id)
        return deleted

    async def list_tracks(self, limit: int = 100) -> list[Track]:
        rows = await self._db.fetch_all(
            "SELECT * FROM tracks ORDER BY inserted_at ASC, id ASC LIMIT ?",
            (limit,),
        )
        return [self._row_to_track(row) for row in rows]

    async def list_for_user(self, user_id: int) -> list[Track]:
        rows = await self._db.fetch_all(
            "SELECT * FROM tracks WHERE user_id = ? ORDER BY inserted_at ASC, id ASC",
            (user_id,),
        )
        return [self._row_to_track(row) for row in rows]

    async def list_active(self, user_id: int) -> list[Track]:
        active = sorted(status.value for status in PlaybackStatus.active_states())
        rows = await self._db.fetch_all(
            f"""
            SELECT * FROM tracks
            WHERE user_id = ? AND status IN ({", ".join("?" * len(active))})
            ORDER BY id ASC
            """,  # noqa: S608
            (user_id, *active),
        )
        return [self._row_to_track(row) for row in rows]

    async def apply_transition(self, transition: PlaybackTransition) -> Track:
        try:
            async with self._db.write_transaction() as conn:
                demoted = await self._update_all_where(
                    conn,
                    user_id=transition.user_id,
                    statuses=transition.demote_from,
                    exclude_id=transition.track_id,
                )
                updated = await self._update(
                    conn, transition.track_id, transition.target_fields.columns()
                )
                if not updated:
                    raise EntityNotFoundError("Track", transition.track_id)

                cursor = await conn.execute(
                    "SELECT * FROM tracks WHERE id = ?", (transition.track_id,)
                )
                track = self._checked_row_to_track(dict(await cursor.fetchone()))
        except aiosqlite.OperationalError as e:
            if not _is_retryable(e):
                raise
            logger.warning(LogTemplates.TRANSITION_CONFLICT, transition.track_id, e)
            raise ConflictError(
                "Track", ErrorMessages.STORE_BUSY.format(track_id=transition.track_id)
            ) from e

        if demoted:
            logger.debug(LogTemplates.TRACKS_DEMOTED, demoted, transition.user_id)

        logger.debug(
            LogTemplates.TRANSITION_APPLIED,
            track.id,
            track.status.value,
            track.played_at,
            track.paused_at,
        )
        return track

    async def _update_all_where(
        self,
        conn: aiosqlite.Connection,
        *,
        user_id: int,
        statuses: frozenset[PlaybackStatus],
        exclude_id: int,
    ) -> int:
        """Stop every track of ``user_id`` in ``statuses`` except ``exclude_id``."""
        if not statuses:
            return 0

        values = sorted(status.value for status in statuses)
        cursor = await conn.execute(
            f"""
            UPDATE tracks SET status = ?
            WHERE user_id = ? AND id != ? AND status IN ({", ".join("?" * len(values))})
            """,  # noqa: S608
            (PlaybackStatus.STOPPED.value, user_id, exclude_id, *values),
        )
        return cursor.rowcount

    async def _update(
        self, conn: aiosqlite.Connection, track_id: int, columns: dict[str, Any]
    ) -> bool:
        assignments = ", ".join(f"{name} = ?" for name in columns)
        cursor = await conn.execute(
            f"UPDATE tracks SET {assignments} WHERE id = ?",  # noqa: S608
            (*(self._to_sql(value) for value in columns.values()), track_id),
        )
        return cursor.rowcount > 0

    @staticmethod
    def _to_sql(value: Any) -> Any:
        if isinstance(value, PlaybackStatus):
            return value.value
        if isinstance(value, datetime):
            return UtcDateTime(value).truncated().iso
        return value

    def _checked_row_to_track(self, row: dict) -> Track:
        """Map a row written in the open transaction, refusing inconsistent playback fields.

        Raising here rolls the transition back, so an unreadable row is never committed.
        """
        try:
            return self._row_to_track(row)
        except ValidationError as e:
            logger.error(LogTemplates.TRANSITION_REJECTED, row["id"], e)
            raise InvariantViolationError(
                "PLAYBACK_FIELDS_CONSISTENT",
                ErrorMessages.INCONSISTENT_TRANSITION.format(track_id=row["id"]),
            ) from e

    def _row_to_track(self, row: dict) -> Track:
        track_data = {
            "id": row["id"],
            "user_id": row["user_id"],
            "title": row["title"],
            "artist": row.get("artist"),
            "duration_seconds": row.get("duration_seconds") or 0,
            "mp3_filepath": row.get("mp3_filepath"),
            "status": PlaybackStatus(row["status"]),
            "played_at": _parse_timestamp(row.get("played_at")),
            "paused_at": _parse_timestamp(row.get("paused_at")),
            "inserted_at": UtcDateTime.from_iso(row["inserted_at"]).dt,
        }

        return Track.model_validate(track_data)


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return UtcDateTime.from_iso(value).dt


def _is_retryable(error: aiosqlite.OperationalError) -> bool:
    message = str(error).lower()
    return any(fragment in message for fragment in SQLErrors.RETRYABLE)
