"""Centralized constants for database schema, pub/sub topics, and other shared values."""

from __future__ import annotations


class DatabaseTables:
    """Database table names."""

    TRACKS = "tracks"


class SQLPragmas:
    """SQLite PRAGMA statements for database configuration.

    These pragmas are applied to each connection to ensure consistent behavior.
    """

    JOURNAL_MODE_WAL = "PRAGMA journal_mode=WAL"
    FOREIGN_KEYS_ON = "PRAGMA foreign_keys=ON"
    BUSY_TIMEOUT = "PRAGMA busy_timeout={timeout}"
    TABLE_INFO = "PRAGMA table_info({table})"


class SQLErrors:
    """Fragments of SQLite error messages that mean "try again later"."""

    RETRYABLE = ("database is locked", "database table is locked", "database is busy")


class Topics:
    """Pub/sub topic naming."""

    ROOM_PREFIX = "room:"

    @classmethod
    def room(cls, user_id: int) -> str:
        return f"{cls.ROOM_PREFIX}{user_id}"
