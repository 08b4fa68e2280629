"""Date/time helpers.

Goal: centralize all date/time serialization + parsing.

- Always store and operate on timezone-aware UTC datetimes.
- Playback timestamps are persisted at whole-second resolution.

This module is intentionally dependency-free and safe to use in any layer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import UTC, datetime

from ...domain.shared.messages import ErrorMessages


@dataclass(frozen=True, slots=True)
class UtcDateTime:
    """A tiny value-object wrapper around a timezone-aware UTC `datetime`."""

    dt: datetime

    def __post_init__(self) -> None:
        if self.dt.tzinfo is None:
            raise ValueError(ErrorMessages.TIMEZONE_REQUIRED_UTC_DATETIME)
        # Normalize to UTC
        object.__setattr__(self, "dt", self.dt.astimezone(UTC))

    # ---- Constructors ----

    @classmethod
    def from_iso(cls, value: str) -> UtcDateTime:
        # Accepts: '...+00:00' or '...Z'
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        return cls(datetime.fromisoformat(value))

    # ---- Computed fields / formats ----

    @property
    def iso(self) -> str:
        """RFC3339/ISO8601 with explicit offset (+00:00)."""
        return self.dt.isoformat()

    def truncated(self) -> UtcDateTime:
        """Copy of this timestamp with sub-second precision dropped."""
        return UtcDateTime(truncate_to_second(self.dt))


def utcnow() -> datetime:
    """Preferred replacement for `datetime.now(UTC)`.

    Returns a timezone-aware datetime in UTC.
    """
    return datetime.now(UTC)


def truncate_to_second(value: datetime) -> datetime:
    return value.replace(microsecond=0)


def seconds_between(start: datetime, end: datetime) -> int:
    """Whole seconds from ``start`` to ``end``, floored like a unix-time difference."""
    return math.floor(end.timestamp()) - math.floor(start.timestamp())
