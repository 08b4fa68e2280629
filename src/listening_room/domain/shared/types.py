"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across the package is defined here once,
so models can simply annotate their fields::

    from listening_room.domain.shared.types import NonEmptyStr, UserIdInt

    class MyModel(BaseModel):
        user_id: UserIdInt
        name: NonEmptyStr
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated

from pydantic import BeforeValidator, Field

from .messages import ErrorMessages

# ── Numeric constraints ─────────────────────────────────────────────

NonNegativeInt = Annotated[int, Field(ge=0)]
"""Integer >= 0."""

PositiveInt = Annotated[int, Field(gt=0)]
"""Integer > 0."""

TrackIdInt = PositiveInt
"""Primary key of a track row."""

UserIdInt = PositiveInt
"""Identifier of the user owning a track."""

DurationSeconds = Annotated[int, Field(ge=0, le=86_400)]
"""Track duration in seconds: 0 … 86 400 (24 hours)."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

TrackTitleStr = Annotated[str, Field(min_length=1, max_length=500)]
"""Track title: 1-500 characters."""


# ── Datetime constraints ────────────────────────────────────────────

def _ensure_utc(v: datetime) -> datetime:
    """Validate that a datetime is timezone-aware and normalise to UTC."""
    if v.tzinfo is None:
        raise ValueError(ErrorMessages.TIMEZONE_REQUIRED)
    return v.astimezone(UTC)


def _ensure_utc_seconds(v: datetime | None) -> datetime | None:
    if v is None:
        return None
    return _ensure_utc(v).replace(microsecond=0)


UtcDatetimeField = Annotated[datetime, BeforeValidator(_ensure_utc)]
"""Timezone-aware datetime, normalised to UTC on input."""

PlaybackTimestamp = Annotated[datetime | None, BeforeValidator(_ensure_utc_seconds)]
"""Optional UTC datetime truncated to whole seconds."""

PlaybackInstant = Annotated[datetime, BeforeValidator(_ensure_utc_seconds)]
"""Required UTC datetime truncated to whole seconds."""
