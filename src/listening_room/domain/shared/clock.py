"""Time source used by every playback transition."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from .datetime_utils import utcnow


class Clock(ABC):
    """Supplies the current time as a timezone-aware UTC datetime."""

    @abstractmethod
    def now(self) -> datetime: ...


class SystemClock(Clock):
    def now(self) -> datetime:
        return utcnow()
