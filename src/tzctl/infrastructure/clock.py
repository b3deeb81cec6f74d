"""Clock sources for the current UTC instant."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from tzctl.domain.bridge import from_datetime
from tzctl.domain.ticks import Timestamp, ensure_valid


class SystemClock:
    """Reads the host clock."""

    def now(self) -> Timestamp:
        return from_datetime(datetime.now(UTC))


@dataclass(frozen=True)
class FixedClock:
    """Always returns the same instant. Used for reproducible runs and tests."""

    ticks: int

    def __post_init__(self) -> None:
        ensure_valid(Timestamp(self.ticks))

    def now(self) -> Timestamp:
        return Timestamp(self.ticks)
