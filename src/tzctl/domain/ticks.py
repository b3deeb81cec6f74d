"""Tick arithmetic on the 100 ns reference clock.

A :class:`Timestamp` may hold any integer, but only values inside
``[0, MAX_TICKS]`` are valid and every operation on an invalid value
fails. Arithmetic is checked against signed 64-bit wrap-around before the
range is checked, so callers can tell ``OVERFLOW`` from
``INVALID_TIMESTAMP``.
"""

from __future__ import annotations

from dataclasses import dataclass

from tzctl.domain.errors import InvalidTimestampError, TickOverflowError
from tzctl.domain.types import INT64_MAX, INT64_MIN, MAX_TICKS, TICKS_PER_MINUTE


@dataclass(frozen=True, order=True)
class Timestamp:
    """An instant on the reference clock, in ticks since 1601-01-01."""

    ticks: int

    @property
    def is_valid(self) -> bool:
        return is_valid(self)


def is_valid(ts: Timestamp) -> bool:
    """Check whether *ts* lies within the supported tick range."""
    return 0 <= ts.ticks <= MAX_TICKS


def ensure_valid(ts: Timestamp) -> Timestamp:
    """Return *ts* unchanged or raise :class:`InvalidTimestampError`."""
    if not is_valid(ts):
        raise InvalidTimestampError(
            f"Timestamp {ts.ticks} is outside [0, {MAX_TICKS}]", ticks=ts.ticks
        )
    return ts


def _in_int64(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX


def subtract_ticks(ts: Timestamp, n: int) -> Timestamp:
    """Subtract *n* ticks from *ts*, checking the range before and after."""
    ensure_valid(ts)
    if not _in_int64(n):
        raise TickOverflowError(f"Tick amount {n} does not fit in 64 bits", amount=n)
    if n == 0:
        return ts
    result = ts.ticks - n
    if not _in_int64(result):
        raise TickOverflowError(
            f"Subtracting {n} ticks from {ts.ticks} overflows", ticks=ts.ticks, amount=n
        )
    return ensure_valid(Timestamp(result))


def add_ticks(ts: Timestamp, n: int) -> Timestamp:
    """Add *n* ticks to *ts*, checking the range before and after."""
    # Negating INT64_MIN wraps, so it can never be turned into a subtraction.
    if not _in_int64(n) or n == INT64_MIN:
        raise TickOverflowError(f"Tick amount {n} cannot be negated in 64 bits", amount=n)
    return subtract_ticks(ts, -n)


def _minutes_to_ticks(minutes: int) -> int:
    n = minutes * TICKS_PER_MINUTE
    if not _in_int64(n):
        raise TickOverflowError(
            f"{minutes} minutes does not fit in a 64-bit tick count", minutes=minutes
        )
    return n


def subtract_minutes(ts: Timestamp, minutes: int) -> Timestamp:
    """Subtract whole minutes from *ts*."""
    return subtract_ticks(ts, _minutes_to_ticks(minutes))


def add_minutes(ts: Timestamp, minutes: int) -> Timestamp:
    """Add whole minutes to *ts*."""
    return add_ticks(ts, _minutes_to_ticks(minutes))
