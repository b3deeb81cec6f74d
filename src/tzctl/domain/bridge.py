"""Two-way conversion between tick counts and calendar times.

Conversion is integer day arithmetic (days-from-civil), so it covers the
whole supported range rather than stopping at ``datetime.MAXYEAR``.
Sub-millisecond ticks are truncated on the way to a calendar time.
"""

from __future__ import annotations

import math
import time
from datetime import datetime, timedelta

from tzctl.domain.calendar import (
    CalendarTime,
    day_of_year,
    is_calendar_time_valid,
)
from tzctl.domain.errors import InvalidCalendarTimeError, InvalidTimestampError
from tzctl.domain.ticks import Timestamp, add_minutes, ensure_valid, subtract_minutes
from tzctl.domain.types import (
    TICKS_PER_DAY,
    TICKS_PER_MICROSECOND,
    TICKS_PER_MILLISECOND,
    TICKS_PER_MINUTE,
    TICKS_PER_SECOND,
    UNIX_EPOCH_TICKS,
)

# Days from 1970-01-01 back to the 1601-01-01 tick epoch.
_EPOCH_DAY_OFFSET = -(UNIX_EPOCH_TICKS // TICKS_PER_DAY)


def _days_from_civil(year: int, month: int, day: int) -> int:
    """Days since 1970-01-01 for a proleptic Gregorian date."""
    y = year - (1 if month <= 2 else 0)
    era = y // 400
    yoe = y - era * 400
    doy = (153 * (month + (-3 if month > 2 else 9)) + 2) // 5 + day - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * 146097 + doe - 719468


def _civil_from_days(days: int) -> tuple[int, int, int]:
    """Inverse of :func:`_days_from_civil`."""
    z = days + 719468
    era = z // 146097
    doe = z - era * 146097
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)
    return year, month, day


def to_calendar(ts: Timestamp) -> CalendarTime:
    """Break a valid timestamp into a strict-valid calendar time."""
    ensure_valid(ts)
    days, rem = divmod(ts.ticks, TICKS_PER_DAY)
    year, month, day = _civil_from_days(days + _EPOCH_DAY_OFFSET)
    hour, rem = divmod(rem, 60 * TICKS_PER_MINUTE)
    minute, rem = divmod(rem, TICKS_PER_MINUTE)
    second, rem = divmod(rem, TICKS_PER_SECOND)
    return CalendarTime.create(year, month, day, hour, minute, second, rem // TICKS_PER_MILLISECOND)


def from_calendar(ct: CalendarTime) -> Timestamp:
    """Convert a calendar time to ticks. The weekday is not consulted."""
    if not is_calendar_time_valid(ct, ignore_day_of_week=True):
        raise InvalidCalendarTimeError(f"Invalid calendar time: {ct}", calendar_time=ct)
    days = _days_from_civil(ct.year, ct.month, ct.day) - _EPOCH_DAY_OFFSET
    ticks = (
        days * TICKS_PER_DAY
        + ct.hour * 60 * TICKS_PER_MINUTE
        + ct.minute * TICKS_PER_MINUTE
        + ct.second * TICKS_PER_SECOND
        + ct.millisecond * TICKS_PER_MILLISECOND
    )
    return ensure_valid(Timestamp(ticks))


def _ensure_strict(ct: CalendarTime) -> None:
    if not is_calendar_time_valid(ct):
        raise InvalidCalendarTimeError(f"Invalid calendar time: {ct}", calendar_time=ct)


def add_minutes_to_calendar(ct: CalendarTime, minutes: int) -> CalendarTime:
    """Shift a strict-valid calendar time forward by *minutes*."""
    _ensure_strict(ct)
    return to_calendar(add_minutes(from_calendar(ct), minutes))


def subtract_minutes_from_calendar(ct: CalendarTime, minutes: int) -> CalendarTime:
    """Shift a strict-valid calendar time back by *minutes*."""
    _ensure_strict(ct)
    return to_calendar(subtract_minutes(from_calendar(ct), minutes))


def to_struct_time(ct: CalendarTime, *, is_dst: bool) -> time.struct_time:
    """Convert a strict-valid calendar time to a ``time.struct_time``.

    Milliseconds are dropped. ``tm_wday`` follows Python (0 = Monday) and
    ``tm_yday`` is 1-based.
    """
    _ensure_strict(ct)
    return time.struct_time(
        (
            ct.year,
            ct.month,
            ct.day,
            ct.hour,
            ct.minute,
            ct.second,
            (ct.day_of_week - 1) % 7,
            day_of_year(ct) + 1,
            1 if is_dst else 0,
        )
    )


def from_datetime(dt: datetime) -> Timestamp:
    """Timestamp of a ``datetime``. Naive values are taken as UTC.

    The UTC offset is applied in ticks rather than through
    ``astimezone``, so instants whose UTC date falls outside
    ``datetime``'s own year range still convert or fail as
    :class:`InvalidTimestampError`.
    """
    offset = dt.utcoffset() or timedelta(0)
    days = _days_from_civil(dt.year, dt.month, dt.day) - _EPOCH_DAY_OFFSET
    ticks = (
        days * TICKS_PER_DAY
        + dt.hour * 60 * TICKS_PER_MINUTE
        + dt.minute * TICKS_PER_MINUTE
        + dt.second * TICKS_PER_SECOND
        + dt.microsecond * TICKS_PER_MICROSECOND
        - (offset // timedelta(microseconds=1)) * TICKS_PER_MICROSECOND
    )
    return ensure_valid(Timestamp(ticks))


def to_datetime(ct: CalendarTime) -> datetime:
    """Naive ``datetime`` for *ct*; only years up to 9999 are representable."""
    return datetime(
        ct.year, ct.month, ct.day, ct.hour, ct.minute, ct.second, ct.millisecond * 1000
    )


def from_unix_seconds(seconds: float) -> Timestamp:
    """Timestamp of a POSIX time in seconds."""
    scaled = seconds * TICKS_PER_SECOND
    if not math.isfinite(scaled):
        raise InvalidTimestampError(
            f"Unix time {seconds} is not a finite tick count", seconds=seconds
        )
    return ensure_valid(Timestamp(UNIX_EPOCH_TICKS + round(scaled)))
