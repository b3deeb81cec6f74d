"""Rendering of resolved instants as English day names and date strings.

Two styles are supported. ISO 8601 gives ``Sunday 2013-08-11 14:46:00
-04:00`` and USA gives ``Sunday 8/11/2013 2:46:00 PM (UTC-04:00)``. The
UTC timestamp string is always ISO 8601 with milliseconds, whatever the
style.

Formatting options are plain immutable values passed with each call.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from time import struct_time

from tzctl.domain.bridge import to_calendar, to_struct_time
from tzctl.domain.calendar import CalendarTime
from tzctl.domain.ticks import Timestamp, subtract_minutes
from tzctl.domain.types import ObservanceState, Preference, TimeStyle, Weekday
from tzctl.domain.zone import ResolvedLocalTime

# Uniform Time Act, the first year daylight time applied across the USA.
DEFAULT_DST_START_YEAR = 1967


@dataclass(frozen=True)
class TimeFormat:
    """How dates and times are rendered."""

    style: TimeStyle = TimeStyle.ISO8601
    abbreviate_day: bool = False
    with_milliseconds: bool = False


@dataclass(frozen=True)
class ConversionOptions:
    """When daylight time may be applied to a local time.

    Daylight time is used only if the resolver chose it, the local year is
    at least ``dst_start_year`` and ``ignore_dst`` is off. Otherwise the
    standard bias is applied.
    """

    dst_start_year: int = DEFAULT_DST_START_YEAR
    ignore_dst: bool = False


def day_name(day_of_week: int, *, abbreviated: bool = False) -> str:
    """English name of a weekday (0 = Sunday); empty for anything else."""
    if not 0 <= day_of_week <= 6:
        return ""
    name = Weekday.from_index(day_of_week).value
    return name[:3] if abbreviated else name


def format_date(ct: CalendarTime, style: TimeStyle = TimeStyle.ISO8601) -> str:
    if style is TimeStyle.USA:
        return f"{ct.month}/{ct.day}/{ct.year}"
    prefix = "+" if ct.year > 9999 else ""
    return f"{prefix}{ct.year:04d}-{ct.month:02d}-{ct.day:02d}"


def format_time(
    ct: CalendarTime,
    style: TimeStyle = TimeStyle.ISO8601,
    *,
    with_milliseconds: bool = False,
) -> str:
    millis = f".{ct.millisecond:03d}" if with_milliseconds else ""
    if style is TimeStyle.USA:
        hour = ct.hour % 12 or 12
        meridiem = "AM" if ct.hour < 12 else "PM"
        return f"{hour}:{ct.minute:02d}:{ct.second:02d}{millis} {meridiem}"
    return f"{ct.hour:02d}:{ct.minute:02d}:{ct.second:02d}{millis}"


def format_offset(bias: int, style: TimeStyle = TimeStyle.ISO8601) -> str:
    """UTC offset for *bias*; the sign is the negation of the bias."""
    if bias == 0:
        return "(UTC)" if style is TimeStyle.USA else "Z"
    sign = "-" if bias > 0 else "+"
    hours, minutes = divmod(abs(bias), 60)
    offset = f"{sign}{hours:02d}:{minutes:02d}"
    return f"(UTC{offset})" if style is TimeStyle.USA else offset


def format_utc_timestamp(utc: CalendarTime) -> str:
    """``2013-08-11T18:46:00.085Z``, always with milliseconds."""
    date = format_date(utc, TimeStyle.ISO8601)
    clock = format_time(utc, TimeStyle.ISO8601, with_milliseconds=True)
    return f"{date}T{clock}Z"


@dataclass(frozen=True)
class DayDateTime:
    """One rendered instant, UTC or local."""

    timestamp: Timestamp
    calendar_time: CalendarTime
    bias: int
    state: ObservanceState
    day: str
    date: str
    time: str
    offset: str
    format: TimeFormat = field(default_factory=TimeFormat)

    @classmethod
    def render(
        cls,
        timestamp: Timestamp,
        bias: int,
        state: ObservanceState,
        fmt: TimeFormat,
    ) -> DayDateTime:
        ct = to_calendar(timestamp)
        return cls(
            timestamp=timestamp,
            calendar_time=ct,
            bias=bias,
            state=state,
            day=day_name(ct.day_of_week, abbreviated=fmt.abbreviate_day),
            date=format_date(ct, fmt.style),
            time=format_time(ct, fmt.style, with_milliseconds=fmt.with_milliseconds),
            offset=format_offset(bias, fmt.style),
            format=fmt,
        )

    @property
    def is_dst(self) -> bool:
        return self.state is ObservanceState.DAYLIGHT

    def as_struct_time(self) -> struct_time:
        return to_struct_time(self.calendar_time, is_dst=self.is_dst)

    def __str__(self) -> str:
        return f"{self.day} {self.date} {self.time} {self.offset}"


def utc_day_date_time(utc: Timestamp, fmt: TimeFormat) -> DayDateTime:
    return DayDateTime.render(utc, 0, ObservanceState.UNKNOWN, fmt)


def local_day_date_time(
    utc: Timestamp,
    resolved: ResolvedLocalTime,
    fmt: TimeFormat,
    options: ConversionOptions | None = None,
) -> DayDateTime:
    """Render *resolved* after applying *options* to a daylight result."""
    options = options or ConversionOptions()
    state, bias = resolved.state, resolved.active_bias
    if state is ObservanceState.DAYLIGHT and (
        options.ignore_dst or resolved.calendar_time.year < options.dst_start_year
    ):
        state = ObservanceState.STANDARD
        bias = resolved.rules.active_bias(state)
    return DayDateTime.render(subtract_minutes(utc, bias), bias, state, fmt)


@dataclass(frozen=True)
class TimeInfo:
    """UTC and local renderings of one instant plus a preferred side."""

    utc: DayDateTime
    local: DayDateTime
    preferred: Preference = Preference.LOCAL
    timestamp: str = ""

    def current(self) -> DayDateTime:
        return self.local if self.preferred is Preference.LOCAL else self.utc

    def prefer(self, preferred: Preference) -> TimeInfo:
        return replace(self, preferred=preferred)


def build_time_info(
    utc: Timestamp,
    resolved: ResolvedLocalTime,
    fmt: TimeFormat,
    *,
    options: ConversionOptions | None = None,
    preferred: Preference = Preference.LOCAL,
) -> TimeInfo:
    utc_side = utc_day_date_time(utc, fmt)
    return TimeInfo(
        utc=utc_side,
        local=local_day_date_time(utc, resolved, fmt, options),
        preferred=preferred,
        timestamp=format_utc_timestamp(utc_side.calendar_time),
    )
