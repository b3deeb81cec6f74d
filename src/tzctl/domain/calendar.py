"""Calendar field validation and weekday arithmetic.

Proleptic Gregorian calendar over the years 1601 through 30827. Weekdays
are numbered 0 (Sunday) through 6 (Saturday).
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from tzctl.domain.types import MAX_YEAR, MIN_YEAR

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
_CUMULATIVE_DAYS = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)

# Sakamoto month offsets.
_WEEKDAY_OFFSETS = (0, 3, 2, 5, 0, 3, 5, 1, 4, 6, 2, 4)


@dataclass(frozen=True)
class CalendarTime:
    """Broken-down civil time, UTC or local.

    ``day_of_week`` may be left unset (0) by code that derives it later;
    use :func:`is_calendar_time_valid` with ``ignore_day_of_week=True`` for
    such values.
    """

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0
    day_of_week: int = 0

    @classmethod
    def create(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
    ) -> CalendarTime:
        """Build a calendar time with the weekday computed from the date."""
        return cls(
            year, month, day, hour, minute, second, millisecond, day_of_week(day, month, year)
        )

    def with_computed_weekday(self) -> CalendarTime:
        return replace(self, day_of_week=day_of_week(self.day, self.month, self.year))

    def fields(self, *, ignore_day_of_week: bool = False) -> tuple[int, ...]:
        base = (
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute,
            self.second,
            self.millisecond,
        )
        return base if ignore_day_of_week else (*base, self.day_of_week)


def is_year_valid(year: int) -> bool:
    """Check whether *year* is within the supported range."""
    return MIN_YEAR <= year <= MAX_YEAR


def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule. No range check."""
    if year % 400 == 0:
        return True
    if year % 100 == 0:
        return False
    return year % 4 == 0


def days_in_month(month: int, year: int) -> int:
    """Number of days in *month* of *year*. *month* must be in ``[1, 12]``."""
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def is_date_valid(day: int, month: int, year: int) -> bool:
    """Check that the date exists, including the February 29 leap exception."""
    if not is_year_valid(year) or not 1 <= month <= 12 or not 1 <= day <= 31:
        return False
    return day <= days_in_month(month, year)


def day_of_week(day: int, month: int, year: int) -> int:
    """Weekday of a date, 0 = Sunday.

    Only meaningful for months 1-12; any other month returns 0.
    """
    if not 1 <= month <= 12:
        return 0
    y = year - (1 if month < 3 else 0)
    return (y + y // 4 - y // 100 + y // 400 + _WEEKDAY_OFFSETS[month - 1] + day) % 7


def day_of_year(ct: CalendarTime) -> int:
    """Zero-based day of the year of *ct*."""
    yday = _CUMULATIVE_DAYS[ct.month - 1] + ct.day - 1
    if ct.month > 2 and is_leap_year(ct.year):
        yday += 1
    return yday


def is_calendar_time_valid(ct: CalendarTime, *, ignore_day_of_week: bool = False) -> bool:
    """Check every field of *ct*; the weekday too unless told to ignore it."""
    valid = (
        is_date_valid(ct.day, ct.month, ct.year)
        and 0 <= ct.hour <= 23
        and 0 <= ct.minute <= 59
        and 0 <= ct.second <= 59
        and 0 <= ct.millisecond <= 999
    )
    if not valid or ignore_day_of_week:
        return valid
    return ct.day_of_week == day_of_week(ct.day, ct.month, ct.year)


def compare(a: CalendarTime, b: CalendarTime, *, ignore_day_of_week: bool = False) -> int:
    """Lexicographic comparison. Returns -1, 0 or 1."""
    left = a.fields(ignore_day_of_week=ignore_day_of_week)
    right = b.fields(ignore_day_of_week=ignore_day_of_week)
    if left < right:
        return -1
    if left > right:
        return 1
    return 0
