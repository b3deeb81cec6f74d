"""Tests for calendar field validation and weekday arithmetic."""

from __future__ import annotations

import pytest

from tzctl.domain.calendar import (
    CalendarTime,
    compare,
    day_of_week,
    day_of_year,
    days_in_month,
    is_calendar_time_valid,
    is_date_valid,
    is_leap_year,
    is_year_valid,
)


class TestYears:
    @pytest.mark.parametrize(
        ("year", "leap"),
        [(2000, True), (1900, False), (2024, True), (2023, False), (1600, True)],
    )
    def test_leap_year(self, year: int, leap: bool) -> None:
        assert is_leap_year(year) is leap

    def test_year_range(self) -> None:
        assert is_year_valid(1601)
        assert is_year_valid(30827)
        assert not is_year_valid(1600)
        assert not is_year_valid(30828)


class TestDates:
    @pytest.mark.parametrize(
        ("month", "year", "expected"),
        [(2, 2024, 29), (2, 2023, 28), (4, 2015, 30), (12, 2015, 31)],
    )
    def test_days_in_month(self, month: int, year: int, expected: int) -> None:
        assert days_in_month(month, year) == expected

    @pytest.mark.parametrize(
        ("day", "month", "year"),
        [(29, 2, 2024), (31, 12, 30827), (1, 1, 1601), (30, 4, 2015)],
    )
    def test_valid_dates(self, day: int, month: int, year: int) -> None:
        assert is_date_valid(day, month, year)

    @pytest.mark.parametrize(
        ("day", "month", "year"),
        [(29, 2, 2023), (31, 4, 2015), (1, 1, 1600), (1, 13, 2015), (0, 1, 2015), (32, 1, 2015)],
    )
    def test_invalid_dates(self, day: int, month: int, year: int) -> None:
        assert not is_date_valid(day, month, year)


class TestWeekdays:
    @pytest.mark.parametrize(
        ("day", "month", "year", "expected"),
        [
            (1, 1, 1601, 1),
            (1, 1, 2000, 6),
            (8, 3, 2015, 0),
            (14, 3, 2017, 2),
            (29, 2, 2024, 4),
            (31, 12, 30827, 5),
        ],
    )
    def test_day_of_week(self, day: int, month: int, year: int, expected: int) -> None:
        assert day_of_week(day, month, year) == expected

    def test_month_out_of_range_gives_zero(self) -> None:
        assert day_of_week(1, 13, 2015) == 0

    def test_create_computes_weekday(self) -> None:
        assert CalendarTime.create(2017, 3, 14).day_of_week == 2

    def test_with_computed_weekday(self) -> None:
        ct = CalendarTime(2015, 3, 9, day_of_week=4)
        assert ct.with_computed_weekday().day_of_week == 1


class TestDayOfYear:
    @pytest.mark.parametrize(
        ("ct", "expected"),
        [
            (CalendarTime(2015, 1, 1), 0),
            (CalendarTime(2024, 3, 1), 60),
            (CalendarTime(2023, 3, 1), 59),
            (CalendarTime(2024, 12, 31), 365),
        ],
    )
    def test_zero_based(self, ct: CalendarTime, expected: int) -> None:
        assert day_of_year(ct) == expected


class TestCalendarTimeValidity:
    def test_valid_with_weekday(self) -> None:
        assert is_calendar_time_valid(CalendarTime.create(2015, 3, 9, 23, 59, 59, 999))

    def test_wrong_weekday(self) -> None:
        ct = CalendarTime(2015, 3, 9)
        assert not is_calendar_time_valid(ct)
        assert is_calendar_time_valid(ct, ignore_day_of_week=True)

    @pytest.mark.parametrize(
        "ct",
        [
            CalendarTime(2015, 3, 9, hour=24),
            CalendarTime(2015, 3, 9, minute=60),
            CalendarTime(2015, 3, 9, second=60),
            CalendarTime(2015, 3, 9, millisecond=1000),
            CalendarTime(2023, 2, 29),
        ],
    )
    def test_out_of_range_fields(self, ct: CalendarTime) -> None:
        assert not is_calendar_time_valid(ct, ignore_day_of_week=True)


class TestCompare:
    def test_ordering(self) -> None:
        early = CalendarTime(2015, 3, 8, 1, 59)
        late = CalendarTime(2015, 3, 8, 2, 0)
        assert compare(early, late) == -1
        assert compare(late, early) == 1
        assert compare(early, early) == 0

    def test_milliseconds_count(self) -> None:
        assert compare(CalendarTime(2015, 1, 1, millisecond=1), CalendarTime(2015, 1, 1)) == 1

    def test_weekday_is_compared_unless_ignored(self) -> None:
        a = CalendarTime(2015, 3, 8, day_of_week=0)
        b = CalendarTime(2015, 3, 8, day_of_week=3)
        assert compare(a, b) == -1
        assert compare(a, b, ignore_day_of_week=True) == 0
