"""Date inspection: calendar facts and the relative rule for a date."""

from __future__ import annotations

from tzctl.domain.calendar import (
    CalendarTime,
    day_of_year,
    days_in_month,
    is_date_valid,
    is_leap_year,
)
from tzctl.domain.display import day_name, format_date
from tzctl.domain.errors import InvalidDateError, TzError
from tzctl.domain.transitions import relative_from_absolute
from tzctl.services._helpers import rule_payload
from tzctl.services.base import BaseService
from tzctl.services.contracts import DateInfoResultData, dump_validated
from tzctl.services.result import ServiceResult


class CalendarService(BaseService):
    """Calendar facts about a single date."""

    def date_info(self, year: int, month: int, day: int) -> ServiceResult:
        """Weekday, leap year, day of year, and "n-th weekday" rule for a date."""
        try:
            if not is_date_valid(day, month, year):
                raise InvalidDateError(
                    f"{year:04d}-{month:02d}-{day:02d} is not a valid date",
                    year=year,
                    month=month,
                    day=day,
                )
            ct = CalendarTime.create(year, month, day)
            rule = relative_from_absolute(ct, prefer_last_occurrence=True)
        except TzError as exc:
            return self._failure("date_info", exc)

        data = {
            "date": format_date(ct),
            "year": year,
            "month": month,
            "day": day,
            "leap_year": is_leap_year(year),
            "days_in_month": days_in_month(month, year),
            "day_of_week": ct.day_of_week,
            "weekday": day_name(ct.day_of_week),
            "day_of_year": day_of_year(ct) + 1,
            "occurrence": rule.occurrence,
            "is_last_occurrence": day + 7 > days_in_month(month, year),
            "rule": rule_payload(rule),
        }
        return ServiceResult(
            ok=True,
            op="date_info",
            data=dump_validated(DateInfoResultData, data),
        )
