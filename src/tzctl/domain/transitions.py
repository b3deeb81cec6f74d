"""Transition rules and their conversion to and from calendar dates.

A rule says when a timezone switches between standard and daylight time.
It has the same fields as a :class:`CalendarTime` but two readings:

- Absolute (``year > 0``): a specific date and time.
- Relative (``year == 0``): ``day`` is the occurrence of ``day_of_week``
  within ``month`` (1-5, where 5 means the last occurrence), so the rule
  applies to every year.

A rule whose ``month`` is 0 is ignored: the zone has no transition.
"""

from __future__ import annotations

from dataclasses import dataclass

from tzctl.domain.calendar import (
    CalendarTime,
    compare,
    day_of_week,
    is_calendar_time_valid,
    is_date_valid,
    is_year_valid,
)
from tzctl.domain.errors import (
    InvalidCalendarTimeError,
    InvalidDateError,
    InvalidTransitionRuleError,
)
from tzctl.domain.types import LAST_OCCURRENCE, RuleKind


@dataclass(frozen=True)
class TransitionRule:
    """A standard or daylight transition, absolute or relative."""

    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0
    day_of_week: int = 0

    @classmethod
    def relative(
        cls,
        month: int,
        occurrence: int,
        weekday: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
    ) -> TransitionRule:
        """The *occurrence*-th *weekday* of *month*, every year."""
        return cls(0, month, occurrence, hour, minute, second, millisecond, weekday)

    @classmethod
    def absolute(cls, ct: CalendarTime) -> TransitionRule:
        return cls(
            ct.year,
            ct.month,
            ct.day,
            ct.hour,
            ct.minute,
            ct.second,
            ct.millisecond,
            ct.day_of_week,
        )

    @classmethod
    def ignored(cls) -> TransitionRule:
        return cls()

    @property
    def occurrence(self) -> int:
        return self.day

    @property
    def kind(self) -> RuleKind:
        if is_relative_rule_valid(self):
            return RuleKind.RELATIVE
        if is_absolute_rule_valid(self):
            return RuleKind.ABSOLUTE
        if is_rule_ignored(self):
            return RuleKind.IGNORED
        return RuleKind.INVALID

    def as_calendar_time(self) -> CalendarTime:
        return CalendarTime(
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute,
            self.second,
            self.millisecond,
            self.day_of_week,
        )


def is_relative_rule_valid(rule: TransitionRule) -> bool:
    return (
        rule.year == 0
        and 1 <= rule.month <= 12
        and 0 <= rule.day_of_week <= 6
        and 1 <= rule.day <= LAST_OCCURRENCE
        and 0 <= rule.hour <= 23
        and 0 <= rule.minute <= 59
        and 0 <= rule.second <= 59
        and 0 <= rule.millisecond <= 999
    )


def is_absolute_rule_valid(rule: TransitionRule) -> bool:
    return is_calendar_time_valid(rule.as_calendar_time(), ignore_day_of_week=True)


def is_rule_valid(rule: TransitionRule) -> bool:
    return is_relative_rule_valid(rule) or is_absolute_rule_valid(rule)


def is_rule_ignored(rule: TransitionRule) -> bool:
    """The platform accepts ``month == 0`` as "no transition" and skips it."""
    return rule.month == 0


def relative_from_absolute(
    local: CalendarTime, *, prefer_last_occurrence: bool
) -> TransitionRule:
    """Express a local date as "n-th weekday of the month".

    With *prefer_last_occurrence*, a fourth occurrence that is also the
    last one in the month becomes occurrence 5 so the rule keeps meaning
    "last" in other years. No other path produces occurrence 5 except a
    day of 29 or later.
    """
    if not is_calendar_time_valid(local, ignore_day_of_week=True):
        raise InvalidCalendarTimeError(f"Invalid local time: {local}", calendar_time=local)

    occurrence = (local.day - 1) // 7 + 1
    if (
        occurrence == 4
        and not is_date_valid(local.day + 7, local.month, local.year)
        and prefer_last_occurrence
    ):
        occurrence = LAST_OCCURRENCE

    return TransitionRule.relative(
        local.month,
        occurrence,
        day_of_week(local.day, local.month, local.year),
        local.hour,
        local.minute,
        local.second,
        local.millisecond,
    )


def absolute_from_relative(rule: TransitionRule, year: int) -> CalendarTime:
    """Resolve *rule* to a calendar time in *year*.

    Absolute rules are returned as-is with the weekday recomputed; *year*
    is not consulted for them.
    """
    if not is_relative_rule_valid(rule):
        if is_absolute_rule_valid(rule):
            return rule.as_calendar_time().with_computed_weekday()
        raise InvalidTransitionRuleError(f"Invalid transition rule: {rule}", rule=rule)

    if not is_year_valid(year):
        raise InvalidDateError(f"Year {year} is out of range", year=year)

    first_weekday = day_of_week(1, rule.month, year)
    day = (rule.day_of_week - first_weekday) % 7 + 1 + (rule.occurrence - 1) * 7

    # A fifth occurrence that does not exist this year means the fourth.
    if not is_date_valid(day, rule.month, year):
        day -= 7

    return CalendarTime(
        year,
        rule.month,
        day,
        rule.hour,
        rule.minute,
        rule.second,
        rule.millisecond,
        rule.day_of_week,
    )


def compare_local_to_transition(local: CalendarTime, rule: TransitionRule) -> int:
    """Compare *local* to *rule* resolved in ``local.year``, ignoring weekdays."""
    boundary = absolute_from_relative(rule, local.year)
    return compare(local, boundary, ignore_day_of_week=True)
