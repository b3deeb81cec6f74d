"""Payload builders shared by the services.

Each returns a plain dict shaped for the matching model in
:mod:`tzctl.services.contracts`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from tzctl.domain.display import day_name, format_date, format_offset, format_time
from tzctl.domain.types import TimeStyle

if TYPE_CHECKING:
    from tzctl.domain.calendar import CalendarTime
    from tzctl.domain.display import DayDateTime
    from tzctl.domain.transitions import TransitionRule
    from tzctl.domain.zone import TimezoneRuleSet


def calendar_payload(ct: CalendarTime) -> dict[str, Any]:
    """Fields of *ct* plus its ISO text and weekday name."""
    return {
        "year": ct.year,
        "month": ct.month,
        "day": ct.day,
        "hour": ct.hour,
        "minute": ct.minute,
        "second": ct.second,
        "millisecond": ct.millisecond,
        "day_of_week": ct.day_of_week,
        "weekday": day_name(ct.day_of_week),
        "iso": f"{format_date(ct)}T{format_time(ct, with_milliseconds=True)}",
    }


def rule_payload(rule: TransitionRule) -> dict[str, Any]:
    return {
        "kind": str(rule.kind),
        "year": rule.year,
        "month": rule.month,
        "day": rule.day,
        "hour": rule.hour,
        "minute": rule.minute,
        "second": rule.second,
        "millisecond": rule.millisecond,
        "day_of_week": rule.day_of_week,
    }


def rule_set_payload(rules: TimezoneRuleSet) -> dict[str, Any]:
    return {
        "bias": rules.bias,
        "standard_bias": rules.standard_bias,
        "daylight_bias": rules.daylight_bias,
        "standard_date": rule_payload(rules.standard_date),
        "daylight_date": rule_payload(rules.daylight_date),
        "standard_name": rules.standard_name,
        "daylight_name": rules.daylight_name,
        "standard_offset": format_offset(rules.bias + rules.standard_bias, TimeStyle.ISO8601),
        "daylight_offset": format_offset(rules.bias + rules.daylight_bias, TimeStyle.ISO8601),
    }


def day_date_time_payload(ddt: DayDateTime) -> dict[str, Any]:
    return {
        "ticks": ddt.timestamp.ticks,
        "day": ddt.day,
        "date": ddt.date,
        "time": ddt.time,
        "offset": ddt.offset,
        "bias": ddt.bias,
        "state": str(ddt.state),
        "is_dst": ddt.is_dst,
        "text": str(ddt),
    }
