"""Typed payload contracts for the service boundary.

These models validate operation payload shapes before they leave the
service layer, so a renamed or missing key fails fast in tests rather
than in a renderer or a JSON consumer.
"""

from __future__ import annotations

from typing import Any, Literal, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T", bound=BaseModel)


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


StateName = Literal["standard", "daylight", "unknown"]


class CalendarTimeData(BaseModel):
    """One broken-down civil time."""

    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    millisecond: int
    day_of_week: int = Field(ge=0, le=6)
    weekday: str
    iso: str


class TransitionRuleData(BaseModel):
    """A transition rule as configured or derived."""

    kind: Literal["absolute", "relative", "ignored", "invalid"]
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int
    millisecond: int
    day_of_week: int


class RuleSetData(BaseModel):
    """A timezone rule set with its offsets pre-rendered."""

    bias: int
    standard_bias: int
    daylight_bias: int
    standard_date: TransitionRuleData
    daylight_date: TransitionRuleData
    standard_name: str
    daylight_name: str
    standard_offset: str
    daylight_offset: str


class ConvertResultData(BaseModel):
    """Payload contract for ``ConvertService.convert``."""

    utc_ticks: int
    local_ticks: int
    utc: CalendarTimeData
    local: CalendarTimeData
    timestamp: str
    state: StateName
    is_dst: bool
    active_bias: int
    offset: str
    rules_year: int
    rules: RuleSetData


class DayDateTimeData(BaseModel):
    """One rendered side of a ``TimeInfo``."""

    ticks: int
    day: str
    date: str
    time: str
    offset: str
    bias: int
    state: StateName
    is_dst: bool
    text: str


class TimeInfoResultData(BaseModel):
    """Payload contract for ``ConvertService.time_info``."""

    timestamp: str
    preferred: Literal["utc", "local"]
    current: DayDateTimeData
    utc: DayDateTimeData
    local: DayDateTimeData
    style: Literal["iso8601", "usa"]


class RulesResultData(BaseModel):
    """Payload contract for ``RulesService.rules``."""

    year: int
    observes_dst: bool
    rules: RuleSetData
    standard_start: CalendarTimeData | None = None
    daylight_start: CalendarTimeData | None = None


class DateInfoResultData(BaseModel):
    """Payload contract for ``CalendarService.date_info``."""

    date: str
    year: int
    month: int
    day: int
    leap_year: bool
    days_in_month: int
    day_of_week: int = Field(ge=0, le=6)
    weekday: str
    day_of_year: int = Field(ge=1, le=366)
    occurrence: int = Field(ge=1, le=5)
    is_last_occurrence: bool
    rule: TransitionRuleData
