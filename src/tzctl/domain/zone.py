"""Zone resolution: decide standard, daylight or unknown for an instant.

Biases follow the platform convention ``UTC = local + bias`` (minutes), so
a zone behind UTC has a positive bias. The active bias of a local time is
``bias + standard_bias`` in standard time, ``bias + daylight_bias`` in
daylight time and plain ``bias`` when the state is unknown.

Unlike the platform, coincident standard and daylight transitions only
yield daylight time when ``daylight_bias`` is nonzero (DST all year).
A zone whose transitions coincide without a daylight bias, or whose
auto-DST setting is off, resolves to UNKNOWN with the base bias.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from tzctl.domain.bridge import to_calendar
from tzctl.domain.calendar import CalendarTime, compare, is_year_valid
from tzctl.domain.errors import (
    BiasOutOfRangeError,
    InvalidDateError,
    InvalidTransitionRuleError,
    TzError,
    YearMismatchError,
)
from tzctl.domain.ticks import Timestamp, ensure_valid, subtract_minutes
from tzctl.domain.transitions import (
    TransitionRule,
    absolute_from_relative,
    is_rule_ignored,
    is_rule_valid,
)
from tzctl.domain.types import MAX_BIAS_MINUTES, MAX_ZONE_NAME_LENGTH, ObservanceState

if TYPE_CHECKING:
    from tzctl.domain.ports import ClockSource


@dataclass(frozen=True)
class TimezoneRuleSet:
    """Bias and transition data for one zone and (usually) one year."""

    bias: int
    standard_bias: int = 0
    daylight_bias: int = 0
    standard_date: TransitionRule = TransitionRule()
    daylight_date: TransitionRule = TransitionRule()
    standard_name: str = ""
    daylight_name: str = ""

    def without_daylight_saving(self) -> TimezoneRuleSet:
        """The view a provider returns when auto-DST is switched off."""
        return replace(
            self,
            standard_bias=0,
            daylight_bias=0,
            standard_date=TransitionRule.ignored(),
            daylight_date=TransitionRule.ignored(),
            daylight_name=self.standard_name,
        )

    def active_bias(self, state: ObservanceState) -> int:
        if state is ObservanceState.STANDARD:
            return self.bias + self.standard_bias
        if state is ObservanceState.DAYLIGHT:
            return self.bias + self.daylight_bias
        return self.bias


@dataclass(frozen=True)
class ResolvedLocalTime:
    """A local time together with the rule set and state that produced it."""

    calendar_time: CalendarTime
    timestamp: Timestamp
    active_bias: int
    state: ObservanceState
    rules: TimezoneRuleSet
    rules_year: int

    @property
    def is_dst(self) -> bool:
        return self.state is ObservanceState.DAYLIGHT


def are_biases_valid(rules: TimezoneRuleSet) -> bool:
    """Every bias combination must stay within one day of UTC."""
    return all(
        -MAX_BIAS_MINUTES <= value <= MAX_BIAS_MINUTES
        for value in (
            rules.bias,
            rules.bias + rules.standard_bias,
            rules.bias + rules.daylight_bias,
        )
    )


def validate_rule_set(rules: TimezoneRuleSet) -> None:
    """Raise unless *rules* is usable, allowing ignored transitions."""
    if not are_biases_valid(rules):
        raise BiasOutOfRangeError(
            "Combined timezone bias exceeds 24 hours",
            bias=rules.bias,
            standard_bias=rules.standard_bias,
            daylight_bias=rules.daylight_bias,
        )
    for label, rule in (("standard_date", rules.standard_date), ("daylight_date", rules.daylight_date)):
        if not (is_rule_valid(rule) or is_rule_ignored(rule)):
            raise InvalidTransitionRuleError(f"Invalid {label}: {rule}", field=label, rule=rule)
    for label, name in (("standard_name", rules.standard_name), ("daylight_name", rules.daylight_name)):
        if len(name) > MAX_ZONE_NAME_LENGTH:
            raise InvalidTransitionRuleError(
                f"{label} longer than {MAX_ZONE_NAME_LENGTH} characters", field=label, name=name
            )


def _choose_state(
    rules: TimezoneRuleSet,
    if_standard: CalendarTime,
    if_daylight: CalendarTime,
    standard_start: CalendarTime,
    daylight_start: CalendarTime,
) -> ObservanceState:
    standard_before_daylight_start = compare(if_standard, daylight_start, ignore_day_of_week=True) < 0
    daylight_before_standard_start = compare(if_daylight, standard_start, ignore_day_of_week=True) < 0
    order = compare(standard_start, daylight_start, ignore_day_of_week=True)

    if order < 0:
        # Standard time runs from standard_start up to daylight_start.
        if not daylight_before_standard_start and standard_before_daylight_start:
            return ObservanceState.STANDARD
        return ObservanceState.DAYLIGHT
    if order > 0:
        # Daylight time runs from daylight_start up to standard_start.
        if not standard_before_daylight_start and daylight_before_standard_start:
            return ObservanceState.DAYLIGHT
        return ObservanceState.STANDARD

    if rules.daylight_bias:
        return ObservanceState.DAYLIGHT
    return ObservanceState.UNKNOWN


def resolve(
    rules: TimezoneRuleSet,
    utc: Timestamp,
    *,
    target_year: int | None = None,
    strict: bool = False,
) -> ResolvedLocalTime:
    """Resolve the UTC instant *utc* to local time under *rules*.

    Args:
        rules: Rule set for *target_year*.
        utc: The instant to convert.
        target_year: Civil year the rule set belongs to. Defaults to the
            UTC year of *utc*.
        strict: Fail with :class:`YearMismatchError` unless the local time
            falls in *target_year*.
    """
    ensure_valid(utc)
    if target_year is None:
        target_year = to_calendar(utc).year
    if not is_year_valid(target_year):
        raise InvalidDateError(f"Year {target_year} is out of range", year=target_year)

    validate_rule_set(rules)

    candidates = {
        ObservanceState.UNKNOWN: subtract_minutes(utc, rules.bias),
        ObservanceState.STANDARD: subtract_minutes(utc, rules.bias + rules.standard_bias),
        ObservanceState.DAYLIGHT: subtract_minutes(utc, rules.bias + rules.daylight_bias),
    }
    local = {state: to_calendar(ts) for state, ts in candidates.items()}

    if strict and all(ct.year != target_year for ct in local.values()):
        raise YearMismatchError(
            f"No local time candidate falls in {target_year}", target_year=target_year
        )

    try:
        standard_start = absolute_from_relative(rules.standard_date, target_year)
        daylight_start = absolute_from_relative(rules.daylight_date, target_year)
    except TzError:
        state = ObservanceState.UNKNOWN
    else:
        state = _choose_state(
            rules,
            local[ObservanceState.STANDARD],
            local[ObservanceState.DAYLIGHT],
            standard_start,
            daylight_start,
        )

    chosen = local[state]
    if strict and chosen.year != target_year:
        raise YearMismatchError(
            f"Local time {chosen.year} is not in {target_year}",
            target_year=target_year,
            local_year=chosen.year,
            state=str(state),
        )

    return ResolvedLocalTime(
        calendar_time=chosen,
        timestamp=candidates[state],
        active_bias=rules.active_bias(state),
        state=state,
        rules=rules,
        rules_year=target_year,
    )


def resolve_now(rules: TimezoneRuleSet, clock: ClockSource) -> ResolvedLocalTime:
    """Resolve the clock's current instant, using its UTC year for the rules."""
    return resolve(rules, clock.now())
