"""Tests for zone resolution."""

from __future__ import annotations

from dataclasses import replace

import pytest

from tzctl.domain.calendar import CalendarTime
from tzctl.domain.errors import (
    BiasOutOfRangeError,
    InvalidDateError,
    InvalidTimestampError,
    InvalidTransitionRuleError,
    YearMismatchError,
)
from tzctl.domain.ticks import Timestamp
from tzctl.domain.transitions import TransitionRule
from tzctl.domain.types import ObservanceState
from tzctl.domain.zone import (
    TimezoneRuleSet,
    are_biases_valid,
    resolve,
    resolve_now,
    validate_rule_set,
)
from tzctl.infrastructure.clock import FixedClock


class TestRuleSet:
    def test_active_bias(self, us_eastern: TimezoneRuleSet) -> None:
        assert us_eastern.active_bias(ObservanceState.STANDARD) == 300
        assert us_eastern.active_bias(ObservanceState.DAYLIGHT) == 240
        assert us_eastern.active_bias(ObservanceState.UNKNOWN) == 300

    def test_without_daylight_saving(self, us_eastern: TimezoneRuleSet) -> None:
        plain = us_eastern.without_daylight_saving()
        assert plain.bias == 300
        assert plain.daylight_bias == 0
        assert plain.standard_date == TransitionRule.ignored()
        assert plain.daylight_date == TransitionRule.ignored()
        assert plain.daylight_name == "Eastern Standard Time"


class TestValidation:
    @pytest.mark.parametrize(
        ("bias", "daylight_bias", "valid"),
        [(1440, 0, True), (-1440, 0, True), (1441, 0, False), (1400, 60, False), (-1400, -60, False)],
    )
    def test_bias_bounds(self, bias: int, daylight_bias: int, valid: bool) -> None:
        assert are_biases_valid(TimezoneRuleSet(bias=bias, daylight_bias=daylight_bias)) is valid

    def test_bias_out_of_range_raises(self) -> None:
        with pytest.raises(BiasOutOfRangeError) as exc_info:
            validate_rule_set(TimezoneRuleSet(bias=1441))
        assert exc_info.value.state is ObservanceState.INVALID

    def test_invalid_rule(self, us_eastern: TimezoneRuleSet) -> None:
        broken = replace(us_eastern, daylight_date=TransitionRule.relative(3, 6, 0, 2))
        with pytest.raises(InvalidTransitionRuleError) as exc_info:
            validate_rule_set(broken)
        assert exc_info.value.detail["field"] == "daylight_date"

    def test_ignored_rules_are_accepted(self) -> None:
        validate_rule_set(TimezoneRuleSet(bias=0))

    def test_name_too_long(self, us_eastern: TimezoneRuleSet) -> None:
        with pytest.raises(InvalidTransitionRuleError):
            validate_rule_set(replace(us_eastern, standard_name="x" * 32))

    def test_name_at_limit(self, us_eastern: TimezoneRuleSet) -> None:
        validate_rule_set(replace(us_eastern, standard_name="x" * 31))


class TestNorthernHemisphere:
    def test_just_before_spring_forward(self, us_eastern, utc_at) -> None:
        resolved = resolve(us_eastern, utc_at(2015, 3, 8, 6, 59))
        assert resolved.state is ObservanceState.STANDARD
        assert resolved.calendar_time == CalendarTime.create(2015, 3, 8, 1, 59)
        assert resolved.active_bias == 300
        assert not resolved.is_dst

    def test_at_spring_forward(self, us_eastern, utc_at) -> None:
        resolved = resolve(us_eastern, utc_at(2015, 3, 8, 7, 0))
        assert resolved.state is ObservanceState.DAYLIGHT
        assert resolved.calendar_time == CalendarTime.create(2015, 3, 8, 3, 0)
        assert resolved.active_bias == 240
        assert resolved.is_dst

    def test_just_before_fall_back(self, us_eastern, utc_at) -> None:
        resolved = resolve(us_eastern, utc_at(2015, 11, 1, 5, 59))
        assert resolved.state is ObservanceState.DAYLIGHT
        assert resolved.calendar_time == CalendarTime.create(2015, 11, 1, 1, 59)

    def test_at_fall_back(self, us_eastern, utc_at) -> None:
        resolved = resolve(us_eastern, utc_at(2015, 11, 1, 6, 0))
        assert resolved.state is ObservanceState.STANDARD
        assert resolved.calendar_time == CalendarTime.create(2015, 11, 1, 1, 0)

    def test_local_timestamp(self, us_eastern, utc_at) -> None:
        resolved = resolve(us_eastern, utc_at(2015, 7, 1, 16, 0))
        assert resolved.timestamp == utc_at(2015, 7, 1, 12, 0)
        assert resolved.rules is us_eastern
        assert resolved.rules_year == 2015


class TestSouthernHemisphere:
    def test_january_is_daylight(self, sydney, utc_at) -> None:
        resolved = resolve(sydney, utc_at(2015, 1, 15))
        assert resolved.state is ObservanceState.DAYLIGHT
        assert resolved.calendar_time == CalendarTime.create(2015, 1, 15, 11)

    def test_july_is_standard(self, sydney, utc_at) -> None:
        resolved = resolve(sydney, utc_at(2015, 7, 1))
        assert resolved.state is ObservanceState.STANDARD
        assert resolved.calendar_time == CalendarTime.create(2015, 7, 1, 10)


class TestYearBoundaries:
    def test_strict_rejects_when_no_candidate_in_year(self, central_europe, utc_at) -> None:
        with pytest.raises(YearMismatchError) as exc_info:
            resolve(central_europe, utc_at(2014, 12, 31, 23, 30), target_year=2014, strict=True)
        assert "local_year" not in exc_info.value.detail

    def test_next_year_rules_accept(self, central_europe, utc_at) -> None:
        resolved = resolve(central_europe, utc_at(2014, 12, 31, 23, 30), target_year=2015)
        assert resolved.state is ObservanceState.STANDARD
        assert resolved.calendar_time == CalendarTime.create(2015, 1, 1, 0, 30)
        assert resolved.rules_year == 2015

    def test_strict_rejects_chosen_candidate_outside_year(self, us_eastern, utc_at) -> None:
        with pytest.raises(YearMismatchError) as exc_info:
            resolve(us_eastern, utc_at(2015, 1, 1, 4, 30), target_year=2015, strict=True)
        assert exc_info.value.detail["local_year"] == 2014
        assert exc_info.value.detail["state"] == "standard"

    def test_non_strict_keeps_other_year(self, us_eastern, utc_at) -> None:
        resolved = resolve(us_eastern, utc_at(2015, 1, 1, 4, 30), target_year=2015)
        assert resolved.calendar_time.year == 2014

    def test_target_year_out_of_range(self, us_eastern, utc_at) -> None:
        with pytest.raises(InvalidDateError):
            resolve(us_eastern, utc_at(2015, 6, 1), target_year=1600)


class TestSpecialStates:
    def test_coincident_transitions_without_daylight_bias(self, utc_at) -> None:
        rule = TransitionRule.relative(3, 2, 0, 2)
        rules = TimezoneRuleSet(bias=-120, standard_date=rule, daylight_date=rule)
        resolved = resolve(rules, utc_at(2015, 6, 1))
        assert resolved.state is ObservanceState.UNKNOWN
        assert resolved.active_bias == -120

    def test_coincident_transitions_with_daylight_bias(self, utc_at) -> None:
        rule = TransitionRule.relative(1, 1, 0)
        rules = TimezoneRuleSet(bias=180, daylight_bias=-60, standard_date=rule, daylight_date=rule)
        resolved = resolve(rules, utc_at(2015, 6, 1, 12))
        assert resolved.state is ObservanceState.DAYLIGHT
        assert resolved.calendar_time == CalendarTime.create(2015, 6, 1, 10)

    def test_ignored_rules_give_unknown(self, us_eastern, utc_at) -> None:
        resolved = resolve(us_eastern.without_daylight_saving(), utc_at(2015, 7, 1, 12))
        assert resolved.state is ObservanceState.UNKNOWN
        assert resolved.active_bias == 300
        assert resolved.calendar_time == CalendarTime.create(2015, 7, 1, 7)

    def test_invalid_rule_is_rejected(self, us_eastern, utc_at) -> None:
        broken = replace(us_eastern, standard_date=TransitionRule.relative(11, 6, 0, 2))
        with pytest.raises(InvalidTransitionRuleError):
            resolve(broken, utc_at(2015, 7, 1))

    def test_candidate_before_epoch(self, us_eastern) -> None:
        with pytest.raises(InvalidTimestampError):
            resolve(us_eastern, Timestamp(0))

    def test_invalid_timestamp(self, us_eastern) -> None:
        with pytest.raises(InvalidTimestampError):
            resolve(us_eastern, Timestamp(-1))


class TestResolveNow:
    def test_uses_clock(self, us_eastern, utc_at) -> None:
        clock = FixedClock(utc_at(2015, 3, 8, 7, 0).ticks)
        resolved = resolve_now(us_eastern, clock)
        assert resolved.state is ObservanceState.DAYLIGHT
        assert resolved.rules_year == 2015
