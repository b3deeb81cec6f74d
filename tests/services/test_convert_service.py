"""Tests for LocalTimeConverter and ConvertService."""

from __future__ import annotations

from dataclasses import replace

import pytest

from tzctl.config.models import ConversionConfig, DisplayConfig
from tzctl.config.settings import TzSettings
from tzctl.domain.calendar import CalendarTime
from tzctl.domain.display import TimeFormat
from tzctl.domain.errors import (
    InvalidTimestampError,
    RuleUnavailableError,
    TransitionUnresolvableError,
)
from tzctl.domain.ticks import Timestamp
from tzctl.domain.transitions import TransitionRule
from tzctl.domain.types import ObservanceState, Preference, TimeStyle
from tzctl.domain.zone import TimezoneRuleSet
from tzctl.infrastructure.clock import FixedClock
from tzctl.infrastructure.providers import StaticRuleProvider
from tzctl.services.convert import ConvertService, LocalTimeConverter


class _RecordingProvider:
    """Serves one rule set and fails for the years in ``missing``."""

    def __init__(self, rules: TimezoneRuleSet, missing: set[int] | None = None) -> None:
        self.rules = rules
        self.missing = missing or set()
        self.calls: list[int] = []

    def rules_for_year(self, year: int) -> TimezoneRuleSet:
        self.calls.append(year)
        if year in self.missing:
            raise RuleUnavailableError(f"no rules for {year}", year=year)
        return self.rules


class TestAttempts:
    def test_mid_year(self, utc_at) -> None:
        assert LocalTimeConverter.attempts_for(utc_at(2015, 6, 1)) == [(2015, True)]

    def test_new_years_day(self, utc_at) -> None:
        assert LocalTimeConverter.attempts_for(utc_at(2015, 1, 1, 3)) == [(2014, True), (2015, False)]

    def test_new_years_eve(self, utc_at) -> None:
        assert LocalTimeConverter.attempts_for(utc_at(2014, 12, 31, 23)) == [
            (2014, True),
            (2015, False),
        ]


class TestLocalTimeConverter:
    def test_mid_year(self, us_eastern, utc_at) -> None:
        resolved = LocalTimeConverter(StaticRuleProvider(us_eastern)).convert(utc_at(2015, 7, 1, 16))
        assert resolved.state is ObservanceState.DAYLIGHT
        assert resolved.calendar_time == CalendarTime.create(2015, 7, 1, 12)
        assert resolved.rules_year == 2015

    def test_new_years_day_uses_previous_year(self, us_eastern, utc_at) -> None:
        provider = _RecordingProvider(us_eastern)
        resolved = LocalTimeConverter(provider).convert(utc_at(2015, 1, 1, 3))
        assert resolved.rules_year == 2014
        assert resolved.calendar_time == CalendarTime.create(2014, 12, 31, 22)
        assert provider.calls == [2014]

    def test_new_years_eve_falls_through_to_next_year(self, central_europe, utc_at) -> None:
        provider = _RecordingProvider(central_europe)
        resolved = LocalTimeConverter(provider).convert(utc_at(2014, 12, 31, 23, 30))
        assert resolved.rules_year == 2015
        assert resolved.state is ObservanceState.STANDARD
        assert resolved.calendar_time == CalendarTime.create(2015, 1, 1, 0, 30)
        assert provider.calls == [2014, 2015]

    def test_provider_gap_is_skipped(self, us_eastern, utc_at) -> None:
        provider = _RecordingProvider(us_eastern, missing={2014})
        resolved = LocalTimeConverter(provider).convert(utc_at(2015, 1, 1, 3))
        assert resolved.rules_year == 2015
        assert resolved.calendar_time.year == 2014

    def test_provider_error_wins(self, us_eastern) -> None:
        with pytest.raises(RuleUnavailableError):
            LocalTimeConverter(StaticRuleProvider(us_eastern)).convert(Timestamp(0))

    def test_resolver_rejection(self, us_eastern, utc_at) -> None:
        broken = replace(us_eastern, standard_date=TransitionRule.relative(11, 6, 0, 2))
        with pytest.raises(TransitionUnresolvableError) as exc_info:
            LocalTimeConverter(StaticRuleProvider(broken)).convert(utc_at(2015, 7, 1))
        assert exc_info.value.detail["cause"] == "INVALID_TRANSITION_RULE"
        assert exc_info.value.__cause__ is not None

    def test_invalid_timestamp(self, us_eastern) -> None:
        with pytest.raises(InvalidTimestampError):
            LocalTimeConverter(StaticRuleProvider(us_eastern)).convert(Timestamp(-1))

    def test_convert_now(self, us_eastern, utc_at) -> None:
        clock = FixedClock(utc_at(2015, 3, 8, 7).ticks)
        resolved = LocalTimeConverter(StaticRuleProvider(us_eastern), clock).convert_now()
        assert resolved.calendar_time == CalendarTime.create(2015, 3, 8, 3)

    def test_convert_now_needs_clock(self, us_eastern) -> None:
        with pytest.raises(TypeError):
            LocalTimeConverter(StaticRuleProvider(us_eastern)).convert_now()


class TestConvertService:
    def test_convert(self, make_host, us_eastern, utc_at) -> None:
        utc = utc_at(2013, 8, 11, 18, 46, 0, 85)
        result = ConvertService(make_host(us_eastern)).convert(utc)
        assert result.ok
        assert result.op == "convert"
        data = result.data
        assert data["utc_ticks"] == utc.ticks
        assert data["local_ticks"] == utc_at(2013, 8, 11, 14, 46, 0, 85).ticks
        assert data["timestamp"] == "2013-08-11T18:46:00.085Z"
        assert data["local"]["iso"] == "2013-08-11T14:46:00.085"
        assert data["local"]["weekday"] == "Sunday"
        assert data["state"] == "daylight"
        assert data["is_dst"] is True
        assert data["active_bias"] == 240
        assert data["offset"] == "-04:00"
        assert data["rules_year"] == 2013
        assert data["rules"]["standard_offset"] == "-05:00"
        assert data["rules"]["daylight_offset"] == "-04:00"
        assert data["rules"]["daylight_date"]["kind"] == "relative"
        assert result.meta == {"zone": "UTC"}

    def test_rule_unavailable(self, make_host, us_eastern) -> None:
        result = ConvertService(make_host(us_eastern)).convert(Timestamp(0))
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "RULE_UNAVAILABLE"
        assert result.error.detail == {"year": 1600}

    def test_unresolvable(self, make_host, us_eastern, utc_at) -> None:
        broken = replace(us_eastern, standard_date=TransitionRule.relative(11, 6, 0, 2))
        result = ConvertService(make_host(broken)).convert(utc_at(2015, 7, 1))
        assert result.error is not None
        assert result.error.code == "TRANSITION_UNRESOLVABLE"
        assert result.error.detail["cause"] == "INVALID_TRANSITION_RULE"
        assert result.error.detail["state"] == "invalid"

    def test_invalid_timestamp(self, make_host, us_eastern) -> None:
        result = ConvertService(make_host(us_eastern)).convert(Timestamp(-1))
        assert result.error is not None
        assert result.error.code == "INVALID_TIMESTAMP"
        assert "state" not in result.error.detail


class TestTimeInfo:
    def test_explicit_instant(self, make_host, us_eastern, utc_at) -> None:
        result = ConvertService(make_host(us_eastern)).time_info(utc_at(2013, 8, 11, 18, 46, 0, 85))
        assert result.ok
        data = result.data
        assert data["timestamp"] == "2013-08-11T18:46:00.085Z"
        assert data["preferred"] == "local"
        assert data["current"]["text"] == "Sunday 2013-08-11 14:46:00 -04:00"
        assert data["utc"]["text"] == "Sunday 2013-08-11 18:46:00 Z"
        assert data["utc"]["state"] == "unknown"
        assert data["local"]["is_dst"] is True
        assert data["style"] == "iso8601"
        assert result.warnings == []

    def test_defaults_to_clock(self, make_host, us_eastern, utc_at) -> None:
        host = make_host(us_eastern, now=utc_at(2015, 3, 8, 7))
        result = ConvertService(host).time_info()
        assert result.data["current"]["text"] == "Sunday 2015-03-08 03:00:00 -04:00"

    def test_prefer_utc(self, make_host, us_eastern, utc_at) -> None:
        result = ConvertService(make_host(us_eastern)).time_info(
            utc_at(2013, 8, 11, 18, 46), prefer=Preference.UTC
        )
        assert result.data["preferred"] == "utc"
        assert result.data["current"]["text"] == "Sunday 2013-08-11 18:46:00 Z"

    def test_usa_format(self, make_host, us_eastern, utc_at) -> None:
        result = ConvertService(make_host(us_eastern)).time_info(
            utc_at(2013, 8, 11, 18, 46), time_format=TimeFormat(style=TimeStyle.USA)
        )
        assert result.data["current"]["text"] == "Sunday 8/11/2013 2:46:00 PM (UTC-04:00)"
        assert result.data["style"] == "usa"

    def test_configured_display(self, make_host, us_eastern, utc_at) -> None:
        settings = TzSettings.from_cli(display=DisplayConfig(prefer_local=False, abbreviate_day=True))
        result = ConvertService(make_host(us_eastern, settings=settings)).time_info(
            utc_at(2013, 8, 11, 18, 46)
        )
        assert result.data["current"]["text"] == "Sun 2013-08-11 18:46:00 Z"

    def test_ignore_dst_warns(self, make_host, us_eastern, utc_at) -> None:
        settings = TzSettings.from_cli(conversion=ConversionConfig(ignore_dst=True))
        result = ConvertService(make_host(us_eastern, settings=settings)).time_info(
            utc_at(2013, 8, 11, 18, 46)
        )
        assert result.ok
        assert result.data["local"]["offset"] == "-05:00"
        assert result.data["local"]["state"] == "standard"
        assert len(result.warnings) == 1
        assert "Daylight time not applied" in result.warnings[0]

    def test_failure(self, make_host, us_eastern) -> None:
        result = ConvertService(make_host(us_eastern)).time_info(Timestamp(0))
        assert not result.ok
        assert result.op == "time_info"
        assert result.error is not None
        assert result.error.code == "RULE_UNAVAILABLE"
