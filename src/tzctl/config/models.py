"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, tzctl.toml only contains overrides.
An empty file converts UTC instants for the ``UTC`` zone.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from tzctl.domain.display import DEFAULT_DST_START_YEAR, ConversionOptions, TimeFormat
from tzctl.domain.transitions import TransitionRule
from tzctl.domain.types import MAX_TICKS, MAX_YEAR, MIN_YEAR, Preference, TimeStyle
from tzctl.domain.zone import TimezoneRuleSet

# --- tzctl.toml sections ---


class TransitionRuleConfig(BaseModel):
    """[zone.rules.standard_date] / [zone.rules.daylight_date] tables.

    Leave ``year`` at 0 for a relative rule, where ``day`` is the weekday
    occurrence (5 = last). Leave ``month`` at 0 for no transition.
    """

    model_config = {"frozen": True}

    year: int = 0
    month: int = 0
    day: int = 0
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0
    day_of_week: int = 0

    def to_rule(self) -> TransitionRule:
        return TransitionRule(**self.model_dump())


class RuleSetConfig(BaseModel):
    """[zone.rules] section — a fixed rule set used for every year."""

    model_config = {"frozen": True}

    bias: int = 0
    standard_bias: int = 0
    daylight_bias: int = 0
    standard_date: TransitionRuleConfig = Field(default_factory=TransitionRuleConfig)
    daylight_date: TransitionRuleConfig = Field(default_factory=TransitionRuleConfig)
    standard_name: str = ""
    daylight_name: str = ""

    def to_rule_set(self) -> TimezoneRuleSet:
        return TimezoneRuleSet(
            bias=self.bias,
            standard_bias=self.standard_bias,
            daylight_bias=self.daylight_bias,
            standard_date=self.standard_date.to_rule(),
            daylight_date=self.daylight_date.to_rule(),
            standard_name=self.standard_name,
            daylight_name=self.daylight_name,
        )


class ZoneConfig(BaseModel):
    """[zone] section. ``rules`` takes precedence over ``key``."""

    model_config = {"frozen": True}

    key: str = "UTC"
    auto_dst: bool = True
    rules: RuleSetConfig | None = None


class DisplayConfig(BaseModel):
    """[display] section."""

    model_config = {"frozen": True}

    usa_style: bool = False
    abbreviate_day: bool = False
    milliseconds: bool = False
    prefer_local: bool = True

    def time_format(self) -> TimeFormat:
        return TimeFormat(
            style=TimeStyle.USA if self.usa_style else TimeStyle.ISO8601,
            abbreviate_day=self.abbreviate_day,
            with_milliseconds=self.milliseconds,
        )

    @property
    def preference(self) -> Preference:
        return Preference.LOCAL if self.prefer_local else Preference.UTC


class ConversionConfig(BaseModel):
    """[conversion] section."""

    model_config = {"frozen": True}

    dst_start_year: int = Field(default=DEFAULT_DST_START_YEAR, ge=MIN_YEAR, le=MAX_YEAR)
    ignore_dst: bool = False

    def options(self) -> ConversionOptions:
        return ConversionOptions(dst_start_year=self.dst_start_year, ignore_dst=self.ignore_dst)


class ClockConfig(BaseModel):
    """[clock] section. ``fixed_ticks`` pins "now" for reproducible runs."""

    model_config = {"frozen": True}

    fixed_ticks: int | None = Field(default=None, ge=0, le=MAX_TICKS)


class TzConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    zone: ZoneConfig = Field(default_factory=ZoneConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    clock: ClockConfig = Field(default_factory=ClockConfig)
