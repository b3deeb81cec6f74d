"""Shared pytest fixtures for tzctl tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from tzctl.config.settings import TzSettings
from tzctl.domain.bridge import from_calendar
from tzctl.domain.calendar import CalendarTime
from tzctl.domain.ticks import Timestamp
from tzctl.domain.transitions import TransitionRule
from tzctl.domain.zone import TimezoneRuleSet
from tzctl.infrastructure.clock import FixedClock
from tzctl.infrastructure.host import Host
from tzctl.infrastructure.providers import StaticRuleProvider

UtcFactory = Callable[..., Timestamp]


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test from an empty directory with no TZCTL_* variables."""
    for name in list(os.environ):
        if name.startswith("TZCTL_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def utc_at() -> UtcFactory:
    """Build a UTC timestamp from calendar fields."""

    def _build(
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
    ) -> Timestamp:
        return from_calendar(CalendarTime(year, month, day, hour, minute, second, millisecond))

    return _build


@pytest.fixture
def us_eastern() -> TimezoneRuleSet:
    """US Eastern rules since 2007: 2nd Sunday in March to 1st Sunday in November."""
    return TimezoneRuleSet(
        bias=300,
        daylight_bias=-60,
        standard_date=TransitionRule.relative(11, 1, 0, 2),
        daylight_date=TransitionRule.relative(3, 2, 0, 2),
        standard_name="Eastern Standard Time",
        daylight_name="Eastern Daylight Time",
    )


@pytest.fixture
def central_europe() -> TimezoneRuleSet:
    """EU rules: last Sunday in March 02:00 to last Sunday in October 03:00."""
    return TimezoneRuleSet(
        bias=-60,
        daylight_bias=-60,
        standard_date=TransitionRule.relative(10, 5, 0, 3),
        daylight_date=TransitionRule.relative(3, 5, 0, 2),
        standard_name="W. Europe Standard Time",
        daylight_name="W. Europe Daylight Time",
    )


@pytest.fixture
def make_host() -> Callable[..., Host]:
    """Build a Host around a static rule set and an optional fixed clock."""

    def _build(
        rules: TimezoneRuleSet,
        *,
        now: Timestamp | None = None,
        settings: TzSettings | None = None,
    ) -> Host:
        clock = FixedClock(now.ticks) if now is not None else None
        return Host(
            settings or TzSettings.from_cli(),
            provider=StaticRuleProvider(rules),
            clock=clock,
        )

    return _build


@pytest.fixture
def sydney() -> TimezoneRuleSet:
    """Southern hemisphere rules: DST from October to April."""
    return TimezoneRuleSet(
        bias=-600,
        daylight_bias=-60,
        standard_date=TransitionRule.relative(4, 1, 0, 3),
        daylight_date=TransitionRule.relative(10, 1, 0, 2),
        standard_name="AUS Eastern Standard Time",
        daylight_name="AUS Eastern Daylight Time",
    )


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo handlers and levels installed by ``configure_logging``."""
    root = logging.getLogger()
    package = logging.getLogger("tzctl")
    saved = (list(root.handlers), root.level, package.level)
    yield
    root.handlers[:] = saved[0]
    root.setLevel(saved[1])
    package.setLevel(saved[2])
    structlog.reset_defaults()
