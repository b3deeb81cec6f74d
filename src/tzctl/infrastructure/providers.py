"""Timezone rule providers.

Each provider answers :meth:`rules_for_year` with the rule set in force
for a civil year and raises :class:`RuleUnavailableError` when it cannot.
Built with ``auto_dst=False`` they return the daylight-free view of every
rule set, as the platform does when automatic DST adjustment is off.

:class:`ZoneInfoRuleProvider` derives rule sets from the IANA database:
it scans a year for UTC offset changes and expresses the first daylight
start (in local standard time) and the first standard start (in local
daylight time) as relative transition rules.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from datetime import UTC, MAXYEAR, datetime, timedelta, tzinfo
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tzctl.domain.bridge import from_datetime, to_calendar
from tzctl.domain.calendar import is_year_valid
from tzctl.domain.errors import RuleUnavailableError
from tzctl.domain.transitions import TransitionRule, relative_from_absolute
from tzctl.domain.types import MAX_ZONE_NAME_LENGTH
from tzctl.domain.zone import TimezoneRuleSet

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

# The scan reads the first instant of the following year too.
_LAST_SCANNABLE_YEAR = MAXYEAR - 1

_ONE_DAY = timedelta(days=1)
_ONE_MINUTE = timedelta(minutes=1)
_MINUTES_PER_DAY = 24 * 60


def _check_year(year: int) -> None:
    if not is_year_valid(year):
        raise RuleUnavailableError(f"No timezone rules for year {year}", year=year)


class StaticRuleProvider:
    """One rule set for every year."""

    def __init__(self, rules: TimezoneRuleSet, *, auto_dst: bool = True) -> None:
        self._rules = rules if auto_dst else rules.without_daylight_saving()

    def rules_for_year(self, year: int) -> TimezoneRuleSet:
        _check_year(year)
        return self._rules


class YearTableRuleProvider:
    """Rule sets keyed by the year they take effect.

    A request is answered by the entry with the greatest year not after
    it, or by the earliest entry for years before the table starts.
    """

    def __init__(self, table: Mapping[int, TimezoneRuleSet], *, auto_dst: bool = True) -> None:
        self._years = sorted(table)
        self._table = dict(table)
        self._auto_dst = auto_dst

    def rules_for_year(self, year: int) -> TimezoneRuleSet:
        _check_year(year)
        if not self._years:
            raise RuleUnavailableError("Timezone rule table is empty", year=year)
        index = bisect_right(self._years, year) - 1
        chosen = self._years[max(index, 0)]
        if chosen != year:
            logger.debug("Year %d not in rule table, using %d", year, chosen)
        rules = self._table[chosen]
        return rules if self._auto_dst else rules.without_daylight_saving()


class ZoneInfoRuleProvider:
    """Rule sets derived from an IANA timezone key such as ``America/New_York``.

    Years beyond what :mod:`datetime` can scan reuse the rules of the last
    scannable year. Only the first daylight period of a year is kept: a
    zone that suspends daylight time and resumes it within one year, as
    Africa/Casablanca did around Ramadan, reads as standard time after
    the suspension.
    """

    def __init__(self, key: str, *, auto_dst: bool = True) -> None:
        self.key = key
        self._auto_dst = auto_dst

    def _zone(self) -> ZoneInfo:
        try:
            return ZoneInfo(self.key)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise RuleUnavailableError(f"Unknown timezone key: {self.key}", key=self.key) from exc

    def rules_for_year(self, year: int) -> TimezoneRuleSet:
        _check_year(year)
        scan_year = min(year, _LAST_SCANNABLE_YEAR)
        rules = derive_rules(self._zone(), scan_year)
        return rules if self._auto_dst else rules.without_daylight_saving()


def _minutes(delta: timedelta | None) -> int:
    return int((delta or timedelta()).total_seconds()) // 60


def _offset(zone: tzinfo, instant: datetime) -> timedelta | None:
    return instant.astimezone(zone).utcoffset()


def _find_change(zone: tzinfo, day: datetime, before: timedelta | None) -> datetime:
    """First whole minute of *day* whose offset differs from *before*."""
    lo, hi = 0, _MINUTES_PER_DAY
    while hi - lo > 1:
        mid = (lo + hi) // 2
        if _offset(zone, day + timedelta(minutes=mid)) == before:
            lo = mid
        else:
            hi = mid
    return day + timedelta(minutes=hi)


def scan_offset_changes(zone: tzinfo, year: int) -> list[datetime]:
    """UTC instants during *year* at which *zone* changes its UTC offset.

    At most one change per UTC day is detected.
    """
    changes: list[datetime] = []
    day = datetime(year, 1, 1, tzinfo=UTC)
    end = datetime(year + 1, 1, 1, tzinfo=UTC)
    previous = _offset(zone, day)
    while day < end:
        following = day + _ONE_DAY
        current = _offset(zone, following)
        if current != previous:
            changes.append(_find_change(zone, day, previous))
            previous = current
        day = following
    return changes


def _wall_rule(wall: datetime) -> TransitionRule:
    local = to_calendar(from_datetime(wall.replace(tzinfo=None)))
    return relative_from_absolute(local, prefer_last_occurrence=True)


def _name(local: datetime) -> str:
    return (local.tzname() or "")[:MAX_ZONE_NAME_LENGTH]


def _fixed_rules(local: datetime) -> TimezoneRuleSet:
    offset = _minutes(local.utcoffset())
    dst = _minutes(local.dst())
    if not dst:
        name = _name(local)
        return TimezoneRuleSet(bias=-offset, standard_name=name, daylight_name=name)
    # Daylight time all year: coincident transitions with a daylight bias.
    always = TransitionRule.relative(1, 1, 0)
    return TimezoneRuleSet(
        bias=-(offset - dst),
        daylight_bias=-dst,
        standard_date=always,
        daylight_date=always,
        standard_name=_name(local),
        daylight_name=_name(local),
    )


def derive_rules(zone: tzinfo, year: int) -> TimezoneRuleSet:
    """Build the rule set of *zone* for *year* from its offset changes.

    A rule set holds one daylight period per year, so only the first
    daylight start and the first standard start are kept. Later periods
    in the same year, such as one resumed after a suspension, are
    reported as standard time.
    """
    daylight_start: tuple[datetime, datetime, datetime] | None = None
    standard_start: tuple[datetime, datetime, datetime] | None = None
    for instant in scan_offset_changes(zone, year):
        before = (instant - _ONE_MINUTE).astimezone(zone)
        after = instant.astimezone(zone)
        if after.dst() and not before.dst():
            if daylight_start is None:
                daylight_start = (instant, before, after)
            else:
                logger.debug(
                    "Extra daylight period for %s in %d starting %s is not kept",
                    zone,
                    year,
                    instant.isoformat(),
                )
        elif before.dst() and not after.dst():
            standard_start = standard_start or (instant, before, after)

    if daylight_start is None or standard_start is None:
        logger.debug("No daylight saving cycle for %s in %d", zone, year)
        return _fixed_rules(datetime(year, 1, 1, tzinfo=UTC).astimezone(zone))

    dl_instant, in_standard, in_daylight = daylight_start
    std_instant, _, _ = standard_start
    standard_offset = in_standard.utcoffset() or timedelta()
    daylight_offset = in_daylight.utcoffset() or timedelta()
    return TimezoneRuleSet(
        bias=-_minutes(standard_offset),
        daylight_bias=-(_minutes(daylight_offset) - _minutes(standard_offset)),
        daylight_date=_wall_rule(dl_instant + standard_offset),
        standard_date=_wall_rule(std_instant + daylight_offset),
        standard_name=_name(in_standard),
        daylight_name=_name(in_daylight),
    )
