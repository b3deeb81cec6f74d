"""Collaborator protocols consumed by the conversion engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tzctl.domain.ticks import Timestamp
    from tzctl.domain.zone import TimezoneRuleSet


@runtime_checkable
class TimezoneRuleProvider(Protocol):
    """Supplies the rule set in force for a civil year.

    Implementations raise :class:`~tzctl.domain.errors.RuleUnavailableError`
    when they have nothing for the year. With automatic DST adjustment
    switched off they return :meth:`TimezoneRuleSet.without_daylight_saving`.
    """

    def rules_for_year(self, year: int) -> TimezoneRuleSet: ...


@runtime_checkable
class ClockSource(Protocol):
    """Current UTC time on the reference clock."""

    def now(self) -> Timestamp: ...
