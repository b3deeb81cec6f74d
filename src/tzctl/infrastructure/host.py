"""Host — the collaborators injected into every service.

The host turns settings into the rule provider, clock, conversion options
and display format the services work with. Services never read settings
directly.
"""

from __future__ import annotations

import logging
from functools import cached_property
from typing import TYPE_CHECKING

from tzctl.infrastructure.clock import FixedClock, SystemClock
from tzctl.infrastructure.providers import StaticRuleProvider, ZoneInfoRuleProvider

if TYPE_CHECKING:
    from tzctl.config.settings import TzSettings
    from tzctl.domain.display import ConversionOptions, TimeFormat
    from tzctl.domain.ports import ClockSource, TimezoneRuleProvider
    from tzctl.domain.types import Preference

logger = logging.getLogger(__name__)


class Host:
    """Provider, clock, and formatting choices for one CLI invocation.

    Either collaborator can be passed in directly, which is how tests and
    library callers substitute a fixed clock or a table of rule sets.
    """

    def __init__(
        self,
        settings: TzSettings,
        *,
        provider: TimezoneRuleProvider | None = None,
        clock: ClockSource | None = None,
    ) -> None:
        self.settings = settings
        if provider is not None:
            self.__dict__["provider"] = provider
        if clock is not None:
            self.__dict__["clock"] = clock

    @cached_property
    def provider(self) -> TimezoneRuleProvider:
        zone = self.settings.zone
        if zone.rules is not None:
            logger.debug("Using static rule set from configuration")
            return StaticRuleProvider(zone.rules.to_rule_set(), auto_dst=zone.auto_dst)
        logger.debug("Using zoneinfo rules for %s", zone.key)
        return ZoneInfoRuleProvider(zone.key, auto_dst=zone.auto_dst)

    @cached_property
    def clock(self) -> ClockSource:
        fixed = self.settings.clock.fixed_ticks
        return FixedClock(fixed) if fixed is not None else SystemClock()

    @property
    def zone_label(self) -> str:
        zone = self.settings.zone
        return "configured rules" if zone.rules is not None else zone.key

    @property
    def options(self) -> ConversionOptions:
        return self.settings.conversion.options()

    @property
    def time_format(self) -> TimeFormat:
        return self.settings.display.time_format()

    @property
    def preference(self) -> Preference:
        return self.settings.display.preference
