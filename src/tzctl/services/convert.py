"""UTC to local time conversion across year boundaries.

A rule set belongs to one civil year, but the local time of an instant
near New Year may fall in the neighbouring year. :class:`LocalTimeConverter`
therefore tries more than one rule-set year:

- UTC January 1: last year's rules (strict), then this year's rules.
- UTC December 31: this year's rules (strict), then next year's rules.
- Any other day: this year's rules (strict).

The first attempt that resolves wins. :class:`ConvertService` wraps the
converter and the formatting layer for the CLI.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from tzctl.domain.bridge import to_calendar
from tzctl.domain.display import build_time_info, format_offset, format_utc_timestamp
from tzctl.domain.errors import RuleUnavailableError, TransitionUnresolvableError, TzError
from tzctl.domain.ticks import ensure_valid
from tzctl.domain.zone import resolve
from tzctl.services._helpers import (
    calendar_payload,
    day_date_time_payload,
    rule_set_payload,
)
from tzctl.services.base import BaseService
from tzctl.services.contracts import ConvertResultData, TimeInfoResultData, dump_validated
from tzctl.services.result import ServiceResult

if TYPE_CHECKING:
    from tzctl.domain.display import TimeFormat
    from tzctl.domain.ports import ClockSource, TimezoneRuleProvider
    from tzctl.domain.ticks import Timestamp
    from tzctl.domain.types import Preference
    from tzctl.domain.zone import ResolvedLocalTime

log = structlog.get_logger(__name__)


class LocalTimeConverter:
    """Convert UTC instants to local time using a rule provider."""

    def __init__(self, provider: TimezoneRuleProvider, clock: ClockSource | None = None) -> None:
        self._provider = provider
        self._clock = clock

    @staticmethod
    def attempts_for(utc: Timestamp) -> list[tuple[int, bool]]:
        """The ``(rules_year, strict)`` pairs tried for *utc*, in order."""
        ct = to_calendar(utc)
        if ct.month == 1 and ct.day == 1:
            return [(ct.year - 1, True), (ct.year, False)]
        attempts = [(ct.year, True)]
        if ct.month == 12 and ct.day == 31:
            attempts.append((ct.year + 1, False))
        return attempts

    def convert(self, utc: Timestamp) -> ResolvedLocalTime:
        """Resolve *utc* to local time.

        Raises:
            InvalidTimestampError: *utc* is out of range.
            RuleUnavailableError: no attempt resolved and the provider
                failed on at least one of them.
            TransitionUnresolvableError: every attempt was rejected by the
                resolver.
        """
        ensure_valid(utc)
        provider_error: RuleUnavailableError | None = None
        resolver_error: TzError | None = None

        for year, strict in self.attempts_for(utc):
            try:
                rules = self._provider.rules_for_year(year)
            except RuleUnavailableError as exc:
                log.debug("convert.rules_unavailable", ticks=utc.ticks, year=year, error=exc.message)
                provider_error = exc
                continue
            try:
                resolved = resolve(rules, utc, target_year=year, strict=strict)
            except TzError as exc:
                log.debug(
                    "convert.attempt_rejected",
                    ticks=utc.ticks,
                    year=year,
                    strict=strict,
                    code=exc.code,
                )
                resolver_error = exc
                continue
            log.debug(
                "convert.resolved",
                ticks=utc.ticks,
                year=year,
                strict=strict,
                state=str(resolved.state),
            )
            return resolved

        if provider_error is not None:
            raise provider_error
        cause = resolver_error.code if resolver_error is not None else None
        raise TransitionUnresolvableError(
            f"Could not resolve local time for tick {utc.ticks}",
            ticks=utc.ticks,
            cause=cause,
        ) from resolver_error

    def convert_now(self) -> ResolvedLocalTime:
        if self._clock is None:
            raise TypeError("convert_now() needs a clock source")
        return self.convert(self._clock.now())


class ConvertService(BaseService):
    """Conversion operations: ``convert`` and ``time_info``."""

    def _converter(self) -> LocalTimeConverter:
        return LocalTimeConverter(self._host.provider, self._host.clock)

    def convert(self, utc: Timestamp) -> ServiceResult:
        """Convert *utc* and report the local time and the rules used."""
        meta = {"zone": self._host.zone_label}
        try:
            resolved = self._converter().convert(utc)
        except TzError as exc:
            return self._failure("convert", exc, meta=meta)

        utc_ct = to_calendar(utc)
        data = {
            "utc_ticks": utc.ticks,
            "local_ticks": resolved.timestamp.ticks,
            "utc": calendar_payload(utc_ct),
            "local": calendar_payload(resolved.calendar_time),
            "timestamp": format_utc_timestamp(utc_ct),
            "state": str(resolved.state),
            "is_dst": resolved.is_dst,
            "active_bias": resolved.active_bias,
            "offset": format_offset(resolved.active_bias),
            "rules_year": resolved.rules_year,
            "rules": rule_set_payload(resolved.rules),
        }
        return ServiceResult(
            ok=True,
            op="convert",
            data=dump_validated(ConvertResultData, data),
            meta=meta,
        )

    def time_info(
        self,
        utc: Timestamp | None = None,
        *,
        prefer: Preference | None = None,
        time_format: TimeFormat | None = None,
    ) -> ServiceResult:
        """Render *utc* (default: now) as a UTC/local pair.

        The display format and conversion options come from configuration;
        *prefer* and *time_format* override the configured ones.
        """
        fmt = time_format or self._host.time_format
        meta = {"zone": self._host.zone_label}
        try:
            instant = utc if utc is not None else self._host.clock.now()
            resolved = self._converter().convert(instant)
            info = build_time_info(
                instant,
                resolved,
                fmt,
                options=self._host.options,
                preferred=prefer or self._host.preference,
            )
        except TzError as exc:
            return self._failure("time_info", exc, meta=meta)

        warnings: list[str] = []
        if resolved.is_dst and not info.local.is_dst:
            warnings.append(
                f"Daylight time not applied to {info.local.date} "
                "(before the DST start year or DST ignored)"
            )

        data = {
            "timestamp": info.timestamp,
            "preferred": str(info.preferred),
            "current": day_date_time_payload(info.current()),
            "utc": day_date_time_payload(info.utc),
            "local": day_date_time_payload(info.local),
            "style": str(fmt.style),
        }
        return ServiceResult(
            ok=True,
            op="time_info",
            data=dump_validated(TimeInfoResultData, data),
            warnings=warnings,
            meta=meta,
        )
