"""Rule inspection: what the provider says about a year."""

from __future__ import annotations

from typing import Any

from tzctl.domain.errors import TzError
from tzctl.domain.transitions import absolute_from_relative, is_rule_ignored
from tzctl.services._helpers import calendar_payload, rule_set_payload
from tzctl.services.base import BaseService
from tzctl.services.contracts import RulesResultData, dump_validated
from tzctl.services.result import ServiceResult


class RulesService(BaseService):
    """Report the rule set for a year and its transition dates."""

    def rules(self, year: int) -> ServiceResult:
        """Rule set for *year* with both transitions resolved to dates.

        Ignored transitions are reported without a date.
        """
        meta = {"zone": self._host.zone_label}
        try:
            rule_set = self._host.provider.rules_for_year(year)
            starts: dict[str, dict[str, Any] | None] = {}
            for key, rule in (
                ("standard_start", rule_set.standard_date),
                ("daylight_start", rule_set.daylight_date),
            ):
                if is_rule_ignored(rule):
                    starts[key] = None
                else:
                    starts[key] = calendar_payload(absolute_from_relative(rule, year))
        except TzError as exc:
            return self._failure("rules", exc, meta=meta)

        data = {
            "year": year,
            "observes_dst": starts["daylight_start"] is not None and rule_set.daylight_bias != 0,
            "rules": rule_set_payload(rule_set),
            **starts,
        }
        return ServiceResult(
            ok=True,
            op="rules",
            data=dump_validated(RulesResultData, data),
            meta=meta,
        )
