"""BaseService — foundation for all tzctl services.

Every service receives a :class:`Host` at construction time. The host
supplies the timezone rule provider, the clock, and the conversion and
display options chosen by configuration.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from tzctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from tzctl.domain.errors import TzError
    from tzctl.infrastructure.host import Host

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class RulesService(BaseService):
            def rules(self, year: int) -> ServiceResult:
                try:
                    rule_set = self._host.provider.rules_for_year(year)
                except TzError as exc:
                    return self._failure("rules", exc)
                ...
    """

    def __init__(self, host: Host) -> None:
        self._host = host

    @staticmethod
    def _failure(op: str, exc: TzError, *, meta: dict[str, Any] | None = None) -> ServiceResult:
        """Turn a time engine error into an ``ok=False`` result."""
        logger.debug("%s failed with %s: %s", op, exc.code, exc.message)
        return ServiceResult(ok=False, op=op, error=ServiceError.from_tz_error(exc), meta=meta)
