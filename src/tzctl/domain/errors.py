"""Error kinds raised by the time engine.

Every error carries a stable ``code`` and a ``detail`` dict so callers
can tell the kinds apart without parsing messages. The service layer
maps them onto ``ServiceError`` payloads.
"""

from __future__ import annotations

from typing import Any, ClassVar

from tzctl.domain.types import ObservanceState


class TzError(Exception):
    """Base class for all time engine failures."""

    code: ClassVar[str] = "TZ_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail


class InvalidTimestampError(TzError):
    """A tick value lies outside ``[0, MAX_TICKS]``."""

    code = "INVALID_TIMESTAMP"


class TickOverflowError(TzError):
    """Tick arithmetic would wrap a signed 64-bit value."""

    code = "OVERFLOW"


class InvalidDateError(TzError):
    """Day, month or year out of range, including Feb 29 in a common year."""

    code = "INVALID_DATE"


class InvalidCalendarTimeError(TzError):
    """A calendar time has an out-of-range field or a wrong weekday."""

    code = "INVALID_CALENDAR_TIME"


class RuleUnavailableError(TzError):
    """The timezone rule provider could not supply a rule set."""

    code = "RULE_UNAVAILABLE"


class ResolutionError(TzError):
    """Base for failures of the zone resolver; the state is always INVALID."""

    state: ClassVar[ObservanceState] = ObservanceState.INVALID


class InvalidTransitionRuleError(ResolutionError):
    """A transition rule is neither a valid relative/absolute rule nor ignored."""

    code = "INVALID_TRANSITION_RULE"


class BiasOutOfRangeError(ResolutionError):
    """A combined bias exceeds one day in either direction."""

    code = "BIAS_OUT_OF_RANGE"


class YearMismatchError(ResolutionError):
    """Strict resolution produced a local time outside the requested year."""

    code = "YEAR_MISMATCH"


class TransitionUnresolvableError(ResolutionError):
    """No candidate rule-set year produced a usable resolution."""

    code = "TRANSITION_UNRESOLVABLE"
