"""Enums and range constants shared across the domain layer.

Tick constants describe the reference clock: a signed 64-bit count of
100 ns intervals since 1601-01-01 00:00:00 UTC. Calendar constants bound
the civil years the engine accepts.
"""

from __future__ import annotations

from enum import StrEnum

# --- Reference clock ---

TICKS_PER_MICROSECOND = 10
TICKS_PER_MILLISECOND = 100 * TICKS_PER_MICROSECOND
TICKS_PER_SECOND = 1000 * TICKS_PER_MILLISECOND
TICKS_PER_MINUTE = 60 * TICKS_PER_SECOND
TICKS_PER_DAY = 24 * 60 * TICKS_PER_MINUTE

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# 30827-12-31 23:59:59.999, the latest instant a calendar time can hold.
MAX_TICKS = 0x7FFF35F4F06C58F0

# 1970-01-01 expressed in ticks.
UNIX_EPOCH_TICKS = 116_444_736_000_000_000

# --- Calendar ---

MIN_YEAR = 1601
MAX_YEAR = 30827

# Longest rule-set name, one slot short of the platform's 32-slot buffer.
MAX_ZONE_NAME_LENGTH = 31

# Largest allowed distance between UTC and local time, in minutes.
MAX_BIAS_MINUTES = 24 * 60

# Relative transition rules: "last occurrence of the weekday in the month".
LAST_OCCURRENCE = 5


class Weekday(StrEnum):
    """English day names indexed by the engine's weekday number (0 = Sunday)."""

    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"

    @classmethod
    def from_index(cls, index: int) -> Weekday:
        return list(cls)[index]


class ObservanceState(StrEnum):
    """Outcome of resolving an instant against a timezone rule set."""

    STANDARD = "standard"
    DAYLIGHT = "daylight"
    UNKNOWN = "unknown"
    INVALID = "invalid"


class RuleKind(StrEnum):
    """Shape of a transition rule."""

    ABSOLUTE = "absolute"
    RELATIVE = "relative"
    IGNORED = "ignored"
    INVALID = "invalid"


class TimeStyle(StrEnum):
    """Rendering style tag consumed by the formatting layer."""

    ISO8601 = "iso8601"
    USA = "usa"


class Preference(StrEnum):
    """Which side of a UTC/local pair is the preferred one."""

    UTC = "utc"
    LOCAL = "local"
