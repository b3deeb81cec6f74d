"""tzctl: tick-based UTC to local time resolution with DST awareness."""

__version__ = "0.1.0"
