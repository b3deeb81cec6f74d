"""Parsing of the instants and dates accepted on the command line."""

from __future__ import annotations

from datetime import datetime

import click

from tzctl.domain.bridge import from_datetime, from_unix_seconds
from tzctl.domain.errors import TzError
from tzctl.domain.ticks import Timestamp


def parse_when(_ctx: click.Context, _param: click.Parameter, value: str | None) -> Timestamp | None:
    """Click callback: ISO 8601 text to a timestamp. Naive text is UTC."""
    if value is None:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise click.BadParameter(f"{value!r} is not an ISO 8601 date-time") from exc
    try:
        return from_datetime(parsed)
    except TzError as exc:
        raise click.BadParameter(exc.message) from exc


def parse_unix(_ctx: click.Context, _param: click.Parameter, value: float | None) -> Timestamp | None:
    """Click callback: POSIX seconds to a timestamp."""
    if value is None:
        return None
    try:
        return from_unix_seconds(value)
    except TzError as exc:
        raise click.BadParameter(exc.message) from exc


def parse_date(_ctx: click.Context, _param: click.Parameter, value: str) -> tuple[int, int, int]:
    """Click callback: ``YYYY-MM-DD`` to ``(year, month, day)``.

    Only the shape is checked here so that impossible dates such as
    ``2023-02-29`` reach the calendar service and fail there.
    """
    parts = value.split("-")
    if len(parts) != 3 or not all(part.isdigit() for part in parts):
        raise click.BadParameter(f"{value!r} is not in YYYY-MM-DD form")
    year, month, day = (int(part) for part in parts)
    return year, month, day


def pick_instant(
    when: Timestamp | None,
    ticks: int | None,
    unix: Timestamp | None,
    *,
    required: bool,
) -> Timestamp | None:
    """The single instant given as WHEN, ``--ticks`` or ``--unix``."""
    candidates = (when, Timestamp(ticks) if ticks is not None else None, unix)
    given = [value for value in candidates if value is not None]
    if len(given) > 1:
        raise click.UsageError("Give only one of WHEN, --ticks, or --unix.")
    if not given:
        if required:
            raise click.UsageError("Give an instant as WHEN, --ticks, or --unix.")
        return None
    return given[0]
