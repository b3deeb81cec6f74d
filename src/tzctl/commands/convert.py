"""Command: convert one UTC instant to local time."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tzctl.commands._base import TzCommand
from tzctl.commands._instants import parse_unix, parse_when, pick_instant

if TYPE_CHECKING:
    from tzctl.commands._context import AppContext
    from tzctl.domain.ticks import Timestamp


@click.command(
    cls=TzCommand,
    examples="""\
  tzctl convert 2015-03-08T07:00:00Z
  tzctl convert --ticks 131339913934428327
  tzctl convert --unix 1425798000
  tzctl --zone Europe/Berlin convert 2014-12-31T23:30:00
  tzctl --json convert 2015-11-01T06:00:00Z""",
)
@click.argument("when", required=False, callback=parse_when)
@click.option("--ticks", type=int, default=None, help="100 ns ticks since 1601-01-01 UTC.")
@click.option("--unix", type=float, default=None, callback=parse_unix, help="POSIX seconds.")
@click.pass_obj
def convert(
    app: AppContext,
    when: Timestamp | None,
    ticks: int | None,
    unix: Timestamp | None,
) -> None:
    """Convert a UTC instant to local time and report the observance state.

    WHEN is ISO 8601 text; without an offset it is read as UTC.
    """
    from tzctl.services.convert import ConvertService

    instant = pick_instant(when, ticks, unix, required=True)
    assert instant is not None
    app.emit(ConvertService(app.host).convert(instant))
