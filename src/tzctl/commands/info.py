"""Command: day, date, time, and offset for UTC and local time."""

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
  tzctl info
  tzctl info 2013-08-11T18:46:00.085Z --milliseconds
  tzctl info 2013-08-11T18:46:00Z --usa --abbreviate
  tzctl info --ticks 131339913934428327 --prefer utc
  tzctl -q info""",
)
@click.argument("when", required=False, callback=parse_when)
@click.option("--ticks", type=int, default=None, help="100 ns ticks since 1601-01-01 UTC.")
@click.option("--unix", type=float, default=None, callback=parse_unix, help="POSIX seconds.")
@click.option(
    "--prefer",
    type=click.Choice(["utc", "local"]),
    default=None,
    help="Side shown as the current time (default from [display] prefer_local).",
)
@click.option("--usa", is_flag=True, help="USA style: 8/11/2013 2:46:00 PM (UTC-04:00).")
@click.option("--abbreviate", is_flag=True, help="Abbreviated day names (Sun, Mon, ...).")
@click.option("--milliseconds", is_flag=True, help="Include milliseconds in times.")
@click.pass_obj
def info(
    app: AppContext,
    when: Timestamp | None,
    ticks: int | None,
    unix: Timestamp | None,
    prefer: str | None,
    usa: bool,
    abbreviate: bool,
    milliseconds: bool,
) -> None:
    """Show an instant (default: now) as UTC and local time."""
    from tzctl.domain.types import Preference
    from tzctl.services.convert import ConvertService

    instant = pick_instant(when, ticks, unix, required=False)

    display = app.settings.display
    if usa or abbreviate or milliseconds:
        display = display.model_copy(
            update={
                "usa_style": usa or display.usa_style,
                "abbreviate_day": abbreviate or display.abbreviate_day,
                "milliseconds": milliseconds or display.milliseconds,
            }
        )

    app.emit(
        ConvertService(app.host).time_info(
            instant,
            prefer=Preference(prefer) if prefer else None,
            time_format=display.time_format(),
        )
    )
