"""Command: calendar facts about a date."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tzctl.commands._base import TzCommand
from tzctl.commands._instants import parse_date

if TYPE_CHECKING:
    from tzctl.commands._context import AppContext


@click.command(
    cls=TzCommand,
    examples="""\
  tzctl date 2015-03-08
  tzctl date 2024-02-29
  tzctl -q date 2000-01-01""",
)
@click.argument("day", metavar="YYYY-MM-DD", callback=parse_date)
@click.pass_obj
def date(app: AppContext, day: tuple[int, int, int]) -> None:
    """Weekday, leap year, day of year, and weekday-occurrence rule for a date."""
    from tzctl.services.calendar import CalendarService

    year, month, dom = day
    app.emit(CalendarService(app.host).date_info(year, month, dom))
