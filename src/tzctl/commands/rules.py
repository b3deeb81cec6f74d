"""Command: inspect the timezone rules for a year."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tzctl.commands._base import TzCommand

if TYPE_CHECKING:
    from tzctl.commands._context import AppContext


@click.command(
    cls=TzCommand,
    examples="""\
  tzctl rules 2015
  tzctl --zone Australia/Sydney rules 2024
  tzctl --json rules 2007""",
)
@click.argument("year", type=int)
@click.pass_obj
def rules(app: AppContext, year: int) -> None:
    """Show the rule set in force for YEAR and its transition dates."""
    from tzctl.services.rules import RulesService

    app.emit(RulesService(app.host).rules(year))
