"""Subcommand modules for tzctl.

register_commands() uses deferred imports to keep ``tzctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from tzctl.commands.convert import convert
    from tzctl.commands.date import date
    from tzctl.commands.info import info
    from tzctl.commands.rules import rules

    cli.add_command(convert)
    cli.add_command(info)
    cli.add_command(rules)
    cli.add_command(date)
