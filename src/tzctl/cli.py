"""Root CLI group for tzctl with global flags and command registration."""

from __future__ import annotations

import click

from tzctl import __version__
from tzctl.commands import register_commands
from tzctl.commands._base import TzGroup
from tzctl.commands._context import AppContext
from tzctl.config.settings import TzSettings


@click.group(
    cls=TzGroup,
    invoke_without_command=True,
    examples="""\
  tzctl info
  tzctl --zone America/New_York convert 2015-03-08T07:00:00Z
  tzctl --json rules 2015
  tzctl -c ./tzctl.toml date 2024-02-29""",
)
@click.version_option(version=__version__, prog_name="tzctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("-z", "--zone", "zone_key", default=None, help="IANA timezone key, e.g. Europe/Berlin.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    zone_key: str | None,
) -> None:
    """tzctl — resolve UTC instants to local civil time and DST state."""
    ctx.ensure_object(dict)
    settings = TzSettings.from_cli(
        config_path=config_path,
        zone_key=zone_key,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
