"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Builds the host lazily and routes results to
stdout/stderr with the right exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from tzctl.config.logging import configure_logging
from tzctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from tzctl.config.settings import TzSettings
    from tzctl.infrastructure.host import Host
    from tzctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The host is created on first use so ``--help`` and ``--version`` never
    touch the timezone database.
    """

    def __init__(self, settings: TzSettings) -> None:
        self.settings = settings
        self._host: Host | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def host(self) -> Host:
        """The host instance (created lazily on first access)."""
        if self._host is None:
            from tzctl.infrastructure.host import Host

            self._host = Host(self.settings)
        return self._host

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
