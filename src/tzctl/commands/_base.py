"""Click command classes for tzctl.

``tzctl --examples`` and ``tzctl <command> --examples`` print sample
invocations (ISO instants, ``--ticks``, ``--unix``, ``--zone`` and
``--json``) and exit before the command resolves any rules.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class TzCommand(click.Command):
    """A tzctl subcommand; ``examples`` text enables its ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class TzGroup(click.Group):
    """The ``tzctl`` root group; subcommands also accept ``--examples``.

    ``command_class = TzCommand`` lets subcommands take ``examples=``
    without an explicit ``cls=``.
    """

    command_class = TzCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)
