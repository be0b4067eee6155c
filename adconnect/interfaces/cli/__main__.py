"""Entry point for running the adconnect CLI.

This module defines a top-level Click group that aggregates all subcommands
defined in the ``adconnect.interfaces.cli`` package. Executing
``python -m adconnect.interfaces.cli`` without a subcommand starts the
interactive join.
"""

import click

from .join import join
from .steps import steps


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Linux Active Directory Connector."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(join)


cli.add_command(join)
cli.add_command(steps)


if __name__ == "__main__":
    cli()
