"""List the provisioning steps in execution order."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from adconnect.services import STEPS

console = Console()


@click.command()
def steps() -> None:
    """Show the ordered steps performed by ``join``."""

    table = Table(title="Provisioning steps")
    table.add_column("#", justify="right")
    table.add_column("Step", style="bold", no_wrap=True)
    table.add_column("Action")
    for index, (key, title) in enumerate(STEPS, start=1):
        table.add_row(str(index), key, title)
    console.print(table)
