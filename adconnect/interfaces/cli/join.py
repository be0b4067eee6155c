"""Interactive domain join command.

Runs every provisioning step in order, asking the operator for the domain,
realm, credentials and access policy along the way. The process exit status
is 0 when the join completed and 1 when a step failed.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console

from adconnect.app.config import SettingsError
from adconnect.infrastructure.observability import configure_logging, get_logger

from .context import build_cli_context, build_workflow

console = Console(stderr=True, highlight=False)
_logger = get_logger(__name__)


@click.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="JSON file overriding file locations, packages and probe settings.",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Append the run log here instead of the configured location.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Ask all questions but only report the commands and file changes.",
)
@click.option("--verbose", is_flag=True, default=False, help="Enable debug diagnostics.")
@click.pass_context
def join(
    ctx: click.Context,
    config_path: str | None,
    log_file: str | None,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Join this host to an Active Directory domain."""

    configure_logging(logging.DEBUG if verbose else logging.WARNING)
    try:
        cli_context = build_cli_context(config_path, log_file=log_file, dry_run=dry_run)
    except SettingsError as exc:
        console.print(str(exc), style="red", markup=False)
        ctx.exit(2)

    try:
        run_log = cli_context.open_run_log()
    except OSError as exc:
        console.print(f"Cannot open run log: {exc}", style="red", markup=False)
        ctx.exit(1)

    with run_log:
        report = build_workflow(cli_context, run_log).run()

    if report.failure is not None:
        _logger.debug("Run aborted at step %s", report.failure.step)
    ctx.exit(report.exit_code)
