"""Shared helpers for composing CLI command contexts.

This module centralises the wiring of settings, the run log and the host
adapters so commands and tests build the workflow the same way.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from adconnect.app.config import ConnectorSettings, load_settings
from adconnect.infrastructure.observability import RunLog
from adconnect.infrastructure.system import (
    CommandExecutor,
    DryRunExecutor,
    HostFiles,
    SubprocessExecutor,
)
from adconnect.services import Prompter, ProvisioningWorkflow


@dataclass(frozen=True)
class CLIContext:
    """Container for resolved settings and the run mode."""

    settings: ConnectorSettings
    dry_run: bool = False

    def open_run_log(self) -> RunLog:
        return RunLog(self.settings.log_file)


def build_cli_context(
    config_path: str | Path | None = None,
    *,
    log_file: str | Path | None = None,
    dry_run: bool = False,
) -> CLIContext:
    """Load settings and apply command-line overrides."""

    settings = load_settings(config_path)
    if log_file is not None:
        settings = settings.model_copy(update={"log_file": Path(log_file).expanduser()})
    return CLIContext(settings=settings, dry_run=dry_run)


def build_executor(cli_context: CLIContext, run_log: RunLog) -> CommandExecutor:
    """Return the executor for the requested run mode."""

    if cli_context.dry_run:
        return DryRunExecutor(run_log)
    return SubprocessExecutor()


def build_workflow(cli_context: CLIContext, run_log: RunLog) -> ProvisioningWorkflow:
    """Compose the workflow with the adapters for the requested run mode."""

    return ProvisioningWorkflow(
        settings=cli_context.settings,
        reporter=run_log,
        executor=build_executor(cli_context, run_log),
        files=HostFiles(
            cli_context.settings, dry_run=cli_context.dry_run, reporter=run_log
        ),
        prompter=Prompter(),
    )
