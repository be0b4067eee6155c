"""Executors that carry out :class:`Command` descriptors."""

from __future__ import annotations

import subprocess
from typing import Protocol

from adconnect.infrastructure.observability import Reporter, get_logger

from .commands import Command, CommandResult

_logger = get_logger(__name__)

COMMAND_NOT_FOUND = 127


class CommandExecutor(Protocol):
    def run(self, command: Command) -> CommandResult:
        ...


class SubprocessExecutor:
    """Run commands as child processes attached to the current terminal.

    Output is not captured: tools like ``realm join`` need the terminal to
    ask for the administrator password, and ``adcli info`` output is meant
    to be read by the operator.
    """

    def run(self, command: Command) -> CommandResult:
        _logger.debug("Running %s", command)
        try:
            completed = subprocess.run(command.argv, check=False)
        except FileNotFoundError:
            _logger.warning("Executable not found: %s", command.program)
            return CommandResult(command, COMMAND_NOT_FOUND)
        _logger.debug("%s exited with %d", command.program, completed.returncode)
        return CommandResult(command, completed.returncode)


class DryRunExecutor:
    """Record commands instead of running them; every command succeeds."""

    def __init__(self, reporter: Reporter) -> None:
        self._reporter = reporter
        self.commands: list[Command] = []

    def run(self, command: Command) -> CommandResult:
        self.commands.append(command)
        self._reporter.record(f"Would run: {command}")
        return CommandResult(command, 0)
