"""Adapters for the host operating system."""

from .commands import Command, CommandResult
from .executor import CommandExecutor, DryRunExecutor, SubprocessExecutor
from .files import HostFiles

__all__ = [
    "Command",
    "CommandExecutor",
    "CommandResult",
    "DryRunExecutor",
    "HostFiles",
    "SubprocessExecutor",
]
