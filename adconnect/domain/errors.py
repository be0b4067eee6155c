"""Error types raised while provisioning a host."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from adconnect.infrastructure.system.commands import Command


class ConnectorError(Exception):
    """Base class for failures that end a provisioning run.

    The message is shown to the operator and written to the run log as the
    final ``ERROR:`` record.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputError(ConnectorError):
    """Raised when an answer is empty or malformed.

    The prompter catches this and asks again; it never ends a run.
    """


class ExternalCommandFailure(ConnectorError):
    """Raised when a delegated system tool exits with a non-zero status."""

    def __init__(self, message: str, command: "Command", returncode: int) -> None:
        super().__init__(message)
        self.command = command
        self.returncode = returncode


class FileOperationFailure(ConnectorError):
    """Raised when backing up or writing a configuration file fails."""

    def __init__(self, message: str, path: "Path") -> None:
        super().__init__(message)
        self.path = path


__all__ = [
    "ConnectorError",
    "ExternalCommandFailure",
    "FileOperationFailure",
    "InputError",
]
