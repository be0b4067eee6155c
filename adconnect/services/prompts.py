"""Validated interactive input.

Every prompt loops until it receives an acceptable answer; there is no retry
limit. Rejections are reported on the console and never end the run.
"""

from __future__ import annotations

import ipaddress
from typing import Callable, Optional, Sequence

import click

from adconnect.domain.errors import InputError
from adconnect.domain.models import require_value
from adconnect.infrastructure.observability import get_logger

_logger = get_logger(__name__)

YES_TOKENS = frozenset({"yes", "y", "YES", "Y"})
NO_TOKENS = frozenset({"no", "n", "NO", "N"})

INVALID_CONFIRMATION = "Invalid input. Please enter 'yes' or 'no'."


def parse_confirmation(answer: str) -> Optional[bool]:
    """Map a yes/no token to a bool, or None when it is not recognised."""
    if answer in YES_TOKENS:
        return True
    if answer in NO_TOKENS:
        return False
    return None


def validate_address(value: str) -> str:
    try:
        return str(ipaddress.ip_address(value))
    except ValueError as exc:
        raise InputError(f"'{value}' is not a valid IP address.") from exc


class Prompter:
    """Reads operator answers from the terminal through click."""

    def ask(self, text: str, validate: Callable[[str], str] | None = None) -> str:
        """Return a non-empty (and optionally validated) stripped answer."""
        while True:
            try:
                value = require_value(self._read(text), "Input")
                return validate(value) if validate else value
            except InputError as exc:
                _logger.debug("Rejected answer for %r: %s", text, exc.message)
                self.show(exc.message)

    def ask_address(self, text: str) -> str:
        return self.ask(text, validate=validate_address)

    def confirm(self, text: str) -> bool:
        while True:
            answer = parse_confirmation(self.ask(text))
            if answer is not None:
                return answer
            self.show(INVALID_CONFIRMATION)

    def choose(
        self,
        text: str,
        options: Sequence[str],
        *,
        menu: Sequence[str] = (),
        invalid_message: str = "Invalid input.",
    ) -> str:
        """Show ``menu`` and read until the answer is one of ``options``."""
        while True:
            for line in menu:
                self.show(line)
            answer = self._read(text).strip()
            if answer in options:
                return answer
            self.show(invalid_message)

    def show(self, message: str) -> None:
        click.echo(message)

    def _read(self, text: str) -> str:
        return click.prompt(text, default="", show_default=False)
