"""Operator-facing run log.

Every message is appended to the log file with a local timestamp and echoed
to the console without one. The file is opened in append mode and never
truncated.
"""

from __future__ import annotations

import itertools
import logging
from pathlib import Path
from types import TracebackType
from typing import Protocol

from rich.console import Console

from .logging import get_logger

RECORD_FORMAT = "%(asctime)s - %(message)s"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_logger = get_logger(__name__)
_instances = itertools.count()


class Reporter(Protocol):
    """Sink for operator-facing messages."""

    def record(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def echo(self, message: str) -> None:
        ...


class RunLog:
    """Reporter passed to the workflow; exposes ``record`` and ``error``."""

    def __init__(self, log_file: Path | str, console: Console | None = None) -> None:
        self.log_file = Path(log_file)
        self._console = console or Console(highlight=False, emoji=False, soft_wrap=True)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        self._handler = logging.FileHandler(self.log_file, mode="a", encoding="utf-8")
        self._handler.setFormatter(logging.Formatter(RECORD_FORMAT, TIMESTAMP_FORMAT))
        # A private logger per instance keeps records out of the diagnostic tree.
        self._sink = logging.getLogger(f"adconnect.runlog.{next(_instances)}")
        self._sink.setLevel(logging.INFO)
        self._sink.propagate = False
        self._sink.addHandler(self._handler)

    def record(self, message: str) -> None:
        self._sink.info(message)
        self._console.print(message, markup=False)

    def error(self, message: str) -> None:
        self.record(f"ERROR: {message}")

    def echo(self, message: str) -> None:
        """Print to the console only, without a log file record."""
        self._console.print(message, markup=False)

    def close(self) -> None:
        self._sink.removeHandler(self._handler)
        self._handler.close()
        _logger.debug("Closed run log %s", self.log_file)

    def __enter__(self) -> "RunLog":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
