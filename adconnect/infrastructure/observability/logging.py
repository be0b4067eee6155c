"""Logging utilities for adconnect.

This module provides centralised diagnostic logging configuration and helpers
for contextual logging. The operator-facing run log lives in
:mod:`adconnect.infrastructure.observability.run_log`.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator


# ---------------------------------------------------------------------------
# Context variables for structured logging
# ---------------------------------------------------------------------------

_log_context: ContextVar[dict[str, Any]] = ContextVar(
    "log_context", default={})


class ContextualFormatter(logging.Formatter):
    """Formatter that appends context fields to log messages."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = _log_context.get()
        message = super().format(record)
        if ctx:
            ctx_str = " ".join(f"{k}={v}" for k, v in ctx.items())
            message = f"{message} [{ctx_str}]"
        return message


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Temporarily add context fields to all log messages.

    Usage::

        with log_context(step="join-domain"):
            logger.debug("Running command")  # message includes context

    Fields are merged with any existing context and restored on exit.
    """
    current = _log_context.get()
    merged = {**current, **fields}
    token = _log_context.set(merged)
    try:
        yield
    finally:
        _log_context.reset(token)


# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

_handler: logging.StreamHandler | None = None


def configure_logging(level: int = logging.WARNING) -> None:
    """Configure diagnostic logging for the ``adconnect`` loggers.

    Call this at startup (CLI entry point); repeated calls only adjust the level. Diagnostics go to stderr so
    they never mix with the run log echoed on stdout.

    Args:
        level: Log level for adconnect loggers (default WARNING; the CLI
            lowers it to DEBUG with ``--verbose``).
    """
    global _handler
    logger = logging.getLogger("adconnect")
    logger.setLevel(level)
    if _handler is not None:
        # Follow stderr if it was replaced since the last call.
        _handler.setStream(sys.stderr)
        return

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(
        ContextualFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    logger.addHandler(_handler)
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given name.

    Args:
        name: Name of the logger (typically __name__).

    Returns:
        A logging.Logger instance.
    """
    return logging.getLogger(name)

