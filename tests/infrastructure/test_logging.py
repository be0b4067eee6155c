"""Tests for diagnostic logging helpers."""

import logging

from adconnect.infrastructure.observability.logging import (
    ContextualFormatter,
    log_context,
)


def _record(message: str) -> logging.LogRecord:
    return logging.LogRecord("adconnect.test", logging.INFO, __file__, 1, message, (), None)


def test_context_fields_are_appended():
    formatter = ContextualFormatter("%(message)s")

    with log_context(step="join-domain"):
        with log_context(attempt=1):
            inner = formatter.format(_record("Running command"))
        outer = formatter.format(_record("Running command"))

    assert inner == "Running command [step=join-domain attempt=1]"
    assert outer == "Running command [step=join-domain]"
    assert formatter.format(_record("plain")) == "plain"
