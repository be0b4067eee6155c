"""Observability and logging facades."""

from .logging import (
    configure_logging,
    get_logger,
    log_context,
)
from .run_log import Reporter, RunLog

__all__ = [
    "Reporter",
    "RunLog",
    "configure_logging",
    "get_logger",
    "log_context",
]
