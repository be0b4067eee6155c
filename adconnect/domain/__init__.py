"""Domain layer for adconnect.

This package groups the pure models and error types that do not concern
infrastructure or interface details.
"""

from . import errors, models

__all__ = ["errors", "models"]
