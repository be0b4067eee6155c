"""Infrastructure layer for adconnect.

Holds adapters for the host system (commands and configuration files) and
for observability.
"""

from . import observability, system

__all__ = ["observability", "system"]
