"""CLI interface facades for adconnect.

This package is the home for all Click commands. Run
``python -m adconnect.interfaces.cli`` or the installed ``adconnect`` script.
"""

from .__main__ import cli
from .join import join
from .steps import steps

__all__ = ["cli", "join", "steps"]
