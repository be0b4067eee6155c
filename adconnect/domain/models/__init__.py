"""Domain models package.

This package contains the value types exchanged between the provisioning
workflow and its collaborators.
"""

from .access import AccessChoice, AccessPolicy, escape_group_name, sudoers_entry
from .run import RunConfig, RunReport, StepResult, StepStatus, require_value

__all__ = [
    "AccessChoice",
    "AccessPolicy",
    "RunConfig",
    "RunReport",
    "StepResult",
    "StepStatus",
    "escape_group_name",
    "require_value",
    "sudoers_entry",
]
