"""Service layer modules for adconnect."""

from .prompts import Prompter  # noqa: F401
from .workflow import STEPS, ProvisioningWorkflow  # noqa: F401

__all__ = ["Prompter", "ProvisioningWorkflow", "STEPS"]
