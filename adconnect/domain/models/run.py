"""Run-scoped models: collected answers and per-step outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from adconnect.domain.errors import InputError

from .access import AccessPolicy


def require_value(value: str | None, label: str) -> str:
    """Return ``value`` stripped, raising InputError when it is blank."""
    if value is None or not value.strip():
        raise InputError(f"{label} cannot be empty. Please provide a valid value.")
    return value.strip()


@dataclass(frozen=True)
class RunConfig:
    """Answers collected from the operator during a run.

    Fields are filled in as the workflow reaches the step that needs them;
    each update produces a new instance via :meth:`with_values`.
    """

    domain: str | None = None
    realm: str | None = None
    configure_dns: bool = False
    dns_server: str | None = None
    admin_user: str | None = None
    organizational_unit: str | None = None
    access_policy: AccessPolicy | None = None

    def with_values(self, **changes: Any) -> "RunConfig":
        return replace(self, **changes)


class StepStatus(str, Enum):
    """Outcome of a single workflow step."""

    SUCCEEDED = "succeeded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class StepResult:
    step: str
    status: StepStatus
    message: str | None = None

    @property
    def failed(self) -> bool:
        return self.status is StepStatus.FAILED


@dataclass
class RunReport:
    """Ordered step results of one run and the exit code they imply."""

    results: list[StepResult] = field(default_factory=list)
    config: RunConfig = field(default_factory=RunConfig)
    reboot_requested: bool = False

    def add(self, result: StepResult) -> None:
        self.results.append(result)

    @property
    def failure(self) -> StepResult | None:
        return next((r for r in self.results if r.failed), None)

    @property
    def succeeded(self) -> bool:
        return self.failure is None

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1

    def status_of(self, step: str) -> StepStatus | None:
        for result in self.results:
            if result.step == step:
                return result.status
        return None

    @property
    def executed_steps(self) -> list[str]:
        return [r.step for r in self.results]
