from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pytest

from adconnect.app.config import ConnectorSettings
from adconnect.infrastructure.system import Command, CommandResult, HostFiles
from adconnect.services import Prompter, ProvisioningWorkflow

END_TO_END_ANSWERS = [
    "n",  # DNS
    "example.com",
    "EXAMPLE.COM",
    "jdoe",
    "OU=Servers,DC=example,DC=com",
    "y",  # configure permissions
    "2",
    "no",  # reboot
]


class FakeExecutor:
    """Records commands; any command whose rendering starts with a prefix in
    ``fail_on`` exits with status 1."""

    def __init__(self, fail_on: Iterable[str] = ()) -> None:
        self.fail_on = tuple(fail_on)
        self.commands: list[Command] = []

    def run(self, command: Command) -> CommandResult:
        self.commands.append(command)
        failed = any(str(command).startswith(prefix) for prefix in self.fail_on)
        return CommandResult(command, 1 if failed else 0)

    @property
    def rendered(self) -> list[str]:
        return [str(command) for command in self.commands]


class ScriptedPrompter(Prompter):
    def __init__(self, answers: Iterable[str]) -> None:
        self.answers = list(answers)
        self.questions: list[str] = []
        self.shown: list[str] = []

    def show(self, message: str) -> None:
        self.shown.append(message)

    def _read(self, text: str) -> str:
        self.questions.append(text)
        if not self.answers:
            raise AssertionError(f"No scripted answer left for prompt {text!r}")
        return self.answers.pop(0)


class RecordingReporter:
    def __init__(self) -> None:
        self.records: list[str] = []
        self.echoed: list[str] = []

    def record(self, message: str) -> None:
        self.records.append(message)

    def error(self, message: str) -> None:
        self.record(f"ERROR: {message}")

    def echo(self, message: str) -> None:
        self.echoed.append(message)

    @property
    def errors(self) -> list[str]:
        return [r for r in self.records if r.startswith("ERROR:")]


@pytest.fixture
def settings(tmp_path: Path) -> ConnectorSettings:
    return ConnectorSettings(
        log_file=tmp_path / "adconnect.log",
        resolv_conf=tmp_path / "resolv.conf",
        krb5_conf=tmp_path / "krb5.conf",
        sudoers_file=tmp_path / "sudoers.d" / "activedirectory",
    )


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def make_workflow(settings: ConnectorSettings, reporter: RecordingReporter):
    """Build a workflow around fakes; returns (workflow, executor, prompter)."""

    def factory(answers: Iterable[str], fail_on: Iterable[str] = ()):
        executor = FakeExecutor(fail_on)
        prompter = ScriptedPrompter(answers)
        workflow = ProvisioningWorkflow(
            settings=settings,
            reporter=reporter,
            executor=executor,
            files=HostFiles(settings),
            prompter=prompter,
        )
        return workflow, executor, prompter

    return factory


@pytest.fixture
def fake_executor() -> FakeExecutor:
    return FakeExecutor()
