"""Tests for the operator run log."""

import io
import re
from pathlib import Path

from rich.console import Console

from adconnect.infrastructure.observability import RunLog

STAMPED = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2} - (.*)$")


def _console(buffer: io.StringIO) -> Console:
    return Console(file=buffer, highlight=False, emoji=False, soft_wrap=True)


def test_record_stamps_file_and_echoes_plain(tmp_path: Path):
    log_file = tmp_path / "logs" / "join.log"
    buffer = io.StringIO()

    with RunLog(log_file, console=_console(buffer)) as run_log:
        run_log.record("Updating system packages...")
        run_log.error("System update failed.")

    lines = log_file.read_text(encoding="utf-8").splitlines()
    messages = [STAMPED.match(line).group(1) for line in lines]
    assert messages == ["Updating system packages...", "ERROR: System update failed."]
    assert buffer.getvalue().splitlines() == messages


def test_log_is_appended_across_runs(tmp_path: Path):
    log_file = tmp_path / "join.log"
    log_file.write_text("previous run\n", encoding="utf-8")

    with RunLog(log_file, console=_console(io.StringIO())) as run_log:
        run_log.record("Script initiated.")

    lines = log_file.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "previous run"
    assert lines[1].endswith(" - Script initiated.")


def test_echo_skips_the_file(tmp_path: Path):
    log_file = tmp_path / "join.log"
    buffer = io.StringIO()

    with RunLog(log_file, console=_console(buffer)) as run_log:
        run_log.echo("Please follow the instructions.")

    assert log_file.read_text(encoding="utf-8") == ""
    assert "Please follow the instructions." in buffer.getvalue()


def test_markup_is_not_interpreted(tmp_path: Path):
    buffer = io.StringIO()

    with RunLog(tmp_path / "join.log", console=_console(buffer)) as run_log:
        run_log.record("[libdefaults] %Sales\\ Team")

    assert buffer.getvalue().strip() == "[libdefaults] %Sales\\ Team"
