"""Command descriptors for every system tool the workflow calls.

Commands are built as an explicit argument vector and never pass through a
shell, so operator input such as an OU path with spaces or commas reaches
the tool as a single argument.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import Iterable, Sequence


@dataclass(frozen=True)
class Command:
    program: str
    args: tuple[str, ...] = ()

    @classmethod
    def of(cls, program: str, *args: str) -> "Command":
        return cls(program, tuple(args))

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def __str__(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True)
class CommandResult:
    command: Command
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


def apt_update() -> Command:
    return Command.of("apt", "update")


def apt_upgrade() -> Command:
    return Command.of("apt", "upgrade", "-y")


def apt_install(packages: Iterable[str]) -> Command:
    return Command.of("apt", "install", "-y", *packages)


def ping(address: str, count: int = 5) -> Command:
    return Command.of("ping", "-c", str(count), address)


def realm_discover(domain: str) -> Command:
    return Command.of("realm", "-v", "discover", domain)


def realm_join(admin_user: str, domain: str, organizational_unit: str) -> Command:
    return Command.of(
        "realm",
        "join",
        f"--user={admin_user}",
        domain,
        f"--computer-ou={organizational_unit}",
    )


def realm_permit_all() -> Command:
    return Command.of("realm", "permit", "--all")


def realm_deny_all() -> Command:
    return Command.of("realm", "deny", "--all")


def restart_service(unit: str) -> Command:
    return Command.of("systemctl", "restart", unit)


def adcli_info(domain: str) -> Command:
    return Command.of("adcli", "info", domain)


def enable_mkhomedir() -> Command:
    return Command.of("pam-auth-update", "--enable", "mkhomedir")


def reboot() -> Command:
    return Command.of("reboot")


def system_update() -> Sequence[Command]:
    """Package index refresh followed by a full upgrade."""
    return (apt_update(), apt_upgrade())
