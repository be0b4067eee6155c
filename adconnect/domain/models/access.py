"""Access-control policy applied to domain principals after the join."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DOMAIN_USERS_GROUP = "Domain Users"


class AccessChoice(str, Enum):
    """Menu options for sudo and login access, keyed by the digit typed."""

    ALL_SUDO_AND_LOGIN = "1"
    ALL_LOGIN_ONLY = "2"
    GROUP_SUDO = "3"
    DENY_ALL = "4"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    AccessChoice.ALL_SUDO_AND_LOGIN: "Grant sudo and login access to all domain users",
    AccessChoice.ALL_LOGIN_ONLY: "Grant login access (no sudo) to all domain users",
    AccessChoice.GROUP_SUDO: "Grant sudo access to a specific AD group",
    AccessChoice.DENY_ALL: "No access for anyone in AD",
}


def escape_group_name(group: str) -> str:
    """Escape spaces so the group name is a single sudoers token."""
    return group.replace(" ", "\\ ")


def sudoers_entry(group: str) -> str:
    """Return the sudoers directive granting full sudo rights to ``group``."""
    return f"%{escape_group_name(group)} ALL=(ALL:ALL) ALL"


@dataclass(frozen=True)
class AccessPolicy:
    """The access-control variant selected for this host.

    Only ``GROUP_SUDO`` carries a group name; the other variants derive
    everything they need from the joined domain.
    """

    choice: AccessChoice
    group_name: str | None = None

    def __post_init__(self) -> None:
        if self.choice is AccessChoice.GROUP_SUDO and not self.group_name:
            raise ValueError("GROUP_SUDO requires a group name")

    @property
    def permits_login(self) -> bool:
        """True when all domain principals may log in."""
        return self.choice is not AccessChoice.DENY_ALL

    @property
    def overwrites_sudoers(self) -> bool:
        # Option 1 appends, option 3 replaces the file.
        return self.choice is AccessChoice.GROUP_SUDO

    def sudo_group(self, domain: str) -> str | None:
        """Return the group granted sudo rights, or None for no sudo rule."""
        if self.choice is AccessChoice.ALL_SUDO_AND_LOGIN:
            return f"{DOMAIN_USERS_GROUP}@{domain}"
        if self.choice is AccessChoice.GROUP_SUDO:
            return self.group_name
        return None

    def sudoers_line(self, domain: str) -> str | None:
        group = self.sudo_group(domain)
        return sudoers_entry(group) if group is not None else None
