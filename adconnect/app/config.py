"""Configuration utilities for adconnect.

Settings are read from an optional JSON file and validated with pydantic.
Every key has a default matching a stock Debian/Ubuntu host, so the file is
only needed to relocate paths (for example in tests or when staging files
into a chroot).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

_REPO_ROOT = Path(__file__).resolve().parents[2]
_CONFIG_FILE = _REPO_ROOT / "config.json"

_PATH_KEYS = ("log_file", "resolv_conf", "krb5_conf", "sudoers_file")


class SettingsError(Exception):
    """Raised when the configuration file cannot be read or validated."""


class ConnectorSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    log_file: Path = Path("/var/log/AD_join_script.log")
    resolv_conf: Path = Path("/etc/resolv.conf")
    krb5_conf: Path = Path("/etc/krb5.conf")
    sudoers_file: Path = Path("/etc/sudoers.d/activedirectory")
    packages: list[str] = Field(
        default_factory=lambda: ["realmd", "sssd-tools", "sssd-ad", "adcli"]
    )
    sssd_service: str = "sssd"
    dns_probe_count: int = Field(default=5, ge=1)

    @field_validator("packages")
    @classmethod
    def _packages_not_empty(cls, value: list[str]) -> list[str]:
        if not value or any(not name.strip() for name in value):
            raise ValueError("packages must list at least one non-empty name")
        return value


def load_config(config_path: Path | str | None = None) -> Dict[str, Any]:
    """Load ``config.json`` if present and return it as a dictionary."""

    path = Path(config_path) if config_path is not None else _CONFIG_FILE
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_settings(config_path: Path | str | None = None) -> ConnectorSettings:
    """Return validated settings, resolving relative paths against the file.

    Args:
        config_path: Path to a JSON configuration file. When omitted the
            project-level ``config.json`` is used if it exists.

    Raises:
        SettingsError: If the file is not valid JSON or fails validation.
    """
    if config_path is not None and not Path(config_path).exists():
        raise SettingsError(f"Configuration file not found: {config_path}")
    try:
        raw = load_config(config_path)
    except (OSError, json.JSONDecodeError) as exc:
        raise SettingsError(f"Could not read configuration: {exc}") from exc
    if not isinstance(raw, dict):
        raise SettingsError("Configuration must be a JSON object")

    root = Path(config_path).parent if config_path is not None else _CONFIG_FILE.parent
    for key in _PATH_KEYS:
        value = raw.get(key)
        if isinstance(value, str) and not Path(value).is_absolute():
            raw[key] = str((root / value).resolve())

    try:
        return ConnectorSettings(**raw)
    except ValidationError as exc:
        raise SettingsError(f"Invalid configuration: {exc}") from exc


__all__ = ["ConnectorSettings", "SettingsError", "load_config", "load_settings"]
