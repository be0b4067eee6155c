"""Configuration files written on the host during provisioning."""

from __future__ import annotations

import os
import shutil
import tempfile
import textwrap
from pathlib import Path
from typing import BinaryIO

from adconnect.app.config import ConnectorSettings
from adconnect.domain.errors import FileOperationFailure
from adconnect.infrastructure.observability import Reporter, get_logger

_logger = get_logger(__name__)

SUDOERS_MODE = 0o440

KERBEROS_TEMPLATE = textwrap.dedent(
    """\
    [libdefaults]
        default_realm = {realm}
        rdns = false
    """
)


def render_kerberos_config(realm: str) -> str:
    return KERBEROS_TEMPLATE.format(realm=realm)


def render_resolver_config(address: str) -> str:
    return f"nameserver {address}\n"


def backup_path(path: Path) -> Path:
    return path.with_name(path.name + ".bak")


def _replace_atomically(path: Path, content: str) -> None:
    """Write ``content`` to a sibling temp file, then rename it over ``path``."""
    # resolv.conf is often a symlink to the resolver's stub file; write the target.
    path = path.resolve()
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except OSError:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def _lacks_final_newline(handle: BinaryIO) -> bool:
    if handle.seek(0, os.SEEK_END) == 0:
        return False
    handle.seek(-1, os.SEEK_END)
    return handle.read(1) != b"\n"


class HostFiles:
    """Writes the resolver, Kerberos and sudoers files named in the settings.

    With ``reporter`` set and ``dry_run`` enabled, every operation is
    recorded as ``Would ...`` and the filesystem is left alone.
    """

    def __init__(
        self,
        settings: ConnectorSettings,
        *,
        dry_run: bool = False,
        reporter: Reporter | None = None,
    ) -> None:
        if dry_run and reporter is None:
            raise ValueError("dry_run requires a reporter")
        self._settings = settings
        self._dry_run_reporter = reporter if dry_run else None

    @property
    def resolv_conf(self) -> Path:
        return self._settings.resolv_conf

    @property
    def krb5_conf(self) -> Path:
        return self._settings.krb5_conf

    @property
    def sudoers_file(self) -> Path:
        return self._settings.sudoers_file

    def _would(self, message: str) -> bool:
        if self._dry_run_reporter is None:
            return False
        self._dry_run_reporter.record(f"Would {message}")
        return True

    def write_resolver(self, address: str) -> None:
        path = self.resolv_conf
        if self._would(f"write 'nameserver {address}' to {path}"):
            return
        try:
            _replace_atomically(path, render_resolver_config(address))
        except OSError as exc:
            _logger.debug("Resolver write failed: %s", exc)
            raise FileOperationFailure(
                f"Failed to configure DNS in {path}.", path
            ) from exc

    def backup(self, path: Path) -> Path | None:
        """Copy ``path`` to its ``.bak`` sibling if it exists."""
        if not path.exists():
            return None
        target = backup_path(path)
        if self._would(f"back up {path} to {target}"):
            return target
        try:
            # copy2 would copy into a directory instead of creating the .bak file.
            if target.is_dir():
                raise IsADirectoryError(f"{target} is a directory")
            shutil.copy2(path, target)
        except OSError as exc:
            raise FileOperationFailure(
                f"Failed to back up existing {path}", path
            ) from exc
        return target

    def write_kerberos(self, realm: str) -> None:
        path = self.krb5_conf
        if self._would(f"write Kerberos configuration for {realm} to {path}"):
            return
        try:
            _replace_atomically(path, render_kerberos_config(realm))
        except OSError as exc:
            raise FileOperationFailure(
                f"Failed to write Kerberos configuration to {path}", path
            ) from exc

    def write_sudoers(self, entry: str, *, overwrite: bool) -> None:
        """Append ``entry`` (or replace the file with it) with mode 0440.

        The mode is applied before anything is written. When appending to a
        file whose last line is unterminated, a newline is written first so
        the new entry stays on its own line.
        """
        path = self.sudoers_file
        verb = "replace" if overwrite else "append to"
        if self._would(f"{verb} {path}: {entry}"):
            return
        flags = os.O_RDWR | os.O_CREAT | (os.O_TRUNC if overwrite else os.O_APPEND)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(path, flags, SUDOERS_MODE)
            with os.fdopen(fd, "r+b") as handle:
                os.fchmod(handle.fileno(), SUDOERS_MODE)
                data = entry.encode("utf-8") + b"\n"
                if not overwrite and _lacks_final_newline(handle):
                    data = b"\n" + data
                handle.write(data)
        except OSError as exc:
            raise FileOperationFailure(
                f"Failed to write sudo rules to {path}", path
            ) from exc
