"""
adconnect package initializer.

This package joins a Linux host to an Active Directory domain by driving the
realmd/SSSD/adcli toolchain in a fixed, fail-fast order.

The package exposes a ``__version__`` attribute indicating the installed
version of adconnect. The version is read from pyproject.toml via
importlib.metadata – this is the single source of truth.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("adconnect")
except PackageNotFoundError:
    # Package is not installed (running from source without pip install -e .)
    __version__ = "0.0.0.dev"

__all__: list[str] = ["__version__"]
