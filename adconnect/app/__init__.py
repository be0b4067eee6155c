"""Application-level wiring for adconnect."""

from .config import ConnectorSettings, SettingsError, load_config, load_settings

__all__ = ["ConnectorSettings", "SettingsError", "load_config", "load_settings"]
