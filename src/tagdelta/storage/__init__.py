"""Persistence of user configuration."""

from tagdelta.storage.config_store import CONFIG_FILENAME, ConfigStore

__all__ = ["ConfigStore", "CONFIG_FILENAME"]
