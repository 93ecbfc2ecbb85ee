"""Configuration — inventory.yml loading and settings models."""

from uninstall_inventory.core.config.loader import (
    ConfigError,
    InventorySettings,
    find_settings_file,
    load_settings,
)

__all__ = [
    "ConfigError",
    "InventorySettings",
    "find_settings_file",
    "load_settings",
]
