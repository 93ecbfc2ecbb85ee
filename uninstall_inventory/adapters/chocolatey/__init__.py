"""Chocolatey adapter — locator, client, converter, and the adapter itself."""

from uninstall_inventory.adapters.chocolatey.adapter import ChocolateyAdapter
from uninstall_inventory.adapters.chocolatey.client import ChocolateyClient, ManagerInvocationError
from uninstall_inventory.adapters.chocolatey.converter import convert_package
from uninstall_inventory.adapters.chocolatey.locator import (
    ManagerLocator,
    get_locator,
    reset_locator,
    set_locator,
)

__all__ = [
    "ChocolateyAdapter",
    "ChocolateyClient",
    "ManagerInvocationError",
    "ManagerLocator",
    "convert_package",
    "get_locator",
    "reset_locator",
    "set_locator",
]
