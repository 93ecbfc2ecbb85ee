"""Adapters — inventory sources.

Public re-exports for convenient access.
"""

from uninstall_inventory.adapters.base import InventoryAdapter, ListProgress, ProgressCallback
from uninstall_inventory.adapters.mock import MockAdapter
from uninstall_inventory.adapters.registry import AdapterRegistry

__all__ = [
    "AdapterRegistry",
    "InventoryAdapter",
    "ListProgress",
    "MockAdapter",
    "ProgressCallback",
]
