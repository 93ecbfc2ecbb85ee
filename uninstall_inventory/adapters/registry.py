"""
Adapter registry — lookup and status for inventory adapters.

The consumer registers the adapters it wants and asks the registry for
their status or their entries.  Merging entries from several sources is
the consumer's business, not the registry's.
"""

from __future__ import annotations

import logging
from typing import Any

from uninstall_inventory.adapters.base import InventoryAdapter, ProgressCallback
from uninstall_inventory.core.models.entry import UninstallEntry

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Named collection of inventory adapters, in registration order."""

    def __init__(self) -> None:
        self._adapters: dict[str, InventoryAdapter] = {}

    def register(self, adapter: InventoryAdapter) -> None:
        """Register an adapter, replacing any adapter with the same name."""
        name = adapter.name
        if name in self._adapters:
            logger.warning("Overwriting existing adapter: %s", name)
        self._adapters[name] = adapter
        logger.debug("Registered adapter: %s", name)

    def unregister(self, name: str) -> None:
        """Remove an adapter from the registry."""
        self._adapters.pop(name, None)

    def get(self, name: str) -> InventoryAdapter | None:
        """Look up an adapter by name."""
        return self._adapters.get(name)

    def list_adapters(self) -> list[str]:
        """List all registered adapter names."""
        return list(self._adapters.keys())

    def adapter_status(self) -> dict[str, dict[str, Any]]:
        """Get enabled/available status of all registered adapters."""
        status = {}
        for name, adapter in self._adapters.items():
            enabled, display_name = adapter.listing_info()
            try:
                available = adapter.is_available()
            except Exception as e:
                logger.warning("Availability check for %s failed: %s", name, e)
                available = False
            status[name] = {
                "name": name,
                "display_name": display_name,
                "enabled": enabled,
                "available": available,
                "type": adapter.__class__.__name__,
            }
        return status

    def list_entries(
        self,
        name: str,
        progress_callback: ProgressCallback | None = None,
    ) -> list[UninstallEntry]:
        """Entries of one adapter; empty when the adapter is disabled.

        Raises:
            KeyError: If no adapter is registered under ``name``.
        """
        adapter = self._adapters.get(name)
        if adapter is None:
            raise KeyError(f"No adapter registered for '{name}'")
        if not adapter.is_enabled():
            logger.info("Adapter %s is disabled, skipping", name)
            return []
        return adapter.list_entries(progress_callback)
