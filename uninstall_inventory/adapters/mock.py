"""
Mock adapter — test double for the inventory adapter protocol.

Returns a fixed entry list without touching any external tool.  Can be
configured to be unavailable, disabled, or to fail on listing.
"""

from __future__ import annotations

from uninstall_inventory.adapters.base import InventoryAdapter, ListProgress, ProgressCallback
from uninstall_inventory.core.models.entry import UninstallEntry


class MockAdapter(InventoryAdapter):
    """Configurable in-memory adapter."""

    def __init__(
        self,
        adapter_name: str = "mock",
        entries: list[UninstallEntry] | None = None,
        available: bool = True,
        enabled: bool = True,
        display_name: str = "Mock source",
    ):
        self._name = adapter_name
        self._entries = list(entries or [])
        self._available = available
        self._enabled = enabled
        self._display_name = display_name
        self._error: Exception | None = None
        self._call_count = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def display_name(self) -> str:
        return self._display_name

    @property
    def call_count(self) -> int:
        """Number of times list_entries has been called."""
        return self._call_count

    def is_enabled(self) -> bool:
        return self._enabled

    def is_available(self) -> bool:
        return self._available

    def set_failure(self, error: Exception) -> None:
        """Make the next list_entries calls raise ``error``."""
        self._error = error

    def list_entries(
        self,
        progress_callback: ProgressCallback | None = None,
    ) -> list[UninstallEntry]:
        self._call_count += 1
        if self._error is not None:
            raise self._error
        if not self._available:
            return []
        if progress_callback is not None:
            total = len(self._entries)
            for i, entry in enumerate(self._entries, start=1):
                progress_callback(ListProgress(current=i, total=total, label=entry.display_name))
        return list(self._entries)

    def reset(self) -> None:
        """Clear the call counter and any configured failure."""
        self._call_count = 0
        self._error = None
