"""
Adapter base — the contract between inventory sources and their consumer.

Each adapter knows one source of installed software (a package manager,
a launcher, an app store) and turns it into UninstallEntry records.  The
aggregation layer only talks to adapters through this interface.

To create a new adapter:
    1. Subclass InventoryAdapter
    2. Implement name, display_name, is_enabled, is_available, list_entries
    3. Register it in the AdapterRegistry
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable

from pydantic import BaseModel

from uninstall_inventory.core.models.entry import UninstallEntry


class ListProgress(BaseModel):
    """Progress report sent while an adapter builds its entry list."""

    current: int
    total: int
    label: str = ""


ProgressCallback = Callable[[ListProgress], None]


class InventoryAdapter(ABC):
    """Abstract base class for all inventory adapters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'chocolatey')."""

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable name shown while scanning."""

    @abstractmethod
    def is_enabled(self) -> bool:
        """Whether the user wants this source scanned."""

    @abstractmethod
    def is_available(self) -> bool:
        """Whether the underlying tool exists on this machine.

        Should be cheap after the first call and never raise.
        """

    @abstractmethod
    def list_entries(
        self,
        progress_callback: ProgressCallback | None = None,
    ) -> list[UninstallEntry]:
        """Return the entries of this source, in the source's own order.

        An unavailable source yields an empty list, not an error.
        """

    def listing_info(self) -> tuple[bool, str]:
        """``(enabled, display_name)`` for scanner selection screens."""
        return self.is_enabled(), self.display_name

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
