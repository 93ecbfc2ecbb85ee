"""
Domain models — Pydantic types for the uninstall inventory.

All models are re-exported here for convenient access:

    from uninstall_inventory.core.models import UninstallEntry, RunProcessJunkAction
"""

from uninstall_inventory.core.models.command import FrozenProcessStartCommand, ProcessStartCommand
from uninstall_inventory.core.models.confidence import (
    ConfidenceCatalog,
    ConfidenceCollection,
    ConfidenceLevel,
    FrozenConfidenceCollection,
    ConfidenceRecord,
)
from uninstall_inventory.core.models.entry import (
    UNKNOWN_INSTALL_DATE,
    UNKNOWN_SIZE,
    UninstallEntry,
    UninstallerKind,
)
from uninstall_inventory.core.models.junk import JunkAction, RunProcessJunkAction
from uninstall_inventory.core.models.package import PackageRecord
from uninstall_inventory.core.models.receipt import Receipt

__all__ = [
    "UNKNOWN_INSTALL_DATE",
    "UNKNOWN_SIZE",
    # confidence.py
    "ConfidenceCatalog",
    "ConfidenceCollection",
    "ConfidenceLevel",
    "ConfidenceRecord",
    "FrozenConfidenceCollection",
    # junk.py
    "JunkAction",
    # package.py
    "PackageRecord",
    # command.py
    "FrozenProcessStartCommand",
    "ProcessStartCommand",
    # receipt.py
    "Receipt",
    "RunProcessJunkAction",
    # entry.py
    "UninstallEntry",
    "UninstallerKind",
]
