"""
UninstallEntry — the canonical record of one removable application.

Every adapter, whatever it scans, produces these.  Entries are built in
one go and frozen; fields an adapter cannot fill use the sentinels
below instead of being left unset.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, SerializeAsAny

from uninstall_inventory.core.models.junk import JunkAction

UNKNOWN_SIZE = 0
UNKNOWN_INSTALL_DATE = datetime.min


class UninstallerKind(StrEnum):
    """Which adapter (or installer technology) produced an entry."""

    UNKNOWN = "unknown"
    MSIEXEC = "msiexec"
    INNO_SETUP = "inno_setup"
    NSIS = "nsis"
    STEAM = "steam"
    STORE_APP = "store_app"
    CHOCOLATEY = "chocolatey"


class UninstallEntry(BaseModel):
    """A removable application, normalized across sources."""

    model_config = ConfigDict(frozen=True)

    # ── Identity ─────────────────────────────────────────────────
    display_name: str
    display_version: str = ""
    rating_id: str
    uninstaller_kind: UninstallerKind = UninstallerKind.UNKNOWN

    # ── Description ──────────────────────────────────────────────
    comment: str = ""
    about_url: str | None = None
    install_location: str | None = None

    # ── Not reported by every source ─────────────────────────────
    display_icon: str = ""
    icon_bitmap: bytes | None = None
    estimated_size: int = UNKNOWN_SIZE      # bytes
    install_date: datetime = UNKNOWN_INSTALL_DATE

    # ── Removal ──────────────────────────────────────────────────
    uninstall_command: str
    additional_actions: tuple[SerializeAsAny[JunkAction], ...] = ()

    @property
    def has_install_date(self) -> bool:
        return self.install_date != UNKNOWN_INSTALL_DATE

    @property
    def has_size(self) -> bool:
        return self.estimated_size != UNKNOWN_SIZE
