"""
Entry converter — one Chocolatey package to one UninstallEntry.

Pure mapping, no I/O.  Safe to call from many worker threads at once.

Every entry gets two commands:
    - the uninstall command, which removes the package and runs its
      original uninstaller;
    - a junk action with ``-n --skipautouninstaller`` added, which only
      drops the package from Chocolatey.  By the time it runs, the first
      command has already deleted the original uninstaller, so running
      it again would fail or prompt.
"""

from __future__ import annotations

from urllib.parse import urlparse

from uninstall_inventory.core.models.command import ProcessStartCommand
from uninstall_inventory.core.models.confidence import ConfidenceCatalog, ConfidenceCollection
from uninstall_inventory.core.models.entry import (
    UNKNOWN_INSTALL_DATE,
    UNKNOWN_SIZE,
    UninstallEntry,
    UninstallerKind,
)
from uninstall_inventory.core.models.junk import RunProcessJunkAction
from uninstall_inventory.core.models.package import PackageRecord
from uninstall_inventory.core.services.display_version import cleanup_display_version
from uninstall_inventory.core.services.text_normalize import normalize_text

MANAGER_TITLE = "Chocolatey"
RATING_PREFIX = "Choco"
JUNK_DISPLAY_NAME = "Uninstall in Chocolatey"

UNINSTALL_ARGS = "uninstall {package_id} -y -r"
SKIP_UNINSTALLER_ARGS = " -n --skipautouninstaller"

# Raw weight added on top of the explicit connection
MANAGER_OWNED_WEIGHT = 4


def convert_package(
    record: PackageRecord,
    *,
    manager_path: str,
    install_root: str | None,
    catalog: ConfidenceCatalog,
) -> UninstallEntry:
    """Map a package record to an entry.

    Args:
        record: Package as listed by the manager.
        manager_path: Full path of ``choco.exe`` for the generated commands.
        install_root: Chocolatey's own install directory, used only for the
            ``chocolatey`` package itself.
        catalog: Source of canonical weights for well-known confidence labels.

    Raises:
        ValueError: If the record has no package id.
    """
    package_id = (record.package_id or "").strip()
    if not package_id:
        raise ValueError("Package record has no id")

    rating_id = f"{RATING_PREFIX} {package_id}"

    # Chocolatey lists itself; its files live in the install root, not lib/
    if record.title == MANAGER_TITLE:
        install_location = install_root
    else:
        install_location = record.install_location

    command = ProcessStartCommand(
        filename=manager_path,
        arguments=UNINSTALL_ARGS.format(package_id=package_id),
    )
    uninstall_command = command.to_command_line()

    junk_command = command.clone()
    junk_command.arguments += SKIP_UNINSTALLER_ARGS

    confidence = ConfidenceCollection()
    confidence.add(catalog.explicit_connection)
    confidence.add(MANAGER_OWNED_WEIGHT)

    junk = RunProcessJunkAction(
        entry_id=rating_id,
        display_name=JUNK_DISPLAY_NAME,
        command=junk_command.freeze(),
        confidence=confidence.freeze(),
    )

    return UninstallEntry(
        display_name=normalize_text(record.title) or package_id,
        display_version=cleanup_display_version(record.version),
        comment=normalize_text(_pick_comment(record)) or "",
        about_url=_first_absolute_url(record.docs_url, record.project_url),
        install_location=install_location,
        display_icon="",
        icon_bitmap=None,
        estimated_size=UNKNOWN_SIZE,
        install_date=UNKNOWN_INSTALL_DATE,
        rating_id=rating_id,
        uninstaller_kind=UninstallerKind.CHOCOLATEY,
        uninstall_command=uninstall_command,
        additional_actions=(junk,),
    )


def _pick_comment(record: PackageRecord) -> str | None:
    """Summary, else the first line of the description, else the tags."""
    if record.summary is not None:
        return record.summary
    if record.description is not None:
        return record.description.split("\n", 1)[0].rstrip("\r")
    return record.tags


def _first_absolute_url(*candidates: str | None) -> str | None:
    for url in candidates:
        if not url:
            continue
        parsed = urlparse(url.strip())
        if parsed.scheme and parsed.netloc:
            return parsed.geturl()
    return None
