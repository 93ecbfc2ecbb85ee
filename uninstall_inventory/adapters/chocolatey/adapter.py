"""
Chocolatey adapter — packages installed through Chocolatey.

Flow of ``list_entries``:
    1. Locator says choco.exe is missing → empty list.
    2. One-time client initialization (local-only list flags).  The client
       belongs to the adapter, so this happens once per adapter instance;
       the composition root builds a single adapter per process.
    3. One ``choco list`` call.
    4. Records converted in a thread pool, written back by index so the
       result keeps Chocolatey's order.

A failed list call propagates to the caller.  Nothing about the failure
is remembered; the next call runs the list again.
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed

from uninstall_inventory.adapters.base import InventoryAdapter, ListProgress, ProgressCallback
from uninstall_inventory.adapters.chocolatey.client import ChocolateyClient
from uninstall_inventory.adapters.chocolatey.converter import convert_package
from uninstall_inventory.adapters.chocolatey.locator import ManagerLocator, get_locator
from uninstall_inventory.core.config.loader import ChocolateySettings, InventorySettings
from uninstall_inventory.core.models.confidence import ConfidenceCatalog, get_catalog
from uninstall_inventory.core.models.entry import UninstallEntry

logger = logging.getLogger(__name__)

ClientFactory = Callable[[str], ChocolateyClient]


class ChocolateyAdapter(InventoryAdapter):
    """Inventory adapter for Chocolatey packages.

    Args:
        settings: Inventory settings (default: built-in defaults).
        locator: Where to look for choco.exe (default: the shared locator).
        client_factory: Builds a client from the executable path.
        environ: Environment for ``ChocolateyInstall`` (default: ``os.environ``).
        catalog: Confidence catalog (default: the shared catalog).
    """

    def __init__(
        self,
        settings: InventorySettings | None = None,
        locator: ManagerLocator | None = None,
        client_factory: ClientFactory | None = None,
        environ: Mapping[str, str] | None = None,
        catalog: ConfidenceCatalog | None = None,
    ):
        self._settings = settings or InventorySettings()
        self._locator = locator
        self._client_factory = client_factory
        self._environ = environ
        self._client: ChocolateyClient | None = None
        self._catalog = catalog

    @property
    def name(self) -> str:
        return "chocolatey"

    @property
    def display_name(self) -> str:
        return "Chocolatey packages"

    @property
    def _choco(self) -> ChocolateySettings:
        return self._settings.chocolatey

    def is_enabled(self) -> bool:
        return self._settings.scan.chocolatey

    def is_available(self) -> bool:
        return self.locator.is_available()

    @property
    def locator(self) -> ManagerLocator:
        if self._locator is None:
            self._locator = get_locator()
        return self._locator

    @property
    def catalog(self) -> ConfidenceCatalog:
        return self._catalog if self._catalog is not None else get_catalog()

    def list_entries(
        self,
        progress_callback: ProgressCallback | None = None,
    ) -> list[UninstallEntry]:
        if not self.is_available():
            logger.info("Chocolatey not found, no packages to list")
            return []

        manager_path = self.locator.full_path or self._choco.executable
        client = self._get_client(manager_path)

        start = time.monotonic()
        records = client.list_packages()
        logger.debug("Retrieving package list took %dms", (time.monotonic() - start) * 1000)

        # Only the environment names the root for the self-listed package;
        # the client's path-derived guess is used for manifests, not here.
        install_root = self._install_root()
        catalog = self.catalog

        start = time.monotonic()
        results: list[UninstallEntry | None] = [None] * len(records)
        total = len(records)
        done = 0

        with ThreadPoolExecutor(max_workers=self._choco.max_workers) as pool:
            futures = {
                pool.submit(
                    convert_package,
                    record,
                    manager_path=manager_path,
                    install_root=install_root,
                    catalog=catalog,
                ): index
                for index, record in enumerate(records)
            }
            for future in as_completed(futures):
                index = futures[future]
                done += 1
                try:
                    results[index] = future.result()
                except ValueError as e:
                    logger.warning("Skipping package #%d (%r): %s", index, records[index].package_id, e)
                if progress_callback is not None:
                    progress_callback(ListProgress(current=done, total=total, label=self.display_name))

        entries = [entry for entry in results if entry is not None]
        logger.debug(
            "Converting %d packages took %dms",
            len(entries),
            (time.monotonic() - start) * 1000,
        )
        return entries

    def _get_client(self, manager_path: str) -> ChocolateyClient:
        """Client for ``manager_path``, created and initialized once per adapter."""
        if self._client is None:
            if self._client_factory is not None:
                self._client = self._client_factory(manager_path)
            else:
                self._client = ChocolateyClient(manager_path, install_root=self._install_root())
        return self._client

    def _install_root(self) -> str | None:
        env = os.environ if self._environ is None else self._environ
        return env.get(self._choco.install_root_variable) or None
