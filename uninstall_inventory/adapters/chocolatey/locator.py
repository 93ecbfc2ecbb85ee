"""
Manager locator — finds ``choco.exe`` once per process.

The installer puts Chocolatey's ``bin`` directory on PATH, so the
locator looks for the single PATH entry mentioning the brand name and
checks for the executable there.  If zero or several entries match, the
bare executable name is tried (relative to the working directory).

The answer is memoized for the life of the locator, with no refresh:
installing or removing Chocolatey mid-process is not noticed.  Tests
substitute their own locator through ``set_locator``.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Mapping

logger = logging.getLogger(__name__)


class ManagerLocator:
    """Lazily resolved, thread-safe path and availability of the manager.

    Args:
        environ: Environment to read (default: ``os.environ``).
        path_exists: File existence check (default: ``os.path.isfile``).
        brand: Case-insensitive substring identifying the install directory.
        executable: Executable file name.
        path_variable: Environment variable listing search directories.
        separator: Path-list separator (default: ``os.pathsep``).
    """

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        path_exists: Callable[[str], bool] | None = None,
        brand: str = "Chocolatey",
        executable: str = "choco.exe",
        path_variable: str = "PATH",
        separator: str = os.pathsep,
    ):
        self._environ = environ
        self._path_exists = path_exists or os.path.isfile
        self._brand = brand
        self._executable = executable
        self._path_variable = path_variable
        self._separator = separator

        self._lock = threading.Lock()
        self._available: bool | None = None
        self._full_path: str | None = None

    @property
    def resolved(self) -> bool:
        """Whether the one-time probe has already run."""
        return self._available is not None

    def is_available(self) -> bool:
        """Whether the executable was found.  Probes on first call only."""
        if self._available is None:
            self._resolve()
        return bool(self._available)

    @property
    def full_path(self) -> str | None:
        """Path of the executable, or None when it is not available."""
        if not self.is_available():
            return None
        return self._full_path

    def _resolve(self) -> None:
        with self._lock:
            if self._available is not None:
                return  # another thread got here first

            candidate = os.path.join(self._search_directory(), self._executable)
            found = self._path_exists(candidate)

            # Path before flag: readers check the flag without the lock
            self._full_path = candidate if found else None
            self._available = found

        if found:
            logger.debug("Found %s at %s", self._brand, candidate)
        else:
            logger.debug("%s not found (looked for %s)", self._brand, candidate)

    def _search_directory(self) -> str:
        env = os.environ if self._environ is None else self._environ
        search_path = env.get(self._path_variable, "")
        if not search_path.strip():
            return ""

        brand = self._brand.lower()
        matches = [d for d in search_path.split(self._separator) if brand in d.lower()]
        if len(matches) != 1:
            if matches:
                logger.debug("%d %s entries match %r, ignoring all", len(matches), self._path_variable, self._brand)
            return ""
        return matches[0].strip()


# ── Process-wide locator ────────────────────────────────────────

_locator: ManagerLocator | None = None
_locator_lock = threading.Lock()


def get_locator() -> ManagerLocator:
    """Return the shared locator, creating a default one on first use."""
    global _locator
    with _locator_lock:
        if _locator is None:
            _locator = ManagerLocator()
        return _locator


def set_locator(locator: ManagerLocator) -> None:
    """Install the shared locator (composition root or tests)."""
    global _locator
    with _locator_lock:
        _locator = locator


def reset_locator() -> None:
    """Drop the shared locator; the next ``get_locator`` probes again."""
    global _locator
    with _locator_lock:
        _locator = None
