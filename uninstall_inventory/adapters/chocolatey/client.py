"""
Chocolatey client — lists locally installed packages.

``choco list`` with ``--limit-output`` prints one ``id|version`` line per
installed package, in Chocolatey's own order.  Titles, descriptions and
URLs are not part of that output, so each package is enriched from the
``.nuspec`` manifest Chocolatey keeps in ``<install root>/lib/<id>/``.

Chocolatey 2.0 made ``list`` local-only and dropped ``--local-only``;
``initialize()`` asks for the version once and picks the right flags.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
import xml.etree.ElementTree as ET
from collections.abc import Callable, Sequence
from pathlib import Path

from pydantic import ValidationError

from uninstall_inventory.core.models.package import PackageRecord

logger = logging.getLogger(__name__)

Runner = Callable[[Sequence[str]], subprocess.CompletedProcess[str]]

_VERSION_RE = re.compile(r"(\d+)\.(\d+)(?:\.(\d+))?")

# nuspec <metadata> element → PackageRecord field
_NUSPEC_FIELDS = {
    "title": "title",
    "summary": "summary",
    "description": "description",
    "tags": "tags",
    "docsUrl": "docs_url",
    "projectUrl": "project_url",
}


class ManagerInvocationError(RuntimeError):
    """Raised when the manager cannot be run or reports a failure."""


def _run(args: Sequence[str]) -> subprocess.CompletedProcess[str]:
    """Run a command and return the result."""
    return subprocess.run(
        list(args),
        capture_output=True,
        text=True,
    )


class ChocolateyClient:
    """Thin wrapper over the ``choco`` command line.

    Args:
        executable: Full path of ``choco.exe``.
        install_root: Chocolatey install directory.  Defaults to the
            parent of the directory holding the executable.
        runner: Process runner, replaceable in tests.
    """

    def __init__(
        self,
        executable: str,
        install_root: str | None = None,
        runner: Runner | None = None,
    ):
        self._executable = executable
        self._install_root = install_root or str(Path(executable).resolve().parent.parent)
        self._runner = runner or _run
        self._list_args: list[str] | None = None

    @property
    def initialized(self) -> bool:
        return self._list_args is not None

    @property
    def install_root(self) -> str:
        return self._install_root

    def initialize(self) -> None:
        """Configure a local-only list invocation.  Runs once per client.

        Raises:
            ManagerInvocationError: If ``choco --version`` fails.  Nothing
                is cached in that case, so a later call tries again.
        """
        if self._list_args is not None:
            return

        output = self._invoke(["--version"])
        major = self._parse_major(output)
        if major is not None and major < 2:
            self._list_args = ["list", "--local-only", "--limit-output"]
        else:
            self._list_args = ["list", "--limit-output"]
        logger.debug("Chocolatey %s, listing with: %s", output.strip(), " ".join(self._list_args))

    def list_packages(self) -> list[PackageRecord]:
        """List installed packages, enriched from their manifests.

        Raises:
            ManagerInvocationError: If the list command fails.
        """
        self.initialize()
        output = self._invoke(self._list_args or [])
        records: list[PackageRecord] = []
        for line in output.splitlines():
            line = line.strip()
            if not line or "|" not in line:
                continue
            package_id, _, version = line.partition("|")
            try:
                records.append(self._build_record(package_id.strip(), version.strip()))
            except ValidationError as e:
                logger.warning("Skipping malformed list line %r: %s", line, e.errors()[0]["msg"])
        return records

    # ── Helpers ──────────────────────────────────────────────────

    def _invoke(self, args: list[str]) -> str:
        command = [self._executable, *args]
        try:
            result = self._runner(command)
        except OSError as e:
            raise ManagerInvocationError(f"Cannot run {self._executable}: {e}") from e

        if result.returncode != 0:
            detail = (result.stderr or result.stdout or "").strip()
            raise ManagerInvocationError(
                f"'{' '.join(command)}' exited with code {result.returncode}"
                + (f": {detail}" if detail else "")
            )
        return result.stdout or ""

    @staticmethod
    def _parse_major(version_output: str) -> int | None:
        match = _VERSION_RE.search(version_output)
        return int(match.group(1)) if match else None

    def _build_record(self, package_id: str, version: str) -> PackageRecord:
        package_dir = os.path.join(self._install_root, "lib", package_id)
        fields: dict[str, str | None] = {}
        if package_id:
            fields = self._read_nuspec(os.path.join(package_dir, f"{package_id}.nuspec"))

        return PackageRecord(
            package_id=package_id,
            version=version,
            install_location=package_dir if os.path.isdir(package_dir) else None,
            **fields,
        )

    @staticmethod
    def _read_nuspec(path: str) -> dict[str, str | None]:
        """Pull display metadata out of a nuspec, ignoring XML namespaces."""
        try:
            tree = ET.parse(path)
        except FileNotFoundError:
            logger.debug("No manifest at %s", path)
            return {}
        except (ET.ParseError, OSError) as e:
            logger.debug("Unreadable manifest %s: %s", path, e)
            return {}

        fields: dict[str, str | None] = {}
        for element in tree.getroot().iter():
            tag = element.tag.rsplit("}", 1)[-1]
            field = _NUSPEC_FIELDS.get(tag)
            if field is None or field in fields:
                continue
            text = (element.text or "").strip()
            fields[field] = text or None

        if fields.get("title") is None:
            fields.pop("title", None)
        return fields
