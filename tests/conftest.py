"""
Shared test fixtures and configuration.
"""

import subprocess
from collections.abc import Sequence

import pytest

from uninstall_inventory.adapters.chocolatey.locator import reset_locator
from uninstall_inventory.core.models.confidence import ConfidenceCatalog, set_catalog
from uninstall_inventory.core.models.package import PackageRecord


@pytest.fixture(autouse=True)
def _reset_process_state():
    """Every test starts with a fresh locator and default catalog."""
    reset_locator()
    set_catalog(None)
    yield
    reset_locator()
    set_catalog(None)


@pytest.fixture
def catalog() -> ConfidenceCatalog:
    return ConfidenceCatalog()


@pytest.fixture
def make_record():
    """Build a PackageRecord with sensible defaults."""

    def _make(package_id: str = "foo", **kwargs) -> PackageRecord:
        kwargs.setdefault("version", "1.0.0")
        return PackageRecord(package_id=package_id, **kwargs)

    return _make


class FakeRunner:
    """Stands in for subprocess.run: canned output per command tail."""

    def __init__(self, responses: dict[str, tuple[int, str, str]] | None = None):
        self.responses = responses or {}
        self.calls: list[list[str]] = []

    def __call__(self, args: Sequence[str]) -> subprocess.CompletedProcess[str]:
        args = list(args)
        self.calls.append(args)
        key = " ".join(args[1:])
        code, out, err = self.responses.get(key, (0, "", ""))
        return subprocess.CompletedProcess(args, code, stdout=out, stderr=err)


@pytest.fixture
def fake_runner():
    return FakeRunner
