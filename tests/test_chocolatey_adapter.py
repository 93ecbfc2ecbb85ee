"""
Tests for the Chocolatey adapter — availability, ordering, failures.
"""

import random
import time

import pytest

from uninstall_inventory.adapters.chocolatey import adapter as adapter_module
from uninstall_inventory.adapters.chocolatey.adapter import ChocolateyAdapter
from uninstall_inventory.adapters.chocolatey.client import ManagerInvocationError
from uninstall_inventory.adapters.chocolatey.locator import ManagerLocator, set_locator
from uninstall_inventory.core.config.loader import InventorySettings
from uninstall_inventory.core.models import ConfidenceCatalog, PackageRecord
from uninstall_inventory.core.models.confidence import EXPLICIT_CONNECTION, set_catalog


class FakeClient:
    """In-memory stand-in for ChocolateyClient."""

    def __init__(self, records=None, error=None):
        self.records = list(records or [])
        self.error = error
        self.list_calls = 0

    def list_packages(self):
        self.list_calls += 1
        if self.error is not None:
            raise self.error
        return list(self.records)


def _locator(available: bool) -> ManagerLocator:
    return ManagerLocator(environ={"PATH": ""}, path_exists=lambda p: available)


def _adapter(client, available=True, settings=None, environ=None) -> ChocolateyAdapter:
    return ChocolateyAdapter(
        settings=settings,
        locator=_locator(available),
        client_factory=lambda path: client,
        environ=environ if environ is not None else {},
    )


def _records(n: int) -> list[PackageRecord]:
    return [PackageRecord(package_id=f"pkg-{i:03d}", version="1.0") for i in range(n)]


# ── Contract ─────────────────────────────────────────────────────────


class TestListingInfo:
    def test_enabled_by_default(self):
        a = _adapter(FakeClient())
        assert a.name == "chocolatey"
        assert a.listing_info() == (True, "Chocolatey packages")

    def test_disabled_by_settings(self):
        settings = InventorySettings.model_validate({"scan": {"chocolatey": False}})
        assert _adapter(FakeClient(), settings=settings).listing_info()[0] is False


class TestAvailability:
    def test_unavailable_returns_empty(self):
        client = FakeClient(records=_records(3))
        a = _adapter(client, available=False)
        assert a.list_entries() == []
        assert client.list_calls == 0

    def test_uses_shared_locator_by_default(self):
        set_locator(_locator(False))
        a = ChocolateyAdapter(client_factory=lambda path: FakeClient(records=_records(1)))
        assert not a.is_available()
        assert a.list_entries() == []


# ── Listing ──────────────────────────────────────────────────────────


class TestListEntries:
    def test_converts_all_records(self):
        a = _adapter(FakeClient(records=_records(5)))
        entries = a.list_entries()
        assert [e.rating_id for e in entries] == [f"Choco pkg-{i:03d}" for i in range(5)]
        assert all(e.uninstall_command.startswith("choco.exe uninstall") for e in entries)

    def test_empty_manager_list(self):
        assert _adapter(FakeClient()).list_entries() == []

    @pytest.mark.parametrize("seed", [1, 2, 3])
    def test_order_preserved_under_random_latency(self, monkeypatch, seed):
        rng = random.Random(seed)
        delays = {f"pkg-{i:03d}": rng.uniform(0, 0.01) for i in range(40)}
        real_convert = adapter_module.convert_package

        def slow_convert(record, **kwargs):
            time.sleep(delays[record.package_id])
            return real_convert(record, **kwargs)

        monkeypatch.setattr(adapter_module, "convert_package", slow_convert)
        settings = InventorySettings.model_validate({"chocolatey": {"max_workers": 8}})
        entries = _adapter(FakeClient(records=_records(40)), settings=settings).list_entries()
        assert [e.rating_id for e in entries] == [f"Choco pkg-{i:03d}" for i in range(40)]

    def test_malformed_record_is_skipped(self):
        records = _records(3)
        records.insert(1, PackageRecord.model_construct(package_id="", title="", version=""))
        entries = _adapter(FakeClient(records=records)).list_entries()
        assert [e.rating_id for e in entries] == ["Choco pkg-000", "Choco pkg-001", "Choco pkg-002"]

    def test_self_listing_uses_install_root_variable(self):
        record = PackageRecord(package_id="chocolatey", title="Chocolatey", version="2.2.2")
        a = _adapter(FakeClient(records=[record]), environ={"ChocolateyInstall": r"C:\ProgramData\chocolatey"})
        (entry,) = a.list_entries()
        assert entry.install_location == r"C:\ProgramData\chocolatey"

    def test_self_listing_without_install_root_variable(self):
        record = PackageRecord(package_id="chocolatey", title="Chocolatey", version="2.2.2")
        (entry,) = _adapter(FakeClient(records=[record]), environ={}).list_entries()
        assert entry.install_location is None

    def test_uses_shared_catalog_by_default(self):
        set_catalog(ConfidenceCatalog({EXPLICIT_CONNECTION: 10}))
        (entry,) = _adapter(FakeClient(records=_records(1))).list_entries()
        assert entry.additional_actions[0].confidence.total == 14

    def test_explicit_catalog_wins(self):
        set_catalog(ConfidenceCatalog({EXPLICIT_CONNECTION: 10}))
        a = ChocolateyAdapter(
            locator=_locator(True),
            client_factory=lambda path: FakeClient(records=_records(1)),
            environ={},
            catalog=ConfidenceCatalog(),
        )
        (entry,) = a.list_entries()
        assert entry.additional_actions[0].confidence.total == 8

    def test_progress_callback(self):
        seen = []
        _adapter(FakeClient(records=_records(4))).list_entries(seen.append)
        assert [p.current for p in seen] == [1, 2, 3, 4]
        assert {p.total for p in seen} == {4}
        assert seen[0].label == "Chocolatey packages"

    def test_client_is_reused(self):
        created = []

        def factory(path):
            created.append(path)
            return FakeClient(records=_records(1))

        a = ChocolateyAdapter(locator=_locator(True), client_factory=factory, environ={})
        a.list_entries()
        a.list_entries()
        assert created == ["choco.exe"]


# ── Failures ─────────────────────────────────────────────────────────


class TestFailures:
    def test_invocation_failure_propagates(self):
        a = _adapter(FakeClient(error=ManagerInvocationError("boom")))
        with pytest.raises(ManagerInvocationError, match="boom"):
            a.list_entries()

    def test_failure_is_not_cached(self):
        client = FakeClient(error=ManagerInvocationError("boom"))
        a = _adapter(client)
        with pytest.raises(ManagerInvocationError):
            a.list_entries()

        client.error = None
        client.records = _records(2)
        assert len(a.list_entries()) == 2
        assert client.list_calls == 2
