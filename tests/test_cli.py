"""
Tests for CLI commands — status, list, and global options.
"""

import json
import os
import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner

from uninstall_inventory import __version__
from uninstall_inventory.adapters.chocolatey import adapter as adapter_module
from uninstall_inventory.adapters.chocolatey.client import ManagerInvocationError
from uninstall_inventory.core.models import PackageRecord
from uninstall_inventory.main import cli


@pytest.fixture
def no_choco(tmp_path: Path, monkeypatch) -> Path:
    """PATH without Chocolatey and a cwd without inventory.yml."""
    monkeypatch.setenv("PATH", str(tmp_path / "bin"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def with_choco(tmp_path: Path, monkeypatch) -> Path:
    """A fake Chocolatey install on PATH with a stubbed client."""
    bin_dir = tmp_path / "chocolatey" / "bin"
    bin_dir.mkdir(parents=True)
    (bin_dir / "choco.exe").write_text("")
    monkeypatch.setenv("PATH", str(bin_dir) + os.pathsep + str(tmp_path / "other"))
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _stub_client(monkeypatch, records=None, error=None):
    class StubClient:
        def __init__(self, executable, install_root=None):
            self.executable = executable

        def list_packages(self):
            if error is not None:
                raise error
            return records or []

    monkeypatch.setattr(adapter_module, "ChocolateyClient", StubClient)


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Uninstall inventory" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_bad_config(self, no_choco: Path):
        config = no_choco / "inventory.yml"
        config.write_text("- not a mapping\n")
        result = CliRunner().invoke(cli, ["--config", str(config), "status"])
        assert result.exit_code == 1


class TestStatusCommand:
    def test_not_installed(self, no_choco):
        result = CliRunner().invoke(cli, ["status"])
        assert result.exit_code == 0
        assert "Chocolatey packages" in result.output
        assert "not installed" in result.output

    def test_json(self, with_choco):
        result = CliRunner().invoke(cli, ["status", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["chocolatey"]["available"] is True
        assert data["chocolatey"]["enabled"] is True

    def test_disabled_by_config(self, no_choco):
        config = no_choco / "inventory.yml"
        config.write_text(textwrap.dedent("""\
            scan:
              chocolatey: false
        """))
        result = CliRunner().invoke(cli, ["status"])
        assert result.exit_code == 0
        assert "disabled" in result.output


class TestListCommand:
    def test_nothing_installed(self, no_choco):
        result = CliRunner().invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "No removable packages found" in result.output

    def test_lists_entries(self, with_choco, monkeypatch):
        _stub_client(monkeypatch, records=[
            PackageRecord(package_id="git", title="Git", version="2.44.0"),
            PackageRecord(package_id="7zip", title="7-Zip", version="23.1.0"),
        ])
        result = CliRunner().invoke(cli, ["list"])
        assert result.exit_code == 0
        assert result.output.index("Git") < result.output.index("7-Zip")
        assert "uninstall git -y -r" in result.output

    def test_shows_junk_confidence(self, with_choco, monkeypatch):
        _stub_client(monkeypatch, records=[PackageRecord(package_id="git", title="Git", version="2.44.0")])
        result = CliRunner().invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "Uninstall in Chocolatey [very_good, +8]" in result.output

    def test_configured_thresholds_apply(self, with_choco, monkeypatch):
        (with_choco / "inventory.yml").write_text(textwrap.dedent("""\
            confidence:
              thresholds:
                very_good: 100
                good: 50
                questionable: 20
        """))
        _stub_client(monkeypatch, records=[PackageRecord(package_id="git", title="Git", version="2.44.0")])
        result = CliRunner().invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "Uninstall in Chocolatey [bad, +8]" in result.output

    def test_json(self, with_choco, monkeypatch):
        _stub_client(monkeypatch, records=[PackageRecord(package_id="git", title="Git", version="2.44.0")])
        result = CliRunner().invoke(cli, ["list", "--json"])
        assert result.exit_code == 0
        (entry,) = json.loads(result.output)
        assert entry["rating_id"] == "Choco git"
        assert entry["uninstaller_kind"] == "chocolatey"
        action = entry["additional_actions"][0]
        assert action["command"]["arguments"] == "uninstall git -y -r -n --skipautouninstaller"

    def test_manager_failure(self, with_choco, monkeypatch):
        _stub_client(monkeypatch, error=ManagerInvocationError("choco crashed"))
        result = CliRunner().invoke(cli, ["list"])
        assert result.exit_code == 1
