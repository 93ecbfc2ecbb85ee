"""
Configuration loader — reads inventory.yml into settings models.

The settings file is optional.  Without one, every adapter runs with
built-in defaults; with one, it can switch scanners off, point an
adapter at a different executable name, or retune the shared
confidence weights.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from uninstall_inventory.core.models.confidence import (
    DEFAULT_THRESHOLDS,
    DEFAULT_WEIGHTS,
    ConfidenceCatalog,
)

logger = logging.getLogger(__name__)

# Default config filename
SETTINGS_FILE = "inventory.yml"


class ConfigError(Exception):
    """Raised when the settings file is invalid or unreadable."""


# ── Settings models ─────────────────────────────────────────────


class ScanSettings(BaseModel):
    """Which adapters take part in a scan."""

    chocolatey: bool = True


class ChocolateySettings(BaseModel):
    """How the Chocolatey adapter finds and drives ``choco``."""

    executable: str = "choco.exe"
    brand: str = "Chocolatey"
    path_variable: str = "PATH"
    install_root_variable: str = "ChocolateyInstall"
    max_workers: int | None = Field(default=None, ge=1)


class ConfidenceSettings(BaseModel):
    """Shared confidence weights and verdict thresholds."""

    weights: dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    thresholds: dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_THRESHOLDS))

    def catalog(self) -> ConfidenceCatalog:
        """Build the shared catalog from these weights and thresholds."""
        return ConfidenceCatalog(self.weights, self.thresholds)


class InventorySettings(BaseModel):
    """Root settings model — mirrors inventory.yml."""

    scan: ScanSettings = Field(default_factory=ScanSettings)
    chocolatey: ChocolateySettings = Field(default_factory=ChocolateySettings)
    confidence: ConfidenceSettings = Field(default_factory=ConfidenceSettings)


# ── Loading ─────────────────────────────────────────────────────


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Search for inventory.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to inventory.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SETTINGS_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None) -> InventorySettings:
    """Load and validate inventory settings.

    Args:
        path: Explicit path to inventory.yml.  If None, searches upward
            and falls back to defaults when nothing is found.

    Returns:
        Validated InventorySettings model.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_settings_file()
        if path is None:
            logger.debug("No %s found, using defaults", SETTINGS_FILE)
            return InventorySettings()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Partial weight tables override the defaults, they don't replace them
    confidence = data.get("confidence")
    if isinstance(confidence, dict):
        for key, defaults in (("weights", DEFAULT_WEIGHTS), ("thresholds", DEFAULT_THRESHOLDS)):
            if isinstance(confidence.get(key), dict):
                confidence[key] = {**defaults, **confidence[key]}

    try:
        settings = InventorySettings.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid inventory configuration: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings
