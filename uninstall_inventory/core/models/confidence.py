"""
Confidence model — weighted evidence for automatically generated actions.

Every junk action carries a ``ConfidenceCollection``: an ordered list of
labeled weights.  The sum decides what happens downstream — actions with
a high total can run unattended, low ones need the user to confirm, and
negative ones are ignored.

Well-known labels (e.g. ``explicit_connection``) must weigh the same no
matter which adapter adds them, so their weights come from a
``ConfidenceCatalog`` built from configuration rather than from literals
scattered across adapters.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ── Well-known labels ───────────────────────────────────────────

EXPLICIT_CONNECTION = "explicit_connection"
PRODUCT_NAME_PERFECT_MATCH = "product_name_perfect_match"
PRODUCT_NAME_DODGY_MATCH = "product_name_dodgy_match"
DIRECTORY_STILL_USED = "directory_still_used"

DEFAULT_WEIGHTS: dict[str, int] = {
    EXPLICIT_CONNECTION: 4,
    PRODUCT_NAME_PERFECT_MATCH: 2,
    PRODUCT_NAME_DODGY_MATCH: -2,
    DIRECTORY_STILL_USED: -4,
}

DEFAULT_THRESHOLDS: dict[str, int] = {
    "very_good": 5,
    "good": 2,
    "questionable": 0,
}


class ConfidenceLevel(StrEnum):
    """Coarse verdict derived from a confidence total."""

    VERY_GOOD = "very_good"
    GOOD = "good"
    QUESTIONABLE = "questionable"
    BAD = "bad"


class ConfidenceRecord(BaseModel):
    """One piece of evidence.  Raw weights carry an empty label."""

    model_config = ConfigDict(frozen=True)

    weight: int
    label: str = ""


class ConfidenceCollection(BaseModel):
    """Ordered evidence list with a derived total."""

    records: list[ConfidenceRecord] = Field(default_factory=list)

    def add(self, evidence: ConfidenceRecord | int) -> None:
        """Append a record, or a raw weight without a label."""
        if isinstance(evidence, ConfidenceRecord):
            self.records.append(evidence)
        else:
            self.records.append(ConfidenceRecord(weight=int(evidence)))

    def extend(self, evidence: Iterable[ConfidenceRecord | int]) -> None:
        for item in evidence:
            self.add(item)

    @property
    def total(self) -> int:
        """Sum of all weights currently in the collection."""
        return sum(r.weight for r in self.records)

    def level(self, thresholds: Mapping[str, int] | None = None) -> ConfidenceLevel:
        """Classify the total against ``thresholds``.

        Without explicit thresholds the shared catalog's are used, so the
        configured limits apply everywhere.
        """
        limits = {**DEFAULT_THRESHOLDS, **(thresholds or get_catalog().thresholds)}
        total = self.total
        if total >= limits["very_good"]:
            return ConfidenceLevel.VERY_GOOD
        if total >= limits["good"]:
            return ConfidenceLevel.GOOD
        if total >= limits["questionable"]:
            return ConfidenceLevel.QUESTIONABLE
        return ConfidenceLevel.BAD

    def freeze(self) -> FrozenConfidenceCollection:
        """Snapshot of the current records that cannot change."""
        return FrozenConfidenceCollection(records=tuple(self.records))


class FrozenConfidenceCollection(ConfidenceCollection):
    """Read-only collection, as carried by finished junk actions."""

    model_config = ConfigDict(frozen=True)

    records: tuple[ConfidenceRecord, ...] = ()

    def add(self, evidence: ConfidenceRecord | int) -> None:
        raise TypeError("Frozen confidence collection cannot be extended")

    def freeze(self) -> FrozenConfidenceCollection:
        return self


class ConfidenceCatalog:
    """Canonical weights for well-known labels, plus verdict thresholds.

    Args:
        weights: Overrides merged on top of ``DEFAULT_WEIGHTS``.
        thresholds: Overrides merged on top of ``DEFAULT_THRESHOLDS``.
    """

    def __init__(
        self,
        weights: Mapping[str, int] | None = None,
        thresholds: Mapping[str, int] | None = None,
    ):
        self._weights = {**DEFAULT_WEIGHTS, **(weights or {})}
        self._thresholds = {**DEFAULT_THRESHOLDS, **(thresholds or {})}

    def record(self, label: str) -> ConfidenceRecord:
        """Build the canonical record for a well-known label.

        Raises:
            KeyError: If the label is not in the catalog.
        """
        if label not in self._weights:
            raise KeyError(f"Unknown confidence label: {label!r}")
        return ConfidenceRecord(label=label, weight=self._weights[label])

    def weight(self, label: str) -> int:
        return self.record(label).weight

    @property
    def explicit_connection(self) -> ConfidenceRecord:
        return self.record(EXPLICIT_CONNECTION)

    @property
    def labels(self) -> list[str]:
        return sorted(self._weights)

    @property
    def thresholds(self) -> dict[str, int]:
        return dict(self._thresholds)


# ── Process-wide catalog ────────────────────────────────────────

_catalog: ConfidenceCatalog | None = None


def get_catalog() -> ConfidenceCatalog:
    """Return the shared catalog, creating a default one on first use."""
    global _catalog
    if _catalog is None:
        _catalog = ConfidenceCatalog()
    return _catalog


def set_catalog(catalog: ConfidenceCatalog | None) -> None:
    """Install the shared catalog.  ``None`` restores the defaults lazily."""
    global _catalog
    _catalog = catalog
