"""
PackageRecord — one installed package as reported by a package manager.

Only ``package_id`` is guaranteed.  Everything else comes from
hand-written package metadata and may be missing.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class PackageRecord(BaseModel):
    """Raw package metadata, before normalization."""

    package_id: str = Field(min_length=1)
    title: str = ""
    version: str = ""
    summary: str | None = None
    description: str | None = None
    tags: str | None = None
    docs_url: str | None = None
    project_url: str | None = None
    install_location: str | None = None

    @model_validator(mode="after")
    def _default_title(self) -> PackageRecord:
        if not self.title:
            self.title = self.package_id
        return self
