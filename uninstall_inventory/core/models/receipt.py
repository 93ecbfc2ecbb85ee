"""
Receipt model — the outcome of running a junk action.

Junk actions never raise when executed.  Whatever happens, the caller
gets a Receipt back and decides what to show or retry.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Receipt(BaseModel):
    """Result of executing one junk action."""

    action: str                      # display name of the executed action
    entry_id: str = ""               # rating id of the owning entry
    status: Literal["ok", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    ended_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the action succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the action failed."""
        return self.status == "failed"

    @classmethod
    def success(cls, action: str, output: str = "", **kwargs: Any) -> Receipt:
        """Create a success receipt."""
        return cls(action=action, status="ok", output=output, **kwargs)

    @classmethod
    def failure(cls, action: str, error: str, **kwargs: Any) -> Receipt:
        """Create a failure receipt."""
        return cls(action=action, status="failed", error=error, **kwargs)
