"""
Junk actions — deferred, confidence-scored cleanup steps.

An entry's primary uninstall command removes the application.  Junk
actions describe what is left to do afterwards.  They are not run when
the inventory is built; the consumer looks at the confidence and decides
whether to execute, ask, or skip.
"""

from __future__ import annotations

import logging
import subprocess
import time
from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field, field_validator

from uninstall_inventory.core.models.command import FrozenProcessStartCommand, ProcessStartCommand
from uninstall_inventory.core.models.confidence import ConfidenceCollection, FrozenConfidenceCollection
from uninstall_inventory.core.models.receipt import Receipt

logger = logging.getLogger(__name__)


class JunkAction(BaseModel, ABC):
    """Base class for all junk actions.

    ``entry_id`` is the rating id of the entry that owns the action.  It
    identifies the owner without holding a reference to it.  The
    confidence collection is frozen on the way in, so the score an action
    was built with is the score it keeps.
    """

    model_config = ConfigDict(frozen=True)

    kind: str
    entry_id: str
    display_name: str
    confidence: FrozenConfidenceCollection = Field(default_factory=FrozenConfidenceCollection)

    @field_validator("confidence", mode="before")
    @classmethod
    def _freeze_confidence(cls, value):
        if isinstance(value, ConfidenceCollection):
            return value.freeze()
        return value

    @abstractmethod
    def execute(self, timeout: float | None = None) -> Receipt:
        """Perform the action.  MUST never raise."""


class RunProcessJunkAction(JunkAction):
    """Junk action that runs a command line."""

    kind: str = "run_process"
    command: FrozenProcessStartCommand

    @field_validator("command", mode="before")
    @classmethod
    def _freeze_command(cls, value):
        if isinstance(value, ProcessStartCommand):
            return value.freeze()
        return value

    def execute(self, timeout: float | None = None) -> Receipt:
        argv = self.command.to_argv()
        logger.debug("Running junk action %r: %s", self.display_name, self.command)
        start = time.monotonic()

        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return Receipt.failure(
                action=self.display_name,
                entry_id=self.entry_id,
                error=f"Command timed out after {timeout}s",
                metadata={"command": str(self.command), "timeout": timeout},
            )
        except OSError as e:
            return Receipt.failure(
                action=self.display_name,
                entry_id=self.entry_id,
                error=f"Command execution error: {e}",
                metadata={"command": str(self.command)},
            )

        elapsed_ms = int((time.monotonic() - start) * 1000)
        output = result.stdout.strip()
        stderr = result.stderr.strip()

        if result.returncode == 0:
            return Receipt.success(
                action=self.display_name,
                entry_id=self.entry_id,
                output=output,
                duration_ms=elapsed_ms,
                metadata={
                    "command": str(self.command),
                    "return_code": result.returncode,
                    "stderr": stderr,
                },
            )
        return Receipt.failure(
            action=self.display_name,
            entry_id=self.entry_id,
            error=stderr or f"Command exited with code {result.returncode}",
            duration_ms=elapsed_ms,
            metadata={
                "command": str(self.command),
                "return_code": result.returncode,
                "stdout": output,
            },
        )
