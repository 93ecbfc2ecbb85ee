"""
Process start command — an executable plus its argument string.

Adapters build uninstall commands from fixed templates and sometimes
need a second variant of the same command with extra flags, so
``arguments`` stays assignable and ``clone()`` hands out an independent
copy.  Once a command is attached to a junk action it is stored as a
``FrozenProcessStartCommand``.  Argument content is not escaped or
validated here.
"""

from __future__ import annotations

import os
import shlex

from pydantic import BaseModel, ConfigDict


class ProcessStartCommand(BaseModel):
    """Executable path and raw argument text."""

    filename: str
    arguments: str = ""

    def to_command_line(self) -> str:
        """Render as ``<path> <args>``, quoting a path that contains spaces."""
        path = f'"{self.filename}"' if any(c.isspace() for c in self.filename) else self.filename
        if not self.arguments:
            return path
        return f"{path} {self.arguments}"

    def to_argv(self) -> list[str]:
        """Split into an argv list for running without a shell."""
        return [self.filename, *shlex.split(self.arguments, posix=os.name != "nt")]

    def clone(self) -> ProcessStartCommand:
        """Editable copy, even when called on a frozen command."""
        return ProcessStartCommand(filename=self.filename, arguments=self.arguments)

    def freeze(self) -> FrozenProcessStartCommand:
        return FrozenProcessStartCommand(filename=self.filename, arguments=self.arguments)

    def __str__(self) -> str:
        return self.to_command_line()


class FrozenProcessStartCommand(ProcessStartCommand):
    """Command that can no longer be edited."""

    model_config = ConfigDict(frozen=True)

    def freeze(self) -> FrozenProcessStartCommand:
        return self
