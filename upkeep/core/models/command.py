"""
CommandSpec — what a step asks the executor to run.

A CommandSpec is inert data: it never spawns anything on its own. Elevation
must be requested explicitly with ``elevated=True``.
"""

from __future__ import annotations

import shlex

from pydantic import BaseModel, Field


class CommandSpec(BaseModel):
    """An external command invocation."""

    program: str
    args: list[str] = Field(default_factory=list)
    cwd: str | None = None
    env: dict[str, str] = Field(default_factory=dict)   # overlay on os.environ
    elevated: bool = False

    @property
    def argv(self) -> list[str]:
        return [self.program, *self.args]

    def display(self, prefix: list[str] | None = None) -> str:
        """Shell-quoted command line, as it would be typed."""
        return shlex.join([*(prefix or []), *self.argv])
