"""
Dry-run executor — simulate mode.

Never spawns a process. Each command is printed the way it would be
typed (elevation prefix included) and recorded in ``call_log``, then
reported as a success.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from upkeep.adapters.base import CommandExecutor
from upkeep.core.models.command import CommandSpec

if TYPE_CHECKING:
    from upkeep.core.context import ExecutionContext


class DryRunExecutor(CommandExecutor):
    """Prints commands instead of running them."""

    def __init__(self, echo: bool = True):
        self._echo = echo
        self._call_log: list[CommandSpec] = []
        self._lines: list[str] = []

    @property
    def name(self) -> str:
        return "dry-run"

    @property
    def call_log(self) -> list[CommandSpec]:
        """Every spec this executor has been asked to run."""
        return self._call_log

    @property
    def lines(self) -> list[str]:
        """The command lines as displayed."""
        return self._lines

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def run(self, ctx: ExecutionContext, spec: CommandSpec) -> int:
        prefix = ctx.elevation.prefix(ctx) if spec.elevated else []
        line = spec.display(prefix)
        if spec.cwd:
            line = f"{line} (in {spec.cwd})"

        self._call_log.append(spec)
        self._lines.append(line)
        if self._echo:
            click.secho(f"Dry running: {line}", dim=True)
        return 0

    def reset(self) -> None:
        """Clear the call log."""
        self._call_log.clear()
        self._lines.clear()
