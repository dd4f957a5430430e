"""
Mock executor — test double for command execution.

Never spawns anything. Succeeds by default; individual programs can be
configured to exit non-zero, to be missing, or to trip the run's
cancellation token as if the user pressed Ctrl-C during them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from upkeep.adapters.base import CommandExecutor
from upkeep.core.errors import CommandNotFound, Interrupted, NonZeroExit
from upkeep.core.models.command import CommandSpec

if TYPE_CHECKING:
    from upkeep.core.context import ExecutionContext


class MockExecutor(CommandExecutor):
    """Scriptable executor for tests.

    Responses are keyed by program name (``CommandSpec.program``, not the
    resolved path).
    """

    def __init__(self, executor_name: str = "mock"):
        self._name = executor_name
        self._exit_codes: dict[str, int] = {}
        self._missing: set[str] = set()
        self._interrupting: set[str] = set()
        self._call_log: list[CommandSpec] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[CommandSpec]:
        """All specs this mock has received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def programs(self) -> list[str]:
        return [spec.program for spec in self._call_log]

    def set_exit_code(self, program: str, code: int) -> None:
        """Make ``program`` exit with ``code``."""
        self._exit_codes[program] = code

    def set_missing(self, program: str) -> None:
        """Make ``program`` look uninstalled."""
        self._missing.add(program)

    def set_interrupt(self, program: str) -> None:
        """Cancel the run while ``program`` is executing."""
        self._interrupting.add(program)

    def run(self, ctx: ExecutionContext, spec: CommandSpec) -> int:
        if spec.program in self._missing:
            raise CommandNotFound(spec.program)

        prefix = ctx.elevation.prefix(ctx) if spec.elevated else []
        self._call_log.append(spec)
        display = spec.display(prefix)

        if spec.program in self._interrupting:
            ctx.cancellation.cancel()
            raise Interrupted(display)

        code = self._exit_codes.get(spec.program, 0)
        if code != 0:
            raise NonZeroExit(display, code)
        return 0

    def reset(self) -> None:
        """Clear call log and configured responses."""
        self._call_log.clear()
        self._exit_codes.clear()
        self._missing.clear()
        self._interrupting.clear()
