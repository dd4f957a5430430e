"""
Executor base — the contract between steps and external processes.

Steps never call ``subprocess`` themselves. They describe a command
with a :class:`CommandSpec` and hand it to the context's executor,
which either runs it or, in simulate mode, only shows it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from upkeep.core.models.command import CommandSpec

if TYPE_CHECKING:
    from upkeep.core.context import ExecutionContext


class CommandExecutor(ABC):
    """Abstract base class for command executors.

    ``run`` returns the exit status (always 0) or raises an
    ``ExecutionError``:

        CommandNotFound   the program is not installed
        NonZeroExit       the program failed
        Interrupted       the run was cancelled while it was executing
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The executor identifier (e.g., 'subprocess', 'dry-run')."""

    @abstractmethod
    def run(self, ctx: ExecutionContext, spec: CommandSpec) -> int:
        """Run ``spec`` and return its exit status."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
