"""
Execution context — the one bundle every step receives.

Built once by the top-level driver and passed by reference into each
step call. It composes the run mode, the elevation provider, the
resolved configuration, the host environment and the cancellation
token, and picks the command executor that matches the run mode.

Nothing in here is mutated after construction; the only moving part is
the elevation provider's internal write-once cache.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field

from upkeep.adapters.base import CommandExecutor
from upkeep.adapters.dry_run import DryRunExecutor
from upkeep.adapters.shell.command import SubprocessExecutor
from upkeep.core.elevation import ElevationProvider
from upkeep.core.environment import HostEnvironment
from upkeep.core.interrupts import CancellationToken
from upkeep.core.models.command import CommandSpec
from upkeep.core.models.config import Config
from upkeep.core.models.run import RunMode
from upkeep.core.models.step import StepId


def executor_for(run_mode: RunMode) -> CommandExecutor:
    """The executor that implements ``run_mode``."""
    if run_mode.dry:
        return DryRunExecutor()
    return SubprocessExecutor()


@dataclass(frozen=True)
class ExecutionContext:
    """Run mode + elevation + configuration + host, shared by all steps."""

    run_mode: RunMode
    elevation: ElevationProvider
    config: Config
    environment: HostEnvironment
    executor: CommandExecutor
    cancellation: CancellationToken = field(default_factory=CancellationToken)

    @classmethod
    def new(
        cls,
        run_mode: RunMode,
        elevation: ElevationProvider,
        config: Config,
        environment: HostEnvironment | None = None,
        executor: CommandExecutor | None = None,
        cancellation: CancellationToken | None = None,
    ) -> ExecutionContext:
        """Compose a context; never fails."""
        return cls(
            run_mode=run_mode,
            elevation=elevation,
            config=config,
            environment=environment or HostEnvironment.detect(),
            executor=executor or executor_for(run_mode),
            cancellation=cancellation or CancellationToken(),
        )

    @property
    def dry_run(self) -> bool:
        return self.run_mode.dry

    def run(self, spec: CommandSpec) -> int:
        """Run a command through the mode's executor."""
        return self.executor.run(self, spec)

    def which(self, program: str) -> str | None:
        """Locate a program on PATH. Read-only probe, fine in any mode."""
        return shutil.which(program)

    def should_run(self, step: StepId) -> bool:
        return self.config.should_run(step)
