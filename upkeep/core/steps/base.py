"""
Step base — one named unit of upgrade work.

Every step exposes the same single operation, ``run(ctx)``, and reports
problems only through ``StepError``:

    NotApplicable     nothing to do (tool absent, nothing configured)
    ExecutionFailed   the tool ran and failed
    ElevationDenied   privileged command, but no privileges

``Interrupted`` is the one execution error steps let through untouched;
the Runner turns it into a cancellation.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from upkeep.core.context import ExecutionContext
from upkeep.core.environment import HostEnvironment
from upkeep.core.errors import CommandNotFound, ExecutionFailed, NonZeroExit, NotApplicable
from upkeep.core.models.command import CommandSpec
from upkeep.core.models.step import SKIP_TOOL_ABSENT, StepId

logger = logging.getLogger(__name__)


class Step(ABC):
    """Abstract base class for all steps.

    Subclasses provide ``step_id``, ``label`` and optionally
    ``platforms`` (None = every platform), and implement ``run``.
    """

    step_id: StepId
    label: str
    platforms: frozenset[str] | None = None

    def applies_to(self, environment: HostEnvironment) -> bool:
        """Whether this step belongs on the given host at all."""
        return environment.supports(self.platforms)

    @abstractmethod
    def run(self, ctx: ExecutionContext) -> None:
        """Do the work. Raise ``StepError`` on failure."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.step_id.value}:{self.label!r}>"


@dataclass
class FunctionStep(Step):
    """A step whose body is a plain callable."""

    step_id: StepId
    label: str
    body: Callable[[ExecutionContext], None]
    platforms: frozenset[str] | None = None

    def run(self, ctx: ExecutionContext) -> None:
        self.body(ctx)


# ── Helpers for step bodies ─────────────────────────────────────


def require(ctx: ExecutionContext, program: str) -> str:
    """Locate ``program`` or skip the step."""
    path = ctx.which(program)
    if path is None:
        logger.debug("%s not found on PATH", program)
        raise NotApplicable(SKIP_TOOL_ABSENT)
    return path


def run_checked(ctx: ExecutionContext, spec: CommandSpec) -> None:
    """Run a command and translate executor errors into step errors."""
    try:
        ctx.run(spec)
    except CommandNotFound as e:
        raise NotApplicable(SKIP_TOOL_ABSENT) from e
    except NonZeroExit as e:
        raise ExecutionFailed(str(e)) from e


# ── Data-driven tool steps ──────────────────────────────────────


def expand_home(program: str, environment: HostEnvironment) -> str:
    """Resolve a ``~/``-relative program against the user's home."""
    if program.startswith("~/"):
        return str(environment.home_dir / program[2:])
    return program


@dataclass(frozen=True)
class ToolCommand:
    """One command of a tool's upgrade sequence.

    A program starting with ``~/`` is resolved against the user's home.
    """

    program: str
    args: tuple[str, ...] = ()
    elevated: bool = False
    yes_args: tuple[str, ...] = ()   # appended when assume_yes is set
    cleanup: bool = False            # only run when cleanup is enabled

    def spec(self, ctx: ExecutionContext) -> CommandSpec:
        args = list(self.args)
        if ctx.config.assume_yes:
            args.extend(self.yes_args)
        return CommandSpec(
            program=expand_home(self.program, ctx.environment),
            args=args,
            elevated=self.elevated,
        )


@dataclass(frozen=True)
class ToolStep(Step):
    """Upgrade a tool by running a fixed command sequence.

    The step is skipped when any binary in ``requires`` (default: the
    first command's program) is missing.
    """

    step_id: StepId
    label: str
    commands: tuple[ToolCommand, ...]
    requires: tuple[str, ...] = ()
    platforms: frozenset[str] | None = None

    def required_programs(self) -> tuple[str, ...]:
        return self.requires or (self.commands[0].program,)

    def is_present(self, ctx: ExecutionContext) -> bool:
        return all(
            ctx.which(expand_home(p, ctx.environment))
            for p in self.required_programs()
        )

    def run(self, ctx: ExecutionContext) -> None:
        for program in self.required_programs():
            require(ctx, expand_home(program, ctx.environment))

        for command in self.commands:
            if command.cleanup and not ctx.config.cleanup:
                continue
            run_checked(ctx, command.spec(ctx))
