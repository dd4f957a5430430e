"""
Custom commands — user-supplied shell command lines from the config.

``commands`` become regular steps (id ``custom_commands``, label = the
command's name). ``pre_commands`` and ``post_commands`` run outside the
Runner, before and after the pass, through the same helper.
"""

from __future__ import annotations

from dataclasses import dataclass

from upkeep.core.context import ExecutionContext
from upkeep.core.models.command import CommandSpec
from upkeep.core.models.step import StepId
from upkeep.core.steps.base import Step, run_checked


def shell_command(ctx: ExecutionContext, command: str) -> CommandSpec:
    """Wrap a command line for the platform shell."""
    if ctx.environment.is_windows:
        return CommandSpec(program="cmd", args=["/C", command])
    return CommandSpec(program="sh", args=["-c", command])


def run_custom_command(ctx: ExecutionContext, name: str, command: str) -> None:
    """Run one named command line. Raises ``StepError`` on failure."""
    run_checked(ctx, shell_command(ctx, command))


@dataclass
class CustomCommandStep(Step):
    """A configured command run as a step."""

    name: str
    command: str
    step_id: StepId = StepId.CUSTOM_COMMANDS

    @property
    def label(self) -> str:  # type: ignore[override]
        return self.name

    def run(self, ctx: ExecutionContext) -> None:
        run_custom_command(ctx, self.name, self.command)


def custom_command_steps(ctx: ExecutionContext) -> list[CustomCommandStep]:
    """Configured commands selected for this run, in config order."""
    return [
        CustomCommandStep(name=name, command=command)
        for name, command in ctx.config.commands.items()
        if ctx.config.should_run_custom_command(name)
    ]
