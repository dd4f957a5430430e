"""
Step catalog — the ordered list of steps for one run.

Built at startup from the host's platform capabilities instead of being
hard-wired per platform:

    remotes → platform group → unix group → cross-platform group → custom commands

Steps whose platforms the host does not provide are dropped here, so
they never reach the Runner (and never appear in the report). The
only/disable configuration is applied later, by the Runner.
"""

from __future__ import annotations

import logging

from upkeep.core.context import ExecutionContext
from upkeep.core.environment import HostEnvironment
from upkeep.core.steps.base import Step
from upkeep.core.steps.custom import custom_command_steps
from upkeep.core.steps.remote import remote_steps
from upkeep.core.steps.system import LinuxSystemStep
from upkeep.core.steps.tools import GENERIC_TOOLS, PLATFORM_TOOLS, UNIX_TOOLS

logger = logging.getLogger(__name__)


def local_steps(environment: HostEnvironment) -> list[Step]:
    """Built-in steps that apply to ``environment``, in execution order."""
    candidates: list[Step] = [LinuxSystemStep(), *PLATFORM_TOOLS, *UNIX_TOOLS, *GENERIC_TOOLS]
    steps = [step for step in candidates if step.applies_to(environment)]
    logger.debug(
        "Catalog for %s (%s): %d of %d built-in steps",
        environment.platform,
        ", ".join(sorted(environment.capabilities)),
        len(steps),
        len(candidates),
    )
    return steps


def build_catalog(ctx: ExecutionContext) -> list[Step]:
    """The full ordered step list for this run."""
    return [
        *remote_steps(ctx),
        *local_steps(ctx.environment),
        *custom_command_steps(ctx),
    ]
