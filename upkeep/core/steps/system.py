"""
Linux system update — upgrade through the distribution's package manager.

Distributions are recognised by which package manager is installed,
checked in a fixed order; the first match wins. Every manager runs
elevated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from upkeep.core.context import ExecutionContext
from upkeep.core.errors import NotApplicable
from upkeep.core.models.step import StepId
from upkeep.core.steps.base import Step, ToolCommand, ToolStep

logger = logging.getLogger(__name__)


def _manager(program: str, *commands: ToolCommand) -> ToolStep:
    return ToolStep(StepId.SYSTEM, program, commands)


def _sudo(program: str, *args: str, yes: tuple[str, ...] = (), cleanup: bool = False) -> ToolCommand:
    return ToolCommand(program, args, elevated=True, yes_args=yes, cleanup=cleanup)


PACKAGE_MANAGERS: tuple[ToolStep, ...] = (
    _manager(
        "apt-get",
        _sudo("apt-get", "update"),
        _sudo("apt-get", "dist-upgrade", yes=("-y",)),
        _sudo("apt-get", "autoremove", yes=("-y",), cleanup=True),
        _sudo("apt-get", "clean", cleanup=True),
    ),
    _manager(
        "dnf",
        _sudo("dnf", "upgrade", yes=("-y",)),
        _sudo("dnf", "autoremove", yes=("-y",), cleanup=True),
    ),
    _manager("yum", _sudo("yum", "upgrade", yes=("-y",))),
    _manager(
        "pacman",
        _sudo("pacman", "-Syu", yes=("--noconfirm",)),
        _sudo("pacman", "-Sc", yes=("--noconfirm",), cleanup=True),
    ),
    _manager(
        "zypper",
        _sudo("zypper", "refresh"),
        _sudo("zypper", "dist-upgrade", yes=("-y",)),
    ),
    _manager("apk", _sudo("apk", "update"), _sudo("apk", "upgrade")),
    _manager("xbps-install", _sudo("xbps-install", "-Su", yes=("-y",))),
    _manager("eopkg", _sudo("eopkg", "upgrade", yes=("-y",))),
)


@dataclass
class LinuxSystemStep(Step):
    """Pick the installed package manager and run its upgrade."""

    step_id: StepId = StepId.SYSTEM
    label: str = "System update"
    managers: tuple[ToolStep, ...] = PACKAGE_MANAGERS
    platforms: frozenset[str] | None = field(default_factory=lambda: frozenset({"linux"}))

    def select(self, ctx: ExecutionContext) -> ToolStep | None:
        for manager in self.managers:
            if manager.is_present(ctx):
                return manager
        return None

    def run(self, ctx: ExecutionContext) -> None:
        manager = self.select(ctx)
        if manager is None:
            raise NotApplicable("no supported package manager found")
        logger.info("System package manager: %s", manager.label)
        manager.run(ctx)
