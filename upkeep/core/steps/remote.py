"""
Remote dispatch — run the whole upgrade pass on another host over SSH.

From the local Runner's point of view a remote host is a single step:
its outcome is the remote upkeep's exit status. SSH is invoked
non-interactively (``BatchMode``) with a connect timeout, so an
unreachable host fails fast instead of hanging the local run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from upkeep.core.context import ExecutionContext
from upkeep.core.errors import ExecutionFailed, NonZeroExit
from upkeep.core.models.command import CommandSpec
from upkeep.core.models.config import RemoteTarget
from upkeep.core.models.step import StepId
from upkeep.core.steps.base import Step, require

logger = logging.getLogger(__name__)

# ssh's own exit status for connection / transport errors
SSH_TRANSPORT_ERROR = 255


def ssh_command(ctx: ExecutionContext, target: RemoteTarget) -> CommandSpec:
    """Build the ssh invocation for ``target``."""
    config = ctx.config
    timeout = target.connect_timeout or config.ssh_connect_timeout
    remote_command = target.remote_command or config.remote_command

    args = ["-o", f"ConnectTimeout={timeout}", "-o", "BatchMode=yes"]
    args += config.ssh_arguments
    args += target.ssh_arguments
    args += [
        target.destination,
        "env",
        f"UPKEEP_PREFIX={target.name}",
        remote_command,
        "run",
        "--yes",
        "--skip-notify",
    ]
    if config.cleanup:
        args.append("--cleanup")
    if ctx.dry_run:
        args.append("--dry-run")
    return CommandSpec(program="ssh", args=args)


def ssh_step(ctx: ExecutionContext, target: RemoteTarget) -> None:
    """Run upkeep on ``target``; any non-zero outcome is a step failure."""
    require(ctx, "ssh")
    spec = ssh_command(ctx, target)
    logger.info("Dispatching to remote %s (%s)", target.name, target.destination)
    try:
        ctx.run(spec)
    except NonZeroExit as e:
        if e.code == SSH_TRANSPORT_ERROR:
            raise ExecutionFailed(f"Cannot reach {target.destination} over ssh") from e
        raise ExecutionFailed(f"Remote upgrade on {target.name} failed (exit {e.code})") from e


@dataclass
class RemoteStep(Step):
    """One remote target as a single step."""

    target: RemoteTarget
    step_id: StepId = StepId.REMOTES

    @property
    def label(self) -> str:  # type: ignore[override]
        return f"Remote ({self.target.name})"

    def run(self, ctx: ExecutionContext) -> None:
        ssh_step(ctx, self.target)


def remote_steps(ctx: ExecutionContext) -> list[RemoteStep]:
    """Remote targets for this run, minus the local host itself."""
    hostname = ctx.environment.hostname
    steps = []
    for target in ctx.config.remotes:
        if ctx.config.should_execute_remote(hostname, target):
            steps.append(RemoteStep(target=target))
        else:
            logger.debug("Skipping remote %s for host %s", target.name, hostname)
    return steps
