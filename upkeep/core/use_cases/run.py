"""
Run use case — one full upgrade pass on this host.

This is the top-level orchestrator: it composes the execution context,
runs pre-commands, optionally warms elevation, drives the step catalog
through the Runner and finishes with post-commands. It never prints;
the CLI renders the returned ``RunResult``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, MutableMapping
from dataclasses import dataclass, field

from upkeep.adapters.base import CommandExecutor
from upkeep.core.config.loader import apply_environment
from upkeep.core.context import ExecutionContext
from upkeep.core.elevation import ElevationProvider
from upkeep.core.engine.report import Report
from upkeep.core.engine.runner import Runner
from upkeep.core.environment import HostEnvironment
from upkeep.core.errors import (
    Cancelled,
    ElevationDenied,
    FatalError,
    Interrupted,
    PreCommandFailed,
    StepError,
)
from upkeep.core.interrupts import CancellationToken
from upkeep.core.models.config import Config
from upkeep.core.models.run import RunMode
from upkeep.core.steps.catalog import build_catalog
from upkeep.core.steps.custom import run_custom_command

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Result of one upgrade pass."""

    report: Report = field(default_factory=Report)
    run_mode: RunMode = RunMode.EXECUTE
    error: str | None = None
    cancelled: bool = False
    post_command_failures: list[str] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        """Whether the run should exit with status 1."""
        return (
            self.error is not None
            or self.cancelled
            or bool(self.post_command_failures)
            or self.report.has_failures()
        )

    def to_dict(self) -> dict:
        result: dict = {
            "dry_run": self.run_mode.dry,
            "failed": self.failed,
            "report": self.report.to_dict(),
        }
        if self.error:
            result["error"] = self.error
        if self.cancelled:
            result["cancelled"] = True
        if self.post_command_failures:
            result["post_command_failures"] = self.post_command_failures
        return result


def run_pre_commands(ctx: ExecutionContext, announce: Callable[[str], None] | None = None) -> None:
    """Run ``pre_commands`` in order.

    Raises:
        PreCommandFailed: On the first failing command. The pass must
            not start.
        Cancelled: A command was interrupted.
    """
    for name, command in ctx.config.pre_commands.items():
        if announce is not None:
            announce(f"Pre-command: {name}")
        try:
            run_custom_command(ctx, name, command)
        except Interrupted as e:
            raise Cancelled(f"Run cancelled during pre-command {name!r}") from e
        except StepError as e:
            raise PreCommandFailed(f"Pre-command {name!r} failed: {e}") from e


def run_post_commands(ctx: ExecutionContext, announce: Callable[[str], None] | None = None) -> list[str]:
    """Run every ``post_commands`` entry; return the names that failed.

    Raises:
        Cancelled: A command was interrupted.
    """
    failures = []
    for name, command in ctx.config.post_commands.items():
        if ctx.cancellation.is_cancelled():
            break
        if announce is not None:
            announce(f"Post-command: {name}")
        try:
            run_custom_command(ctx, name, command)
        except Interrupted as e:
            raise Cancelled(f"Run cancelled during post-command {name!r}") from e
        except StepError as e:
            logger.error("Post-command %s failed: %s", name, e)
            failures.append(name)
    return failures


def run_upgrade(
    config: Config,
    environment: HostEnvironment | None = None,
    executor: CommandExecutor | None = None,
    cancellation: CancellationToken | None = None,
    announce: Callable[[str], None] | None = None,
    environ: MutableMapping[str, str] | None = None,
) -> RunResult:
    """Run the whole upgrade pass.

    Args:
        config: Resolved configuration (file + CLI flags).
        environment: Host facts. Detected when omitted.
        executor: Command executor override (tests). Defaults to the
            one matching the run mode.
        cancellation: Token the interrupt handler trips.
        announce: Called with each step label before it runs.
        environ: Mapping the ``env`` overlay is written to. Defaults to
            the process environment.

    Returns:
        RunResult. Fatal conditions are reported in ``error`` /
        ``cancelled`` rather than raised.
    """
    run_mode = RunMode.from_dry_run(config.dry_run)
    ctx = ExecutionContext.new(
        run_mode=run_mode,
        elevation=ElevationProvider(preferred=config.sudo_command),
        config=config,
        environment=environment,
        executor=executor,
        cancellation=cancellation,
    )
    result = RunResult(run_mode=run_mode)
    logger.info(
        "Starting upgrade pass on %s (%s)",
        ctx.environment.hostname,
        run_mode.value,
    )

    apply_environment(config, environ)

    try:
        run_pre_commands(ctx, announce)
        if config.pre_sudo:
            try:
                ctx.elevation.elevate(ctx)
            except Interrupted as e:
                raise Cancelled("Run cancelled during pre-run elevation") from e
            except ElevationDenied as e:
                raise FatalError(f"Pre-run elevation failed: {e}") from e

        runner = Runner(ctx, announce=announce)
        result.report = runner.report
        runner.run_all(build_catalog(ctx))
    except Cancelled as e:
        logger.warning("%s", e)
        result.cancelled = True
        result.error = str(e)
        return result
    except FatalError as e:
        logger.error("%s", e)
        result.error = str(e)
        return result

    try:
        result.post_command_failures = run_post_commands(ctx, announce)
    except Cancelled as e:
        logger.warning("%s", e)
        result.cancelled = True
        result.error = str(e)
        return result

    logger.info(
        "Pass finished: %d ok, %d failed, %d skipped",
        result.report.succeeded,
        result.report.failed,
        result.report.skipped,
    )
    return result
