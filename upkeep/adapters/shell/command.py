"""
Subprocess executor — execute mode.

The single place where upkeep spawns external processes. The child
inherits our stdin/stdout/stderr, so tool output streams to the
terminal unmodified and interactive prompts keep working.
"""

from __future__ import annotations

import logging
import os
import shutil
import signal
import subprocess
import time
from typing import TYPE_CHECKING

from upkeep.adapters.base import CommandExecutor
from upkeep.core.errors import CommandNotFound, Interrupted, NonZeroExit
from upkeep.core.models.command import CommandSpec

if TYPE_CHECKING:
    from upkeep.core.context import ExecutionContext

logger = logging.getLogger(__name__)


class SubprocessExecutor(CommandExecutor):
    """Run commands for real and wait for them to finish."""

    @property
    def name(self) -> str:
        return "subprocess"

    def run(self, ctx: ExecutionContext, spec: CommandSpec) -> int:
        resolved = shutil.which(spec.program)
        if resolved is None:
            raise CommandNotFound(spec.program)

        prefix = ctx.elevation.prefix(ctx) if spec.elevated else []
        argv = [*prefix, resolved, *spec.args]

        env = None
        if spec.env:
            env = os.environ.copy()
            for key, value in spec.env.items():
                env[key] = os.path.expandvars(value)

        display = spec.display(prefix)
        logger.debug("Executing: %s (cwd=%s)", display, spec.cwd)
        start = time.monotonic()

        try:
            result = subprocess.run(argv, cwd=spec.cwd, env=env, check=False)
        except KeyboardInterrupt as e:
            ctx.cancellation.cancel()
            raise Interrupted(display) from e
        except FileNotFoundError as e:
            raise CommandNotFound(spec.program) from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        code = result.returncode
        logger.debug("`%s` exited with %d after %dms", display, code, elapsed_ms)

        if code == -signal.SIGINT:
            ctx.cancellation.cancel()
        if ctx.cancellation.is_cancelled():
            raise Interrupted(display)
        if code != 0:
            raise NonZeroExit(display, code)
        return code
