"""
Runner — the single driver loop over the step catalog.

Steps run strictly one after another. Each body is invoked inside a
failure-isolating boundary: whatever a step raises becomes an outcome
in the report, never an exception for the caller. The only things that
escape are fatal conditions, cancellation first among them, which stop
the loop and leave a partial report behind.

Flow per step:
    cancelled? → enabled here? → announce → run body → record outcome
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable

from upkeep.core.context import ExecutionContext
from upkeep.core.engine.report import Report
from upkeep.core.errors import Cancelled, FatalError, Interrupted, NotApplicable, StepError
from upkeep.core.models.step import (
    SKIP_DISABLED,
    SKIP_PLATFORM,
    SKIP_TOOL_ABSENT,
    StepId,
    StepOutcome,
    now_iso,
)
from upkeep.core.steps.base import Step

logger = logging.getLogger(__name__)

_MARKERS = {"ok": "✓", "failed": "✗", "skipped": "⊘"}


class Runner:
    """Drives steps in order and records their outcomes.

    Args:
        ctx: The run's execution context.
        announce: Called with a step's label right before its body runs
            (the CLI prints a separator). Defaults to nothing.
    """

    def __init__(
        self,
        ctx: ExecutionContext,
        announce: Callable[[str], None] | None = None,
    ):
        self._ctx = ctx
        self._announce = announce
        self._report = Report()

    @property
    def report(self) -> Report:
        return self._report

    def execute(
        self,
        step: StepId,
        label: str,
        body: Callable[[], None],
        platforms: frozenset[str] | None = None,
    ) -> None:
        """Run one step body, isolated.

        Raises:
            Cancelled: Cancellation was requested before or during the
                step. The rest of the pass must not run.
            FatalError: The body raised a process-level error.
        """
        if self._ctx.cancellation.is_cancelled():
            raise Cancelled(f"Run cancelled before {label}")

        if not self._ctx.should_run(step):
            logger.debug("Step %s (%s): %s", step.value, label, SKIP_DISABLED)
            return
        if not self._ctx.environment.supports(platforms):
            logger.debug("Step %s (%s): %s", step.value, label, SKIP_PLATFORM)
            return

        if self._announce is not None:
            self._announce(label)

        started_at = now_iso()
        start = time.monotonic()
        try:
            body()
        except NotApplicable as e:
            outcome = StepOutcome.skip(str(e) or SKIP_TOOL_ABSENT)
        except StepError as e:
            outcome = StepOutcome.failure(str(e) or e.__class__.__name__)
        except Interrupted as e:
            self._record(step, label, StepOutcome.failure("interrupted"), started_at, start)
            raise Cancelled(f"Run cancelled during {label}") from e
        except FatalError as e:
            self._record(step, label, StepOutcome.failure(str(e)), started_at, start)
            raise
        except Exception as e:
            logger.exception("Step %s raised unexpectedly", label)
            outcome = StepOutcome.failure(f"Unexpected error: {e}")
        else:
            outcome = StepOutcome.success()

        self._record(step, label, outcome, started_at, start)

    def run_step(self, step: Step) -> None:
        """Run a catalog step through :meth:`execute`."""
        self.execute(step.step_id, step.label, lambda: step.run(self._ctx), step.platforms)

    def run_all(self, steps: Iterable[Step]) -> Report:
        """Run every step in order. Stops early only on fatal errors."""
        for step in steps:
            self.run_step(step)
        return self._report

    def _record(self, step: StepId, label: str, outcome: StepOutcome, started_at: str, start: float) -> None:
        outcome.started_at = started_at
        outcome.duration_ms = int((time.monotonic() - start) * 1000)
        self._report.record(step, label, outcome)
        logger.info(
            "%s %s → %s%s",
            _MARKERS[outcome.status],
            label,
            outcome.status,
            f" ({outcome.reason})" if outcome.reason else "",
        )
