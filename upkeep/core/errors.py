"""
Error taxonomy for the step-execution engine.

Three families with different blast radius:

    ExecutionError  raised by command executors (raw process outcome)
    StepError       raised by step bodies, isolated by the Runner
    FatalError      aborts the remaining pass, partial report still shown

``StepFailed`` is the top-level sentinel: it carries no message and only
turns into exit code 1, because per-step detail was already printed in
the summary.
"""

from __future__ import annotations


class UpkeepError(Exception):
    """Base class for every error raised by upkeep."""


# ── Execution errors (executor → step body) ─────────────────────


class ExecutionError(UpkeepError):
    """A command could not be run to a successful completion."""


class CommandNotFound(ExecutionError):
    """The target binary is not installed on this host."""

    def __init__(self, program: str):
        super().__init__(f"{program} not found")
        self.program = program


class NonZeroExit(ExecutionError):
    """The command ran and exited with a non-zero status."""

    def __init__(self, command: str, code: int):
        super().__init__(f"`{command}` exited with code {code}")
        self.command = command
        self.code = code


class Interrupted(ExecutionError):
    """The command was aborted by a cancellation request."""

    def __init__(self, command: str = ""):
        super().__init__(f"`{command}` was interrupted" if command else "interrupted")
        self.command = command


# ── Step errors (step body → Runner) ────────────────────────────


class StepError(UpkeepError):
    """Recoverable, per-step failure. Never escapes the Runner."""


class NotApplicable(StepError):
    """Nothing to do here: the tool is absent or has nothing configured."""


class ExecutionFailed(StepError):
    """The step ran but its command failed."""


class ElevationDenied(StepError):
    """Elevated privileges were required but could not be obtained."""


# ── Fatal errors (abort the pass) ───────────────────────────────


class FatalError(UpkeepError):
    """Process-level failure that stops the remaining steps."""


class Cancelled(FatalError):
    """The user asked to stop (interrupt signal)."""

    def __init__(self, message: str = "Run cancelled"):
        super().__init__(message)


class ConfigError(FatalError):
    """Raised when the configuration file is invalid or unreadable."""


class PreCommandFailed(FatalError):
    """A pre-run custom command failed, so the pass was not started."""


# ── Sentinel ────────────────────────────────────────────────────


class StepFailed(UpkeepError):
    """At least one step failed. Used only to produce exit code 1."""
