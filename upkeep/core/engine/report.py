"""
Report — ordered record of step outcomes for one run.

Appended to by the Runner only, in execution order, and read once the
pass is over to render the summary, decide the exit code and feed the
desktop notification.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from upkeep.core.models.step import StepId, StepOutcome

_INDICATORS = {"ok": "OK", "failed": "FAILED", "skipped": "SKIPPED"}


@dataclass
class ReportEntry:
    """One recorded step."""

    step: StepId
    label: str
    outcome: StepOutcome

    def render(self) -> str:
        line = f"{self.label}: {_INDICATORS[self.outcome.status]}"
        if self.outcome.reason and not self.outcome.ok:
            line += f" ({self.outcome.reason})"
        return line

    def to_dict(self) -> dict:
        return {
            "step": self.step.value,
            "label": self.label,
            **self.outcome.model_dump(mode="json"),
        }


@dataclass
class Report:
    """Insertion-ordered, append-only step outcomes."""

    entries: list[ReportEntry] = field(default_factory=list)

    def record(self, step: StepId, label: str, outcome: StepOutcome) -> None:
        self.entries.append(ReportEntry(step=step, label=label, outcome=outcome))

    def render(self) -> list[str]:
        """Summary lines, one per entry, in execution order."""
        return [entry.render() for entry in self.entries]

    def has_failures(self) -> bool:
        return any(entry.outcome.failed for entry in self.entries)

    def labels(self) -> list[str]:
        return [entry.label for entry in self.entries]

    @property
    def total(self) -> int:
        return len(self.entries)

    @property
    def succeeded(self) -> int:
        return sum(1 for e in self.entries if e.outcome.ok)

    @property
    def failed(self) -> int:
        return sum(1 for e in self.entries if e.outcome.failed)

    @property
    def skipped(self) -> int:
        return sum(1 for e in self.entries if e.outcome.skipped)

    @property
    def status(self) -> str:
        if self.failed == 0:
            return "ok"
        if self.succeeded > 0:
            return "partial"
        return "failed"

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "skipped": self.skipped,
            "entries": [entry.to_dict() for entry in self.entries],
        }
