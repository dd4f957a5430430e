"""Engine — the Runner and the Report it produces."""

from upkeep.core.engine.report import Report, ReportEntry
from upkeep.core.engine.runner import Runner

__all__ = ["Report", "ReportEntry", "Runner"]
