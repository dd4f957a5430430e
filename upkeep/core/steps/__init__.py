"""Steps — the units of upgrade work and the catalog that orders them."""

from upkeep.core.steps.base import FunctionStep, Step, ToolCommand, ToolStep
from upkeep.core.steps.catalog import build_catalog, local_steps

__all__ = [
    "FunctionStep",
    "Step",
    "ToolCommand",
    "ToolStep",
    "build_catalog",
    "local_steps",
]
