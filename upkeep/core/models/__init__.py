"""
Domain models — Pydantic types for the step-execution engine.

All models are re-exported here for convenient access:

    from upkeep.core.models import CommandSpec, Config, StepId, StepOutcome
"""

from upkeep.core.models.command import CommandSpec
from upkeep.core.models.config import Config, RemoteTarget
from upkeep.core.models.elevation import ElevationKind, ElevationState
from upkeep.core.models.run import RunMode
from upkeep.core.models.step import StepId, StepOutcome

__all__ = [
    # command.py
    "CommandSpec",
    # config.py
    "Config",
    "ElevationKind",
    "ElevationState",
    "RemoteTarget",
    # run.py
    "RunMode",
    # step.py
    "StepId",
    "StepOutcome",
]
