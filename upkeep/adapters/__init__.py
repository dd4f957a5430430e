"""Adapters — command executors for simulate and execute mode.

Public re-exports for convenient access.
"""

from upkeep.adapters.base import CommandExecutor
from upkeep.adapters.dry_run import DryRunExecutor
from upkeep.adapters.mock import MockExecutor

__all__ = [
    "CommandExecutor",
    "DryRunExecutor",
    "MockExecutor",
]
