"""Run mode — simulate or execute, fixed for the whole process."""

from __future__ import annotations

from enum import Enum


class RunMode(str, Enum):
    """Whether commands are actually spawned or only printed."""

    SIMULATE = "simulate"
    EXECUTE = "execute"

    @classmethod
    def from_dry_run(cls, dry_run: bool) -> RunMode:
        return cls.SIMULATE if dry_run else cls.EXECUTE

    @property
    def dry(self) -> bool:
        return self is RunMode.SIMULATE
