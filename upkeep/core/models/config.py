"""
Configuration model — loaded from upkeep.yml.

This is the read-only view every step sees through the execution
context. CLI flags are merged in once at startup; nothing mutates it
afterwards.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from upkeep.core.models.elevation import ElevationKind
from upkeep.core.models.step import StepId


class RemoteTarget(BaseModel):
    """A host to run the upgrade pass on over SSH."""

    model_config = ConfigDict(extra="forbid")

    name: str
    host: str | None = None                # defaults to name
    ssh_arguments: list[str] = Field(default_factory=list)
    remote_command: str | None = None      # defaults to Config.remote_command
    connect_timeout: int | None = None     # seconds
    enabled: bool = True

    @property
    def destination(self) -> str:
        return self.host or self.name

    def __str__(self) -> str:
        return self.name


class Config(BaseModel):
    """Resolved configuration for one run."""

    model_config = ConfigDict(extra="forbid")

    # Step selection
    only: list[StepId] = Field(default_factory=list)
    disable: list[StepId] = Field(default_factory=list)

    # Behaviour
    dry_run: bool = False
    assume_yes: bool = False
    cleanup: bool = False
    skip_notify: bool = False

    # Elevation
    sudo_command: ElevationKind | None = None
    pre_sudo: bool = False

    # Remote dispatch
    remotes: list[RemoteTarget] = Field(default_factory=list)
    remote_host_limit: str | None = None
    ssh_arguments: list[str] = Field(default_factory=list)
    ssh_connect_timeout: int = 10
    remote_command: str = "upkeep"

    # Environment overlay applied before the run
    env: dict[str, str] = Field(default_factory=dict)

    # Custom commands (name → shell command line), insertion-ordered
    pre_commands: dict[str, str] = Field(default_factory=dict)
    commands: dict[str, str] = Field(default_factory=dict)
    post_commands: dict[str, str] = Field(default_factory=dict)
    custom_commands: list[str] = Field(default_factory=list)

    @field_validator("remote_host_limit")
    @classmethod
    def _valid_regex(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                re.compile(value)
            except re.error as e:
                raise ValueError(f"invalid remote_host_limit regex: {e}") from e
        return value

    def should_run(self, step: StepId) -> bool:
        """Whether a step is enabled by the only/disable lists."""
        if step in self.disable:
            return False
        return not self.only or step in self.only

    def should_run_custom_command(self, name: str) -> bool:
        """Whether a named custom command is selected for this run."""
        return not self.custom_commands or name in self.custom_commands

    def should_execute_remote(self, hostname: str, target: RemoteTarget) -> bool:
        """Filter remote targets.

        The local host is never a remote target, otherwise the remote
        pass would dispatch to itself forever.
        """
        if not target.enabled:
            return False
        local = hostname.lower()
        if local and local in (target.name.lower(), target.destination.lower()):
            return False
        if self.remote_host_limit is not None:
            return re.search(self.remote_host_limit, target.name) is not None
        return True
