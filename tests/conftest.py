"""
Shared test fixtures and configuration.
"""

import shutil
import textwrap
from pathlib import Path

import pytest

from upkeep.adapters.mock import MockExecutor
from upkeep.core.context import ExecutionContext
from upkeep.core.elevation import ElevationProvider
from upkeep.core.environment import HostEnvironment
from upkeep.core.interrupts import CancellationToken
from upkeep.core.models.config import Config
from upkeep.core.models.elevation import ElevationState
from upkeep.core.models.run import RunMode


@pytest.fixture
def host_environment(tmp_path: Path) -> HostEnvironment:
    """A Linux workstation rooted in a temporary directory."""
    return HostEnvironment(
        hostname="workstation",
        platform="linux",
        capabilities=frozenset({"linux", "unix"}),
        home_dir=tmp_path / "home",
        config_dir=tmp_path / "config",
        data_dir=tmp_path / "data",
        is_root=False,
    )


@pytest.fixture
def make_context(host_environment: HostEnvironment):
    """Factory for execution contexts backed by a MockExecutor."""

    def _make(
        config: Config | None = None,
        run_mode: RunMode = RunMode.EXECUTE,
        executor=None,
        elevation: ElevationProvider | None = None,
        environment: HostEnvironment | None = None,
        cancellation: CancellationToken | None = None,
    ) -> ExecutionContext:
        return ExecutionContext.new(
            run_mode=run_mode,
            elevation=elevation or ElevationProvider(state=ElevationState.NOT_NEEDED),
            config=config or Config(),
            environment=environment or host_environment,
            executor=executor or MockExecutor(),
            cancellation=cancellation,
        )

    return _make


@pytest.fixture
def installed(monkeypatch: pytest.MonkeyPatch):
    """Pretend exactly the given programs are on PATH.

    Returns the mutable set so tests can add programs later.
    """
    programs: set[str] = set()

    def _which(name, *args, **kwargs):
        if name in programs or Path(str(name)).name in programs:
            return name if "/" in str(name) else f"/usr/bin/{name}"
        return None

    monkeypatch.setattr(shutil, "which", _which)
    return programs


@pytest.fixture
def write_config(tmp_path: Path):
    """Write an upkeep.yml into tmp_path and return its path."""

    def _write(content: str, name: str = "upkeep.yml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content))
        return path

    return _write
