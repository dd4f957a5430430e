"""
Tests for command executors — dry-run, subprocess and mock.
"""

import signal
import subprocess
from types import SimpleNamespace

import pytest

from upkeep.adapters.dry_run import DryRunExecutor
from upkeep.adapters.mock import MockExecutor
from upkeep.adapters.shell.command import SubprocessExecutor
from upkeep.core.context import executor_for
from upkeep.core.elevation import ElevationHelper, ElevationProvider
from upkeep.core.errors import CommandNotFound, Interrupted, NonZeroExit
from upkeep.core.models.command import CommandSpec
from upkeep.core.models.elevation import ElevationKind, ElevationState
from upkeep.core.models.run import RunMode


def _sudo_provider() -> ElevationProvider:
    return ElevationProvider(
        state=ElevationState.AVAILABLE,
        helper=ElevationHelper(kind=ElevationKind.SUDO, path="/usr/bin/sudo"),
    )


# ── Mode selection ───────────────────────────────────────────────────


class TestExecutorFor:
    def test_simulate_uses_dry_run(self):
        assert isinstance(executor_for(RunMode.SIMULATE), DryRunExecutor)

    def test_execute_uses_subprocess(self):
        assert isinstance(executor_for(RunMode.EXECUTE), SubprocessExecutor)

    def test_run_mode_from_flag(self):
        assert RunMode.from_dry_run(True) is RunMode.SIMULATE
        assert RunMode.from_dry_run(False) is RunMode.EXECUTE


# ── Dry-run ──────────────────────────────────────────────────────────


class TestDryRunExecutor:
    def test_never_spawns(self, make_context, monkeypatch):
        def forbidden(*args, **kwargs):
            raise AssertionError("subprocess spawned in simulate mode")

        monkeypatch.setattr(subprocess, "run", forbidden)
        monkeypatch.setattr(subprocess, "Popen", forbidden)

        executor = DryRunExecutor(echo=False)
        ctx = make_context(run_mode=RunMode.SIMULATE, executor=executor, elevation=_sudo_provider())
        ctx.run(CommandSpec(program="apt-get", args=["update"], elevated=True))
        ctx.run(CommandSpec(program="rustup", args=["update"]))

        # sudo -v went through the dry-run executor too
        assert executor.lines == [
            "/usr/bin/sudo -v",
            "/usr/bin/sudo apt-get update",
            "rustup update",
        ]

    def test_echo(self, make_context, capsys):
        executor = DryRunExecutor()
        ctx = make_context(run_mode=RunMode.SIMULATE, executor=executor)
        assert ctx.run(CommandSpec(program="brew", args=["update"], cwd="/tmp")) == 0
        assert "Dry running: brew update (in /tmp)" in capsys.readouterr().out

    def test_reset(self, make_context):
        executor = DryRunExecutor(echo=False)
        ctx = make_context(run_mode=RunMode.SIMULATE, executor=executor)
        ctx.run(CommandSpec(program="brew"))
        assert executor.call_count == 1
        executor.reset()
        assert executor.call_count == 0
        assert executor.lines == []


# ── Subprocess ───────────────────────────────────────────────────────


class TestSubprocessExecutor:
    def test_missing_program(self, make_context, installed):
        ctx = make_context(executor=SubprocessExecutor())
        with pytest.raises(CommandNotFound) as exc:
            ctx.run(CommandSpec(program="flatpak", args=["update"]))
        assert exc.value.program == "flatpak"

    def test_success(self, make_context, installed, monkeypatch):
        installed.add("flatpak")
        calls = []

        def fake_run(argv, **kwargs):
            calls.append((argv, kwargs))
            return SimpleNamespace(returncode=0)

        monkeypatch.setattr(subprocess, "run", fake_run)
        ctx = make_context(executor=SubprocessExecutor())
        assert ctx.run(CommandSpec(program="flatpak", args=["update", "-y"])) == 0
        argv, kwargs = calls[0]
        assert argv == ["/usr/bin/flatpak", "update", "-y"]
        assert kwargs["check"] is False
        assert kwargs["env"] is None

    def test_elevated_prefix(self, make_context, installed, monkeypatch):
        installed.add("apt-get")
        calls = []
        monkeypatch.setattr(
            subprocess, "run", lambda argv, **kw: calls.append(argv) or SimpleNamespace(returncode=0)
        )
        ctx = make_context(executor=SubprocessExecutor(), elevation=_sudo_provider())
        installed.add("/usr/bin/sudo")
        ctx.run(CommandSpec(program="apt-get", args=["update"], elevated=True))
        assert calls == [
            ["/usr/bin/sudo", "-v"],
            ["/usr/bin/sudo", "/usr/bin/apt-get", "update"],
        ]

    def test_non_zero_exit(self, make_context, installed, monkeypatch):
        installed.add("pipx")
        monkeypatch.setattr(subprocess, "run", lambda argv, **kw: SimpleNamespace(returncode=3))
        ctx = make_context(executor=SubprocessExecutor())
        with pytest.raises(NonZeroExit) as exc:
            ctx.run(CommandSpec(program="pipx", args=["upgrade-all"]))
        assert exc.value.code == 3
        assert str(exc.value) == "`pipx upgrade-all` exited with code 3"

    def test_env_overlay(self, make_context, installed, monkeypatch):
        installed.add("npm")
        seen = {}

        def fake_run(argv, **kwargs):
            seen.update(kwargs["env"])
            return SimpleNamespace(returncode=0)

        monkeypatch.setattr(subprocess, "run", fake_run)
        monkeypatch.setenv("UPKEEP_TEST_BASE", "base")
        ctx = make_context(executor=SubprocessExecutor())
        ctx.run(CommandSpec(program="npm", env={"NPM_CONFIG_PREFIX": "$UPKEEP_TEST_BASE/npm"}))
        assert seen["NPM_CONFIG_PREFIX"] == "base/npm"

    def test_child_killed_by_sigint_cancels(self, make_context, installed, monkeypatch):
        installed.add("cargo")
        monkeypatch.setattr(
            subprocess, "run", lambda argv, **kw: SimpleNamespace(returncode=-signal.SIGINT)
        )
        ctx = make_context(executor=SubprocessExecutor())
        with pytest.raises(Interrupted):
            ctx.run(CommandSpec(program="cargo"))
        assert ctx.cancellation.is_cancelled()

    def test_keyboard_interrupt_cancels(self, make_context, installed, monkeypatch):
        installed.add("cargo")

        def interrupted(argv, **kwargs):
            raise KeyboardInterrupt

        monkeypatch.setattr(subprocess, "run", interrupted)
        ctx = make_context(executor=SubprocessExecutor())
        with pytest.raises(Interrupted):
            ctx.run(CommandSpec(program="cargo"))
        assert ctx.cancellation.is_cancelled()


# ── Mock ─────────────────────────────────────────────────────────────


class TestMockExecutor:
    def test_default_success(self, make_context):
        mock = MockExecutor()
        ctx = make_context(executor=mock)
        assert ctx.run(CommandSpec(program="gem", args=["update"])) == 0
        assert mock.programs == ["gem"]

    def test_scripted_failures(self, make_context):
        mock = MockExecutor()
        mock.set_exit_code("gem", 1)
        mock.set_missing("deno")
        ctx = make_context(executor=mock)
        with pytest.raises(NonZeroExit):
            ctx.run(CommandSpec(program="gem"))
        with pytest.raises(CommandNotFound):
            ctx.run(CommandSpec(program="deno"))
        mock.reset()
        assert ctx.run(CommandSpec(program="gem")) == 0
