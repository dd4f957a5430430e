"""
Tests for the run use case — the full pass end to end with a mock executor.
"""

import subprocess

from upkeep.adapters.dry_run import DryRunExecutor
from upkeep.adapters.mock import MockExecutor
from upkeep.core.models.config import Config
from upkeep.core.models.step import StepId
from upkeep.core.use_cases.run import run_upgrade


def _run(config, host_environment, executor, **kwargs):
    return run_upgrade(
        config,
        environment=host_environment,
        executor=executor,
        environ=kwargs.pop("environ", {}),
        **kwargs,
    )


class TestRunUpgrade:
    def test_nothing_installed_is_a_clean_run(self, host_environment, installed):
        result = _run(Config(), host_environment, MockExecutor())
        assert not result.failed
        assert result.report.failed == 0
        assert result.report.succeeded == 0
        assert result.report.skipped == result.report.total > 0

    def test_a_b_c_scenario(self, host_environment, installed):
        installed.update({"rustup", "pipx", "gem"})
        mock = MockExecutor()
        mock.set_exit_code("gem", 2)
        config = Config(only=[StepId.RUSTUP, StepId.PIPX, StepId.GEM], disable=[StepId.PIPX])

        result = _run(config, host_environment, mock)

        assert result.report.labels() == ["rustup", "gem"]
        assert result.report.render() == [
            "rustup: OK",
            "gem: FAILED (`gem update --user-install` exited with code 2)",
        ]
        assert result.failed
        assert "pipx" not in mock.programs

    def test_simulate_spawns_nothing(self, host_environment, installed, monkeypatch):
        def forbidden(*args, **kwargs):
            raise AssertionError("spawned in simulate mode")

        monkeypatch.setattr(subprocess, "run", forbidden)
        installed.update({"apt-get", "sudo", "flatpak", "rustup"})
        result = run_upgrade(Config(dry_run=True), environment=host_environment, environ={})
        assert not result.failed
        assert result.run_mode.dry
        assert "System update: OK" in result.report.render()

    def test_simulate_elevates_through_dry_run(self, host_environment, installed):
        installed.update({"apt-get", "snap", "sudo"})
        executor = DryRunExecutor(echo=False)
        config = Config(dry_run=True, only=[StepId.SYSTEM, StepId.SNAP])
        _run(config, host_environment, executor)
        assert executor.lines.count("/usr/bin/sudo -v") == 1

    def test_pre_command_failure_is_fatal(self, host_environment, installed):
        installed.update({"sh", "rustup"})
        mock = MockExecutor()
        mock.set_exit_code("sh", 1)
        config = Config(pre_commands={"Snapshot": "timeshift --create"})
        result = _run(config, host_environment, mock)
        assert result.failed
        assert "Snapshot" in result.error
        assert result.report.total == 0
        assert "rustup" not in mock.programs

    def test_post_command_failure_fails_the_run(self, host_environment, installed):
        installed.add("sh")
        mock = MockExecutor()
        mock.set_exit_code("sh", 2)
        config = Config(only=[StepId.RUSTUP], post_commands={"Reindex": "updatedb"})
        result = _run(config, host_environment, mock)
        assert result.post_command_failures == ["Reindex"]
        assert not result.report.has_failures()
        assert result.failed

    def test_custom_commands_run_as_steps(self, host_environment, installed):
        installed.add("sh")
        mock = MockExecutor()
        config = Config(
            only=[StepId.CUSTOM_COMMANDS],
            commands={"Dotfiles": "git pull", "Notes": "make sync"},
            custom_commands=["Notes"],
        )
        result = _run(config, host_environment, mock)
        assert result.report.render() == ["Notes: OK"]
        assert mock.call_log[0].args == ["-c", "make sync"]

    def test_cancelled_run(self, host_environment, installed):
        installed.update({"rustup", "pipx"})
        mock = MockExecutor()
        mock.set_interrupt("rustup")
        config = Config(only=[StepId.RUSTUP, StepId.PIPX], post_commands={"x": "true"})
        result = _run(config, host_environment, mock)
        assert result.cancelled
        assert result.failed
        assert result.report.render() == ["rustup: FAILED (interrupted)"]
        assert "pipx" not in mock.programs
        assert "sh" not in mock.programs

    def test_interrupted_pre_command_cancels(self, host_environment, installed):
        installed.update({"sh", "rustup"})
        mock = MockExecutor()
        mock.set_interrupt("sh")
        config = Config(pre_commands={"Snapshot": "timeshift --create"})
        result = _run(config, host_environment, mock)
        assert result.cancelled
        assert result.failed
        assert "Snapshot" in result.error
        assert result.report.total == 0
        assert "rustup" not in mock.programs

    def test_interrupted_post_command_cancels(self, host_environment, installed):
        installed.update({"sh", "rustup"})
        mock = MockExecutor()
        mock.set_interrupt("sh")
        config = Config(only=[StepId.RUSTUP], post_commands={"Reindex": "updatedb", "Backup": "restic backup"})
        result = _run(config, host_environment, mock)
        assert result.cancelled
        assert result.failed
        assert "Reindex" in result.error
        assert result.report.render() == ["rustup: OK"]
        assert mock.programs == ["rustup", "sh"]

    def test_interrupted_pre_sudo_cancels(self, host_environment, installed):
        installed.update({"sudo", "rustup"})
        mock = MockExecutor()
        mock.set_interrupt("/usr/bin/sudo")
        result = _run(Config(pre_sudo=True), host_environment, mock)
        assert result.cancelled
        assert result.failed
        assert "elevation" in result.error
        assert result.report.total == 0
        assert mock.programs == ["/usr/bin/sudo"]

    def test_pre_sudo_denied_is_fatal(self, host_environment, installed):
        result = _run(Config(pre_sudo=True), host_environment, MockExecutor())
        assert result.failed
        assert "elevation" in result.error
        assert result.report.total == 0

    def test_env_applied(self, host_environment, installed):
        environ = {}
        _run(Config(env={"HOMEBREW_NO_ANALYTICS": "1"}), host_environment, MockExecutor(), environ=environ)
        assert environ == {"HOMEBREW_NO_ANALYTICS": "1"}

    def test_to_dict(self, host_environment, installed):
        installed.add("rustup")
        result = _run(Config(only=[StepId.RUSTUP]), host_environment, MockExecutor())
        data = result.to_dict()
        assert data["failed"] is False
        assert data["dry_run"] is False
        assert data["report"]["entries"][0]["step"] == "rustup"
        assert data["report"]["status"] == "ok"
