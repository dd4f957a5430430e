"""
Tests for remote dispatch over SSH.
"""

from upkeep.adapters.mock import MockExecutor
from upkeep.core.engine.runner import Runner
from upkeep.core.models.config import Config, RemoteTarget
from upkeep.core.steps.remote import SSH_TRANSPORT_ERROR, remote_steps, ssh_command


class TestSshCommand:
    def test_non_interactive_invocation(self, make_context):
        config = Config(ssh_arguments=["-q"], cleanup=True)
        target = RemoteTarget(name="nas", host="admin@nas.lan", ssh_arguments=["-p", "2222"])
        spec = ssh_command(make_context(config=config), target)
        assert spec.program == "ssh"
        assert spec.args == [
            "-o", "ConnectTimeout=10",
            "-o", "BatchMode=yes",
            "-q",
            "-p", "2222",
            "admin@nas.lan",
            "env", "UPKEEP_PREFIX=nas",
            "upkeep", "run", "--yes", "--skip-notify", "--cleanup",
        ]

    def test_target_overrides(self, make_context):
        target = RemoteTarget(name="box", remote_command="~/.local/bin/upkeep", connect_timeout=3)
        spec = ssh_command(make_context(), target)
        assert "ConnectTimeout=3" in spec.args
        assert "~/.local/bin/upkeep" in spec.args
        assert "box" in spec.args


class TestRemoteSelection:
    def test_local_host_excluded(self, make_context):
        config = Config(remotes=[RemoteTarget(name="workstation"), RemoteTarget(name="nas")])
        steps = remote_steps(make_context(config=config))
        assert [s.label for s in steps] == ["Remote (nas)"]

    def test_local_host_excluded_by_destination(self, make_context):
        config = Config(remotes=[RemoteTarget(name="me", host="WorkStation")])
        assert remote_steps(make_context(config=config)) == []

    def test_host_limit(self, make_context):
        config = Config(
            remotes=[RemoteTarget(name="nas"), RemoteTarget(name="build-box")],
            remote_host_limit="^build",
        )
        assert [s.target.name for s in remote_steps(make_context(config=config))] == ["build-box"]

    def test_disabled_target(self, make_context):
        config = Config(remotes=[RemoteTarget(name="nas", enabled=False)])
        assert remote_steps(make_context(config=config)) == []


class TestRemoteDispatch:
    def test_one_unreachable_target(self, make_context, installed):
        installed.add("ssh")
        config = Config(remotes=[RemoteTarget(name="alpha"), RemoteTarget(name="beta")])

        class SelectiveSsh(MockExecutor):
            def run(self, ctx, spec):
                self.set_exit_code("ssh", SSH_TRANSPORT_ERROR if "beta" in spec.args else 0)
                return super().run(ctx, spec)

        ctx = make_context(config=config, executor=SelectiveSsh())
        report = Runner(ctx).run_all(remote_steps(ctx))
        assert report.render() == [
            "Remote (alpha): OK",
            "Remote (beta): FAILED (Cannot reach beta over ssh)",
        ]
        assert report.has_failures()

    def test_remote_failure_exit_code(self, make_context, installed):
        installed.add("ssh")
        mock = MockExecutor()
        mock.set_exit_code("ssh", 1)
        ctx = make_context(config=Config(remotes=[RemoteTarget(name="nas")]), executor=mock)
        report = Runner(ctx).run_all(remote_steps(ctx))
        assert report.entries[0].outcome.reason == "Remote upgrade on nas failed (exit 1)"

    def test_no_ssh_client(self, make_context, installed):
        ctx = make_context(config=Config(remotes=[RemoteTarget(name="nas")]))
        report = Runner(ctx).run_all(remote_steps(ctx))
        assert report.entries[0].outcome.skipped
