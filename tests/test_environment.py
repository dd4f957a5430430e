"""
Tests for host environment detection and cancellation plumbing.
"""

import signal

from upkeep.core.environment import HostEnvironment, platform_capabilities
from upkeep.core.interrupts import CancellationToken, install_interrupt_handler, restore_handlers


class TestPlatformCapabilities:
    def test_known_platforms(self):
        assert platform_capabilities("linux") == {"linux", "unix"}
        assert platform_capabilities("darwin") == {"macos", "unix"}
        assert platform_capabilities("freebsd14") == {"freebsd", "bsd", "unix"}
        assert platform_capabilities("win32") == {"windows"}

    def test_supports(self, host_environment):
        assert host_environment.supports(None)
        assert host_environment.supports(frozenset({"unix"}))
        assert not host_environment.supports(frozenset({"windows", "macos"}))
        assert not host_environment.is_windows

    def test_detect(self):
        env = HostEnvironment.detect()
        assert env.hostname
        assert env.capabilities == platform_capabilities(env.platform)


class TestCancellation:
    def test_token(self):
        token = CancellationToken()
        assert not token.is_cancelled()
        token.cancel()
        assert token.is_cancelled()
        token.reset()
        assert not token.is_cancelled()

    def test_sigint_only_sets_the_flag(self):
        token = CancellationToken()
        previous = install_interrupt_handler(token)
        try:
            signal.getsignal(signal.SIGINT)(signal.SIGINT, None)
        finally:
            restore_handlers(previous)
        assert token.is_cancelled()
        assert signal.getsignal(signal.SIGINT) is previous[signal.SIGINT]
