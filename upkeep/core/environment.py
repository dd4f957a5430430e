"""
Host environment — resolved once at startup, passed explicitly.

Holds everything about the invoking host that steps are allowed to
look at: its name, its platform capabilities, the user's home and base
directories, and whether we already run with elevated privileges.

Platform capabilities drive the step catalog. A step declares the
capability it needs ("linux", "macos", "unix", "windows", ...) and the
catalog keeps it only when the host provides it. Tests construct a
``HostEnvironment`` with a synthetic capability set to exercise any
platform's catalog on any machine.
"""

from __future__ import annotations

import os
import socket
import sys
from dataclasses import dataclass, field
from pathlib import Path

# sys.platform prefix → capability set
_PLATFORM_CAPABILITIES: tuple[tuple[str, frozenset[str]], ...] = (
    ("linux", frozenset({"linux", "unix"})),
    ("darwin", frozenset({"macos", "unix"})),
    ("freebsd", frozenset({"freebsd", "bsd", "unix"})),
    ("openbsd", frozenset({"openbsd", "bsd", "unix"})),
    ("netbsd", frozenset({"netbsd", "bsd", "unix"})),
    ("dragonfly", frozenset({"dragonfly", "bsd", "unix"})),
    ("win32", frozenset({"windows"})),
    ("cygwin", frozenset({"windows"})),
)


def platform_capabilities(platform: str) -> frozenset[str]:
    """Map a ``sys.platform`` value to the capabilities it provides."""
    for prefix, capabilities in _PLATFORM_CAPABILITIES:
        if platform.startswith(prefix):
            return capabilities
    return frozenset({"unix"}) if os.name == "posix" else frozenset()


def _is_root() -> bool:
    if hasattr(os, "geteuid"):
        return os.geteuid() == 0
    try:
        import ctypes

        return bool(ctypes.windll.shell32.IsUserAnAdmin())  # type: ignore[attr-defined]
    except (AttributeError, OSError):
        return False


def _config_dir(home: Path, platform: str) -> Path:
    if platform.startswith("win") and os.environ.get("APPDATA"):
        return Path(os.environ["APPDATA"])
    xdg = os.environ.get("XDG_CONFIG_HOME")
    return Path(xdg) if xdg else home / ".config"


def _data_dir(home: Path, platform: str) -> Path:
    if platform.startswith("win") and os.environ.get("LOCALAPPDATA"):
        return Path(os.environ["LOCALAPPDATA"])
    xdg = os.environ.get("XDG_DATA_HOME")
    return Path(xdg) if xdg else home / ".local" / "share"


@dataclass(frozen=True)
class HostEnvironment:
    """Immutable description of the invoking host."""

    hostname: str
    platform: str
    capabilities: frozenset[str] = field(default_factory=frozenset)
    home_dir: Path = field(default_factory=Path.home)
    config_dir: Path = field(default_factory=lambda: Path.home() / ".config")
    data_dir: Path = field(default_factory=lambda: Path.home() / ".local" / "share")
    is_root: bool = False

    @classmethod
    def detect(cls) -> HostEnvironment:
        """Probe the current process's host."""
        home = Path.home()
        platform = sys.platform
        return cls(
            hostname=socket.gethostname(),
            platform=platform,
            capabilities=platform_capabilities(platform),
            home_dir=home,
            config_dir=_config_dir(home, platform),
            data_dir=_data_dir(home, platform),
            is_root=_is_root(),
        )

    def supports(self, platforms: frozenset[str] | None) -> bool:
        """Whether this host provides any of ``platforms`` (None = all)."""
        if platforms is None:
            return True
        return bool(self.capabilities & platforms)

    @property
    def is_windows(self) -> bool:
        return "windows" in self.capabilities
