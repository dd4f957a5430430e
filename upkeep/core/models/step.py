"""
Step identity and outcome models — the Runner's bookkeeping contract.

``StepId`` is the stable key used by configuration (``only`` / ``disable``)
and by the report. ``StepOutcome`` is what the Runner records for every
step whose body it actually invoked.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field


def now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class StepId(str, Enum):
    """Closed set of step identities. Values double as config keys."""

    # Synthetic
    REMOTES = "remotes"
    CUSTOM_COMMANDS = "custom_commands"

    # Operating system
    SYSTEM = "system"
    FIRMWARE = "firmware"
    RESTARTS = "restarts"
    PKG = "pkg"
    AUDIT = "audit"

    # Linux
    SNAP = "snap"
    FLATPAK = "flatpak"
    DEB_GET = "deb_get"
    PACSTALL = "pacstall"
    DISTROBOX = "distrobox"

    # macOS
    BREW_FORMULA = "brew_formula"
    BREW_CASK = "brew_cask"
    MACPORTS = "macports"
    MAS = "mas"

    # Windows
    CHOCOLATEY = "chocolatey"
    SCOOP = "scoop"
    WINGET = "winget"

    # Unix
    NIX = "nix"
    GUIX = "guix"
    HOME_MANAGER = "home_manager"
    ASDF = "asdf"
    MISE = "mise"
    TLDR = "tldr"
    TMUX = "tmux"

    # Cross-platform
    RUSTUP = "rustup"
    CARGO = "cargo"
    PIPX = "pipx"
    UV = "uv"
    POETRY = "poetry"
    RYE = "rye"
    CONDA = "conda"
    MAMBA = "mamba"
    PIXI = "pixi"
    NODE = "node"
    YARN = "yarn"
    PNPM = "pnpm"
    DENO = "deno"
    BUN = "bun"
    GEM = "gem"
    GO = "go"
    JULIAUP = "juliaup"
    ELAN = "elan"
    GHCUP = "ghcup"
    STACK = "stack"
    OPAM = "opam"
    FLUTTER = "flutter"
    CHOOSENIM = "choosenim"
    HELM = "helm"
    KREW = "krew"
    GCLOUD = "gcloud"
    GITHUB_CLI_EXTENSIONS = "github_cli_extensions"
    CHEZMOI = "chezmoi"
    COMPOSER = "composer"
    MICRO = "micro"
    SPICETIFY = "spicetify"
    CLAM_AV_DB = "clam_av_db"
    CERTBOT = "certbot"


# Standard skip reasons
SKIP_TOOL_ABSENT = "tool not present"
SKIP_DISABLED = "disabled by config"
SKIP_PLATFORM = "not applicable on this platform"


class StepOutcome(BaseModel):
    """Result of one step invocation.

    Skipped outcomes are informational: they never count as failures.
    """

    status: Literal["ok", "skipped", "failed"] = "ok"
    reason: str = ""

    started_at: str = Field(default_factory=now_iso)
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    @classmethod
    def success(cls, **kwargs: Any) -> StepOutcome:
        """Create a success outcome."""
        return cls(status="ok", **kwargs)

    @classmethod
    def failure(cls, reason: str, **kwargs: Any) -> StepOutcome:
        """Create a failure outcome."""
        return cls(status="failed", reason=reason, **kwargs)

    @classmethod
    def skip(cls, reason: str = SKIP_TOOL_ABSENT, **kwargs: Any) -> StepOutcome:
        """Create a skip outcome."""
        return cls(status="skipped", reason=reason, **kwargs)
