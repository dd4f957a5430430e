"""
Tool definitions — the data half of the step catalog.

Each entry is a ``ToolStep``: an id, a display label, the commands that
upgrade the tool and the platforms it applies to. Adding a tool means
adding an entry here; there is no per-tool code.

Lists are in execution order.
"""

from __future__ import annotations

from upkeep.core.models.step import StepId
from upkeep.core.steps.base import ToolCommand as Cmd
from upkeep.core.steps.base import ToolStep

LINUX = frozenset({"linux"})
MACOS = frozenset({"macos"})
UNIX = frozenset({"unix"})
WINDOWS = frozenset({"windows"})
FREEBSD = frozenset({"freebsd", "dragonfly"})
OPENBSD = frozenset({"openbsd"})
BREW_HOSTS = frozenset({"linux", "macos"})


# ── Platform group ──────────────────────────────────────────────

PLATFORM_TOOLS: tuple[ToolStep, ...] = (
    # Linux
    ToolStep(StepId.SNAP, "snap", (Cmd("snap", ("refresh",), elevated=True),), platforms=LINUX),
    ToolStep(
        StepId.FLATPAK,
        "Flatpak",
        (
            Cmd("flatpak", ("update",), yes_args=("-y",)),
            Cmd("flatpak", ("uninstall", "--unused"), yes_args=("-y",), cleanup=True),
        ),
        platforms=LINUX,
    ),
    ToolStep(StepId.DEB_GET, "deb-get", (Cmd("deb-get", ("update",)), Cmd("deb-get", ("upgrade",))), platforms=LINUX),
    ToolStep(StepId.PACSTALL, "pacstall", (Cmd("pacstall", ("-U",)), Cmd("pacstall", ("-Up",))), platforms=LINUX),
    ToolStep(StepId.DISTROBOX, "distrobox", (Cmd("distrobox", ("upgrade", "--all")),), platforms=LINUX),
    ToolStep(
        StepId.FIRMWARE,
        "Firmware upgrades",
        (Cmd("fwupdmgr", ("refresh",)), Cmd("fwupdmgr", ("update",), yes_args=("-y",))),
        platforms=LINUX,
    ),
    ToolStep(StepId.RESTARTS, "Restarts", (Cmd("needrestart", (), elevated=True),), platforms=LINUX),
    # Homebrew (Linux and macOS)
    ToolStep(
        StepId.BREW_FORMULA,
        "Brew",
        (
            Cmd("brew", ("update",)),
            Cmd("brew", ("upgrade", "--formula")),
            Cmd("brew", ("cleanup",), cleanup=True),
        ),
        platforms=BREW_HOSTS,
    ),
    # macOS
    ToolStep(
        StepId.BREW_CASK,
        "Brew Cask",
        (Cmd("brew", ("upgrade", "--cask")), Cmd("brew", ("cleanup",), cleanup=True)),
        platforms=MACOS,
    ),
    ToolStep(
        StepId.MACPORTS,
        "MacPorts",
        (
            Cmd("port", ("selfupdate",), elevated=True),
            Cmd("port", ("-u", "upgrade", "outdated"), elevated=True),
            Cmd("port", ("-N", "reclaim"), elevated=True, cleanup=True),
        ),
        platforms=MACOS,
    ),
    ToolStep(StepId.MAS, "App Store", (Cmd("mas", ("upgrade",)),), platforms=MACOS),
    ToolStep(
        StepId.SYSTEM,
        "System upgrade",
        (Cmd("softwareupdate", ("--install", "--all"), elevated=True),),
        platforms=MACOS,
    ),
    # BSD
    ToolStep(
        StepId.PKG,
        "FreeBSD Packages",
        (Cmd("pkg", ("upgrade",), elevated=True, yes_args=("-y",)),),
        platforms=FREEBSD,
    ),
    ToolStep(
        StepId.SYSTEM,
        "FreeBSD Upgrade",
        (Cmd("freebsd-update", ("fetch", "install"), elevated=True),),
        platforms=frozenset({"freebsd"}),
    ),
    ToolStep(StepId.AUDIT, "FreeBSD Audit", (Cmd("pkg", ("audit", "-Fr"), elevated=True),), platforms=FREEBSD),
    ToolStep(StepId.PKG, "OpenBSD Packages", (Cmd("pkg_add", ("-u",), elevated=True),), platforms=OPENBSD),
    ToolStep(StepId.SYSTEM, "OpenBSD Upgrade", (Cmd("syspatch", (), elevated=True),), platforms=OPENBSD),
    # Windows
    ToolStep(
        StepId.CHOCOLATEY,
        "Chocolatey",
        (Cmd("choco", ("upgrade", "all"), elevated=True, yes_args=("-y",)),),
        platforms=WINDOWS,
    ),
    ToolStep(
        StepId.SCOOP,
        "Scoop",
        (
            Cmd("scoop", ("update",)),
            Cmd("scoop", ("update", "*")),
            Cmd("scoop", ("cleanup", "*"), cleanup=True),
        ),
        platforms=WINDOWS,
    ),
    ToolStep(
        StepId.WINGET,
        "Winget",
        (Cmd("winget", ("upgrade", "--all"), yes_args=("--accept-package-agreements",)),),
        platforms=WINDOWS,
    ),
)


# ── Unix group ──────────────────────────────────────────────────

UNIX_TOOLS: tuple[ToolStep, ...] = (
    ToolStep(StepId.NIX, "nix", (Cmd("nix-channel", ("--update",)), Cmd("nix-env", ("--upgrade",))), platforms=UNIX),
    ToolStep(StepId.GUIX, "guix", (Cmd("guix", ("pull",)), Cmd("guix", ("package", "-u"))), platforms=UNIX),
    ToolStep(StepId.HOME_MANAGER, "home-manager", (Cmd("home-manager", ("switch",)),), platforms=UNIX),
    ToolStep(StepId.ASDF, "asdf", (Cmd("asdf", ("plugin", "update", "--all")),), platforms=UNIX),
    ToolStep(StepId.MISE, "mise", (Cmd("mise", ("plugins", "update")), Cmd("mise", ("upgrade",))), platforms=UNIX),
    ToolStep(
        StepId.TMUX,
        "tmux",
        (Cmd("~/.tmux/plugins/tpm/bin/update_plugins", ("all",)),),
        platforms=UNIX,
    ),
    ToolStep(StepId.TLDR, "TLDR", (Cmd("tldr", ("--update",)),), platforms=UNIX),
)


# ── Cross-platform group ────────────────────────────────────────

GENERIC_TOOLS: tuple[ToolStep, ...] = (
    ToolStep(StepId.RYE, "rye", (Cmd("rye", ("self", "update")),)),
    ToolStep(StepId.ELAN, "elan", (Cmd("elan", ("self", "update")), Cmd("elan", ("update",)))),
    ToolStep(StepId.RUSTUP, "rustup", (Cmd("rustup", ("update",)),)),
    ToolStep(StepId.JULIAUP, "juliaup", (Cmd("juliaup", ("update",)),)),
    ToolStep(StepId.CHOOSENIM, "choosenim", (Cmd("choosenim", ("update", "self")), Cmd("choosenim", ("update", "stable")))),
    ToolStep(
        StepId.CARGO,
        "cargo",
        (Cmd("cargo", ("install-update", "--git", "--all")),),
        requires=("cargo", "cargo-install-update"),
    ),
    ToolStep(StepId.FLUTTER, "Flutter", (Cmd("flutter", ("upgrade",)),)),
    ToolStep(StepId.GO, "gup", (Cmd("gup", ("update",)),)),
    ToolStep(
        StepId.OPAM,
        "opam",
        (
            Cmd("opam", ("update",)),
            Cmd("opam", ("upgrade",), yes_args=("--yes",)),
            Cmd("opam", ("clean",), cleanup=True),
        ),
    ),
    ToolStep(StepId.PIPX, "pipx", (Cmd("pipx", ("upgrade-all",)),)),
    ToolStep(StepId.CONDA, "conda", (Cmd("conda", ("update", "--all"), yes_args=("-y",)),)),
    ToolStep(StepId.MAMBA, "mamba", (Cmd("mamba", ("update", "--all"), yes_args=("-y",)),)),
    ToolStep(StepId.PIXI, "pixi", (Cmd("pixi", ("self-update",)),)),
    ToolStep(StepId.GHCUP, "ghcup", (Cmd("ghcup", ("upgrade",)),)),
    ToolStep(StepId.STACK, "stack", (Cmd("stack", ("upgrade",)),)),
    ToolStep(StepId.CHEZMOI, "chezmoi", (Cmd("chezmoi", ("update",)),)),
    ToolStep(StepId.NODE, "npm", (Cmd("npm", ("update", "-g")),)),
    ToolStep(StepId.YARN, "yarn", (Cmd("yarn", ("global", "upgrade")),)),
    ToolStep(StepId.PNPM, "pnpm", (Cmd("pnpm", ("update", "-g")),)),
    ToolStep(StepId.DENO, "deno", (Cmd("deno", ("upgrade",)),)),
    ToolStep(StepId.COMPOSER, "composer", (Cmd("composer", ("global", "update")),)),
    ToolStep(StepId.KREW, "krew", (Cmd("kubectl", ("krew", "upgrade")),), requires=("kubectl", "kubectl-krew")),
    ToolStep(StepId.HELM, "helm", (Cmd("helm", ("repo", "update")),)),
    ToolStep(
        StepId.GEM,
        "gem",
        (Cmd("gem", ("update", "--user-install")), Cmd("gem", ("cleanup", "--user-install"), cleanup=True)),
    ),
    ToolStep(StepId.GCLOUD, "gcloud", (Cmd("gcloud", ("components", "update", "--quiet")),)),
    ToolStep(StepId.MICRO, "micro", (Cmd("micro", ("-plugin", "update")),)),
    ToolStep(StepId.SPICETIFY, "spicetify", (Cmd("spicetify", ("upgrade",)),)),
    ToolStep(StepId.GITHUB_CLI_EXTENSIONS, "GitHub CLI Extensions", (Cmd("gh", ("extension", "upgrade", "--all")),)),
    ToolStep(StepId.CERTBOT, "Certbot", (Cmd("certbot", ("renew",), elevated=True),)),
    ToolStep(StepId.CLAM_AV_DB, "ClamAV Databases", (Cmd("freshclam", (), elevated=True),)),
    ToolStep(StepId.POETRY, "Poetry", (Cmd("poetry", ("self", "update")),)),
    ToolStep(StepId.UV, "uv", (Cmd("uv", ("self", "update")),)),
    ToolStep(StepId.BUN, "bun", (Cmd("bun", ("upgrade",)),)),
)
