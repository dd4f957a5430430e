"""
Breaking-changes acknowledgement.

The first run of a new major version prints what changed and asks the
user to confirm. Confirmation writes a keep-file under the data dir so
the question is asked once per major version.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import click

from upkeep import __version__
from upkeep.core.environment import HostEnvironment

logger = logging.getLogger(__name__)

SKIP_ENV_VAR = "UPKEEP_SKIP_BREAKING_CHANGES"

NOTES: dict[str, list[str]] = {
    "1": [
        "Configuration moved to upkeep.yml (YAML).",
        "Steps are selected with `only` / `disable` using step ids; see `upkeep steps`.",
        "Remote hosts are upgraded non-interactively (ssh BatchMode, --yes).",
    ],
}


def major_version(version: str = __version__) -> str:
    return version.split(".", 1)[0]


def keep_file(environment: HostEnvironment, version: str = __version__) -> Path:
    return environment.data_dir / "upkeep" / f"breaking_changes_{major_version(version)}"


def should_ask(environment: HostEnvironment, version: str = __version__) -> bool:
    """Whether this major version has notes that were not acknowledged yet."""
    if os.environ.get(SKIP_ENV_VAR):
        return False
    if major_version(version) not in NOTES:
        return False
    return not keep_file(environment, version).exists()


def acknowledge(environment: HostEnvironment, version: str = __version__) -> None:
    path = keep_file(environment, version)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch()
    logger.debug("Breaking changes acknowledged: %s", path)


def confirm_breaking_changes(
    environment: HostEnvironment,
    assume_yes: bool = False,
    version: str = __version__,
) -> bool:
    """Show the notes and ask. Returns False when the user declines."""
    if not should_ask(environment, version):
        return True

    click.secho(f"⚠️  Breaking changes in upkeep {major_version(version)}.x:", fg="yellow", bold=True)
    for note in NOTES[major_version(version)]:
        click.echo(f"   • {note}")
    click.echo()

    if not assume_yes and not click.confirm("Continue?", default=True):
        return False

    acknowledge(environment, version)
    return True
