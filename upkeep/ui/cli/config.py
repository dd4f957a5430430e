"""
CLI commands for the configuration file.

Thin wrappers over ``upkeep.core.config.loader``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click


def _resolve_config_path(ctx: click.Context) -> Path | None:
    """Explicit ``--config`` path, else the first existing file."""
    config_path: Path | None = ctx.obj.get("config_path")
    if config_path is None:
        from upkeep.core.config.loader import find_config_file
        from upkeep.core.environment import HostEnvironment

        config_path = find_config_file(HostEnvironment.detect())
    return config_path


@click.group()
def config() -> None:
    """Configuration — reference, path, check, edit."""


@config.command("reference")
def config_reference() -> None:
    """Print the annotated example configuration."""
    from upkeep.core.config.loader import example_config

    click.echo(example_config(), nl=False)


@config.command("path")
@click.pass_context
def config_path(ctx: click.Context) -> None:
    """Show which configuration file is used."""
    path = _resolve_config_path(ctx)
    if path is None:
        from upkeep.core.config.loader import default_config_path
        from upkeep.core.environment import HostEnvironment

        click.echo(f"{default_config_path(HostEnvironment.detect())} (not created yet)")
        return
    click.echo(str(path))


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate the configuration file."""
    from upkeep.core.config.loader import load_config
    from upkeep.core.errors import ConfigError

    path = _resolve_config_path(ctx)
    try:
        cfg = load_config(path)
    except ConfigError as e:
        if as_json:
            click.echo(json.dumps({"valid": False, "path": str(path), "error": str(e)}, indent=2))
        else:
            click.secho("❌ Configuration errors:", fg="red", bold=True)
            click.echo(f"   • {e}")
        sys.exit(1)

    if as_json:
        result = {"valid": True, "path": str(path) if path else None, "config": cfg.model_dump(mode="json")}
        click.echo(json.dumps(result, indent=2))
        return

    click.secho("✅ Configuration is valid", fg="green", bold=True)
    click.echo(f"   File: {path if path else '(defaults)'}")
    if cfg.only:
        click.echo(f"   Only: {', '.join(s.value for s in cfg.only)}")
    if cfg.disable:
        click.echo(f"   Disabled: {', '.join(s.value for s in cfg.disable)}")
    click.echo(f"   Remotes: {len(cfg.remotes)}")
    click.echo(f"   Custom commands: {len(cfg.commands)}")


@config.command("edit")
@click.pass_context
def config_edit(ctx: click.Context) -> None:
    """Open the configuration file in $EDITOR (created from the example)."""
    from upkeep.core.config.loader import default_config_path, example_config
    from upkeep.core.environment import HostEnvironment

    path = _resolve_config_path(ctx) or default_config_path(HostEnvironment.detect())
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(example_config(), encoding="utf-8")
        click.secho(f"📝 Created {path}", fg="green")
    click.edit(filename=str(path))
