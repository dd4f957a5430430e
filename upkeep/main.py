"""
upkeep — CLI entrypoint.

Usage:
    upkeep --help
    upkeep run --dry-run
    upkeep steps
    upkeep config check
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from upkeep import __version__
from upkeep.core.errors import StepFailed, UpkeepError
from upkeep.core.models.step import StepId
from upkeep.core.observability.logging_config import resolve_level, setup_logging

_STEP_CHOICE = click.Choice([step.value for step in StepId])


@click.group()
@click.version_option(version=__version__, prog_name="upkeep")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to upkeep.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """upkeep — upgrade everything on this machine in one go."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(level=resolve_level(verbose=verbose, quiet=quiet, debug=debug))


@cli.command()
@click.option("--dry-run", "-n", is_flag=True, help="Print commands instead of running them.")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Answer yes to package manager prompts.")
@click.option("--cleanup", is_flag=True, help="Also run cleanup commands.")
@click.option("--only", multiple=True, type=_STEP_CHOICE, help="Run only this step (repeatable).")
@click.option("--disable", multiple=True, type=_STEP_CHOICE, help="Do not run this step (repeatable).")
@click.option(
    "--custom-command",
    "custom_commands",
    multiple=True,
    help="Run only this configured command (repeatable).",
)
@click.option("--remote-host-limit", default=None, help="Regex limiting which remotes run.")
@click.option("--env", "env_pairs", multiple=True, help="Set KEY=VALUE for the run (repeatable).")
@click.option("--skip-notify", is_flag=True, help="No desktop notification at the end.")
@click.option("--pre-sudo", is_flag=True, help="Ask for elevation before the first step.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output the summary as JSON.")
@click.pass_context
def run(
    ctx: click.Context,
    dry_run: bool,
    assume_yes: bool,
    cleanup: bool,
    only: tuple[str, ...],
    disable: tuple[str, ...],
    custom_commands: tuple[str, ...],
    remote_host_limit: str | None,
    env_pairs: tuple[str, ...],
    skip_notify: bool,
    pre_sudo: bool,
    as_json: bool,
) -> None:
    """Upgrade every supported tool found on this host."""
    from upkeep.adapters.dry_run import DryRunExecutor
    from upkeep.core.config.loader import apply_overrides, load_config, parse_env_assignments
    from upkeep.core.environment import HostEnvironment
    from upkeep.core.interrupts import CancellationToken, install_interrupt_handler, restore_handlers
    from upkeep.core.use_cases.run import run_upgrade
    from upkeep.ui.breaking_changes import confirm_breaking_changes
    from upkeep.ui.notify import notify_desktop, summary_message
    from upkeep.ui.terminal import print_separator, print_summary

    environment = HostEnvironment.detect()
    cfg = apply_overrides(
        load_config(ctx.obj.get("config_path"), environment),
        dry_run=dry_run,
        assume_yes=assume_yes,
        cleanup=cleanup,
        only=only,
        disable=disable,
        custom_commands=custom_commands,
        remote_host_limit=remote_host_limit,
        env=parse_env_assignments(env_pairs),
        skip_notify=skip_notify,
        pre_sudo=pre_sudo,
    )

    if not confirm_breaking_changes(environment, assume_yes=cfg.assume_yes):
        click.secho("❌ Breaking changes not acknowledged", fg="red")
        sys.exit(1)

    token = CancellationToken()
    previous = install_interrupt_handler(token)
    try:
        result = run_upgrade(
            cfg,
            environment=environment,
            # stdout carries only the JSON document
            executor=DryRunExecutor(echo=False) if as_json and cfg.dry_run else None,
            cancellation=token,
            announce=None if as_json else print_separator,
        )
    finally:
        restore_handlers(previous)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        print_summary(result.report)
        if result.error:
            color = "yellow" if result.cancelled else "red"
            click.secho(f"\n{'⊘' if result.cancelled else '❌'} {result.error}", fg=color)
        for name in result.post_command_failures:
            click.secho(f"❌ Post-command {name!r} failed", fg="red")

    if not cfg.skip_notify and not result.run_mode.dry:
        notify_desktop(environment, summary_message(result.failed))

    if result.failed:
        raise StepFailed()


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def steps(ctx: click.Context, as_json: bool) -> None:
    """List the steps that apply to this host, in run order."""
    from upkeep.core.config.loader import load_config
    from upkeep.core.context import ExecutionContext
    from upkeep.core.elevation import ElevationProvider
    from upkeep.core.environment import HostEnvironment
    from upkeep.core.models.run import RunMode
    from upkeep.core.steps.catalog import build_catalog

    environment = HostEnvironment.detect()
    cfg = load_config(ctx.obj.get("config_path"), environment)
    exec_ctx = ExecutionContext.new(
        run_mode=RunMode.SIMULATE,
        elevation=ElevationProvider(preferred=cfg.sudo_command),
        config=cfg,
        environment=environment,
    )
    catalog = build_catalog(exec_ctx)

    if as_json:
        entries = [
            {"step": s.step_id.value, "label": s.label, "enabled": cfg.should_run(s.step_id)}
            for s in catalog
        ]
        click.echo(json.dumps({"platform": environment.platform, "steps": entries}, indent=2))
        return

    click.secho(f"🔧 Steps on {environment.hostname} ({environment.platform}):", fg="cyan", bold=True)
    for s in catalog:
        if cfg.should_run(s.step_id):
            click.echo(f"   ✓ {s.label}  [{s.step_id.value}]")
        else:
            click.secho(f"   ⊘ {s.label}  [{s.step_id.value}] (disabled)", dim=True)


# ── Register sub-command groups from upkeep/ui/cli/ ─────────────

from upkeep.ui.cli.config import config  # noqa: E402

cli.add_command(config)


def main() -> None:
    """Console-script entry: map upkeep errors to exit codes."""
    try:
        cli.main(standalone_mode=False)
    except StepFailed:
        # Per-step detail is already in the summary
        sys.exit(1)
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except UpkeepError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
