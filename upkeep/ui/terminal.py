"""
Terminal output — step separators and the end-of-run summary.
"""

from __future__ import annotations

import os
import shutil

import click

from upkeep.core.engine.report import Report

PREFIX_ENV_VAR = "UPKEEP_PREFIX"

_STATUS_COLORS = {"ok": "green", "failed": "red", "skipped": "yellow"}
_STATUS_TEXT = {"ok": "OK", "failed": "FAILED", "skipped": "SKIPPED"}


def _prefixed(label: str) -> str:
    # Set by the remote dispatcher so nested runs say which host they are
    prefix = os.environ.get(PREFIX_ENV_VAR)
    return f"{prefix}: {label}" if prefix else label


def print_separator(label: str) -> None:
    """``── label ─────`` across the terminal width."""
    width = min(shutil.get_terminal_size((80, 20)).columns, 100)
    head = f"── {_prefixed(label)} "
    click.secho(head + "─" * max(width - len(head), 3), fg="cyan", bold=True)


def print_summary(report: Report) -> None:
    """Coloured one-line-per-step summary."""
    if not report.entries:
        return
    click.echo()
    print_separator("Summary")
    for entry in report.entries:
        status = entry.outcome.status
        click.echo(f"{_prefixed(entry.label)}: ", nl=False)
        text = _STATUS_TEXT[status]
        if entry.outcome.reason and status != "ok":
            text += f" ({entry.outcome.reason})"
        click.secho(text, fg=_STATUS_COLORS[status])
