"""
Logging configuration — one setup call for the upkeep CLI.

``main.cli`` calls :func:`setup_logging` once; modules log through
``logging.getLogger(__name__)`` and inherit it.

Console level, highest precedence first:
    --debug > --verbose > --quiet > UPKEEP_LOG_LEVEL > WARNING

UPKEEP_LOG_FILE adds a file handler (level UPKEEP_LOG_FILE_LEVEL, or the
console level). Tool output never goes through logging: child processes
write to the terminal directly. Logs carry the driver's side of a run:
step markers, elevation, config resolution.
"""

from __future__ import annotations

import logging
import os
import sys

LEVEL_ENV_VAR = "UPKEEP_LOG_LEVEL"
FILE_ENV_VAR = "UPKEEP_LOG_FILE"
FILE_LEVEL_ENV_VAR = "UPKEEP_LOG_FILE_LEVEL"

# ── Format strings ──────────────────────────────────────────────

# Plain messages: warnings shown under the tool output
_CONSOLE_PLAIN = ("%(message)s", None)
# Step markers with a clock
_CONSOLE_TIMED = ("%(asctime)s %(message)s", "%H:%M:%S")
# Full origin for debugging
_CONSOLE_DEBUG = ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S")

_FILE_FORMAT = ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%Y-%m-%d %H:%M:%S")


def resolve_level(verbose: bool = False, quiet: bool = False, debug: bool = False) -> str:
    """Pick the console level from CLI flags, falling back to the env var."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(LEVEL_ENV_VAR, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Install the console handler and the optional file handler.

    Args:
        level: Console level name.
        log_file: Log file path. Defaults to ``UPKEEP_LOG_FILE``.
        log_file_level: File level name. Defaults to
            ``UPKEEP_LOG_FILE_LEVEL``, then ``level``.
    """
    console_level = _parse_level(level)
    log_file = log_file or os.environ.get(FILE_ENV_VAR) or None
    log_file_level = log_file_level or os.environ.get(FILE_LEVEL_ENV_VAR) or None

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_handler(logging.StreamHandler(sys.stderr), console_level, *_console_format(console_level)))
    lowest = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        root.addHandler(_handler(logging.FileHandler(log_file, encoding="utf-8"), file_level, *_FILE_FORMAT))
        lowest = min(lowest, file_level)

    root.setLevel(lowest)
    logging.raiseExceptions = False


def _console_format(level: int) -> tuple[str, str | None]:
    if level <= logging.DEBUG:
        return _CONSOLE_DEBUG
    if level <= logging.INFO:
        return _CONSOLE_TIMED
    return _CONSOLE_PLAIN


def _handler(handler: logging.Handler, level: int, fmt: str, datefmt: str | None) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _parse_level(level: str | None) -> int:
    """Level name → numeric level; unknown names mean WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
