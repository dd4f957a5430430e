"""
Desktop notification at the end of a run.

Best effort: a missing notifier or a failing one is logged and ignored.
Never sent in simulate mode.
"""

from __future__ import annotations

import logging
import shutil
import subprocess

from upkeep.core.environment import HostEnvironment

logger = logging.getLogger(__name__)

TITLE = "upkeep"


def notification_command(environment: HostEnvironment, message: str) -> list[str] | None:
    """Argv for the platform notifier, or None when there is none."""
    if "macos" in environment.capabilities:
        osascript = shutil.which("osascript")
        if osascript is None:
            return None
        escaped = message.replace("\\", "\\\\").replace('"', '\\"')
        return [osascript, "-e", f'display notification "{escaped}" with title "{TITLE}"']
    if "unix" in environment.capabilities:
        notify_send = shutil.which("notify-send")
        if notify_send is None:
            return None
        return [notify_send, "--app-name", TITLE, TITLE, message]
    return None


def notify_desktop(environment: HostEnvironment, message: str) -> bool:
    """Show ``message``. Returns whether a notifier was run successfully."""
    argv = notification_command(environment, message)
    if argv is None:
        logger.debug("No desktop notifier available")
        return False
    try:
        proc = subprocess.run(argv, capture_output=True, timeout=10, check=False)
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("Desktop notification failed: %s", e)
        return False
    return proc.returncode == 0


def summary_message(failed: bool) -> str:
    return "Upgrade finished with errors" if failed else "Upgrade finished"
