"""
Cooperative cancellation.

The interrupt handler never raises into the running step: it only sets
a flag. A child process in the foreground receives the terminal's
SIGINT on its own (same process group), exits, and the executor then
notices the flag. The Runner checks the flag again at every step
boundary and stops the pass with a partial report.
"""

from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class CancellationToken:
    """Process-wide "please stop" flag."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def reset(self) -> None:
        self._event.clear()

    def __repr__(self) -> str:
        return f"<CancellationToken cancelled={self.is_cancelled()}>"


def install_interrupt_handler(token: CancellationToken) -> dict[int, Any]:
    """Route SIGINT/SIGTERM to ``token.cancel()``.

    Returns the previous handlers so callers (tests) can restore them
    with :func:`restore_handlers`.
    """

    def _handler(signum: int, _frame: object | None) -> None:
        logger.debug("Received signal %d, cancelling run", signum)
        token.cancel()

    previous: dict[int, Any] = {}
    for name in ("SIGINT", "SIGTERM"):
        signum = getattr(signal, name, None)
        if signum is None:
            continue
        previous[signum] = signal.signal(signum, _handler)
    return previous


def restore_handlers(previous: dict[int, Callable[..., Any] | int | None]) -> None:
    """Reinstall handlers returned by :func:`install_interrupt_handler`."""
    for signum, handler in previous.items():
        if handler is not None:
            signal.signal(signum, handler)
