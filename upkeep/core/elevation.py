"""
Privilege elevation — find a sudo-like helper and use it sparingly.

Detection is a ``shutil.which`` probe in a fixed preference order and
never spawns anything. Elevation itself is lazy: the first step that
asks for an elevated command triggers the helper's credential-warming
command (``sudo -v`` and friends), which is where the user types a
password. The outcome is cached for the rest of the process, so a run
with twenty privileged steps prompts at most once.

The warming command goes through the context's executor like any other
command, so simulate mode prints it instead of running it.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from typing import TYPE_CHECKING

from upkeep.core.environment import HostEnvironment
from upkeep.core.errors import CommandNotFound, ElevationDenied, NonZeroExit
from upkeep.core.models.command import CommandSpec
from upkeep.core.models.elevation import ElevationKind, ElevationState

if TYPE_CHECKING:
    from upkeep.core.context import ExecutionContext

logger = logging.getLogger(__name__)

_UNIX_ORDER = (
    ElevationKind.DOAS,
    ElevationKind.SUDO,
    ElevationKind.RUN0,
    ElevationKind.PLEASE,
    ElevationKind.PKEXEC,
)
_WINDOWS_ORDER = (ElevationKind.GSUDO, ElevationKind.SUDO)

# Cheap command that makes the helper ask for (and cache) credentials
_WARM_ARGS: dict[ElevationKind, list[str]] = {
    ElevationKind.DOAS: ["true"],
    ElevationKind.SUDO: ["-v"],
    ElevationKind.RUN0: ["true"],
    ElevationKind.PLEASE: ["-w"],
    ElevationKind.PKEXEC: ["true"],
    ElevationKind.GSUDO: ["cache", "on"],
}


@dataclass(frozen=True)
class ElevationHelper:
    """A located elevation helper binary."""

    kind: ElevationKind
    path: str

    @property
    def warm_args(self) -> list[str]:
        return list(_WARM_ARGS[self.kind])


def detect(
    environment: HostEnvironment,
    preferred: ElevationKind | None = None,
) -> tuple[ElevationState, ElevationHelper | None]:
    """Probe the host for an elevation helper.

    Args:
        environment: The host to probe.
        preferred: Only look for this helper (``sudo_command`` config).

    Returns:
        (state, helper). ``helper`` is set only for ``AVAILABLE``.
    """
    if environment.is_root:
        return ElevationState.NOT_NEEDED, None

    if preferred is not None:
        candidates: tuple[ElevationKind, ...] = (preferred,)
    elif environment.is_windows:
        candidates = _WINDOWS_ORDER
    else:
        candidates = _UNIX_ORDER

    for kind in candidates:
        path = shutil.which(kind.value)
        if path:
            return ElevationState.AVAILABLE, ElevationHelper(kind=kind, path=path)

    return ElevationState.UNAVAILABLE, None


class ElevationProvider:
    """Lazily resolved, process-wide elevation state.

    The state is unknown until first use, then settles on one of
    ``ElevationState`` and never changes. ``elevate`` is idempotent:
    the helper is invoked at most once whether it succeeds or not.
    """

    def __init__(
        self,
        preferred: ElevationKind | None = None,
        state: ElevationState | None = None,
        helper: ElevationHelper | None = None,
    ):
        self._preferred = preferred
        self._state = state
        self._helper = helper
        self._elevated = False
        self._denied: str | None = None
        self._requests = 0

    @property
    def state(self) -> ElevationState | None:
        """Resolved state, or None while still undetected."""
        return self._state

    @property
    def helper(self) -> ElevationHelper | None:
        return self._helper

    @property
    def requests(self) -> int:
        """How many times the helper was actually asked to elevate."""
        return self._requests

    def resolve(self, environment: HostEnvironment) -> ElevationState:
        """Detect on first call, return the cached state afterwards."""
        if self._state is None:
            self._state, self._helper = detect(environment, self._preferred)
            logger.debug(
                "Elevation: %s%s",
                self._state.value,
                f" via {self._helper.path}" if self._helper else "",
            )
        return self._state

    def elevate(self, ctx: ExecutionContext) -> None:
        """Make sure privileged commands can run.

        Raises:
            ElevationDenied: No helper exists, or the user declined / the
                helper failed. Cached: later calls raise again without
                prompting.
        """
        if self._elevated:
            return
        if self._denied is not None:
            raise ElevationDenied(self._denied)

        state = self.resolve(ctx.environment)
        if state is ElevationState.NOT_NEEDED:
            self._elevated = True
            return
        if state is ElevationState.UNAVAILABLE or self._helper is None:
            wanted = self._preferred.value if self._preferred else "sudo, doas, ..."
            self._denied = f"No privilege elevation helper found ({wanted})"
            raise ElevationDenied(self._denied)

        helper = self._helper
        self._requests += 1
        logger.info("Requesting elevated privileges via %s", helper.kind.value)
        try:
            ctx.executor.run(ctx, CommandSpec(program=helper.path, args=helper.warm_args))
        except (NonZeroExit, CommandNotFound) as e:
            self._denied = f"{helper.kind.value} failed to elevate: {e}"
            raise ElevationDenied(self._denied) from e

        self._elevated = True

    def prefix(self, ctx: ExecutionContext) -> list[str]:
        """Argv prefix for an elevated command (elevating first)."""
        self.elevate(ctx)
        if self._state is ElevationState.NOT_NEEDED or self._helper is None:
            return []
        return [self._helper.path]

    def __repr__(self) -> str:
        state = self._state.value if self._state else "unresolved"
        return f"<ElevationProvider state={state} elevated={self._elevated}>"
