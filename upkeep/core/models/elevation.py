"""Elevation helper kinds and the resolved elevation state."""

from __future__ import annotations

from enum import Enum


class ElevationKind(str, Enum):
    """Known privilege elevation helpers, in detection preference order."""

    DOAS = "doas"
    SUDO = "sudo"
    RUN0 = "run0"
    PLEASE = "please"
    PKEXEC = "pkexec"
    GSUDO = "gsudo"


class ElevationState(str, Enum):
    """Terminal states of elevation detection."""

    NOT_NEEDED = "not_needed"     # already root / administrator
    AVAILABLE = "available"       # a helper was found
    UNAVAILABLE = "unavailable"   # no helper on this host
