"""upkeep — keep every package manager on a host up to date in one pass."""

__version__ = "1.0.0"
