"""Per-guild music playlist bot for Discord."""

__version__ = "0.1.0"
