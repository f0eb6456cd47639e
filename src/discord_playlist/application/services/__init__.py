"""Application services: the per-guild playlist engine and its registry."""

from discord_playlist.application.services.playlist_engine import (
    DEFAULT_QUEUE_DISPLAY_LIMIT,
    PlaylistEngine,
)
from discord_playlist.application.services.registry import PlaylistRegistry

__all__ = ["DEFAULT_QUEUE_DISPLAY_LIMIT", "PlaylistEngine", "PlaylistRegistry"]
