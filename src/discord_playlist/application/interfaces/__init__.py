"""Ports consumed by the playlist engine."""

from discord_playlist.application.interfaces.media_resolver import (
    MediaResolver,
    ResolvedMedia,
    StreamHandle,
)
from discord_playlist.application.interfaces.output_channel import OutputChannel
from discord_playlist.application.interfaces.transport import (
    DispatcherHandle,
    EventedDispatcher,
    Transport,
)

__all__ = [
    "MediaResolver",
    "ResolvedMedia",
    "StreamHandle",
    "OutputChannel",
    "DispatcherHandle",
    "EventedDispatcher",
    "Transport",
]
