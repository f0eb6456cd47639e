"""Music bounded context: songs and playback state."""

from discord_playlist.domain.music.entities import Song
from discord_playlist.domain.music.value_objects import PlaybackState

__all__ = ["Song", "PlaybackState"]
