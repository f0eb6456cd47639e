"""Discord cogs - command handlers."""

from discord_playlist.infrastructure.discord.cogs.playlist_cog import PlaylistCog

__all__ = ["PlaylistCog"]
