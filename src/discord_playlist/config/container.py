"""Dependency Injection Container

Owns the application's long-lived objects: the media resolver, the
guild → playlist registry and the command handler. Each is created on first
access and cached for the lifetime of the container.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import ErrorMessages

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ..application.commands.handler import PlaylistCommandHandler
    from ..application.interfaces.media_resolver import MediaResolver
    from ..application.interfaces.transport import Transport
    from ..application.services.registry import PlaylistRegistry
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed.
    """

    settings: Settings
    _bot: Bot | None = None

    _media_resolver: MediaResolver | None = None
    _playlist_registry: PlaylistRegistry | None = None
    _command_handler: PlaylistCommandHandler | None = None

    def set_bot(self, bot: Bot) -> None:
        """Set the Discord bot instance."""
        self._bot = bot

    @property
    def bot(self) -> Bot:
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    # === Adapters ===

    @property
    def media_resolver(self) -> MediaResolver:
        """Get the yt-dlp media resolver shared by every guild."""
        if self._media_resolver is None:
            from ..infrastructure.audio.ytdlp_resolver import YtDlpResolver

            self._media_resolver = YtDlpResolver(
                self.settings.audio,
                cache_ttl=self.settings.playlist.resolve_cache_ttl_seconds,
            )
        return self._media_resolver

    def transport_for(self, guild_id: int) -> Transport:
        """Build the voice transport for one guild."""
        from ..infrastructure.discord.transport import DiscordTransport

        return DiscordTransport(self.bot, guild_id, self.settings.audio)

    # === Application services ===

    @property
    def playlist_registry(self) -> PlaylistRegistry:
        if self._playlist_registry is None:
            from ..application.services.registry import PlaylistRegistry

            self._playlist_registry = PlaylistRegistry(
                resolver=self.media_resolver,
                transport_factory=self.transport_for,
                display_limit=self.settings.playlist.queue_display_limit,
            )
        return self._playlist_registry

    @property
    def command_handler(self) -> PlaylistCommandHandler:
        if self._command_handler is None:
            from ..application.commands.handler import PlaylistCommandHandler

            self._command_handler = PlaylistCommandHandler(registry=self.playlist_registry)
        return self._command_handler

    # === Lifecycle ===

    async def shutdown(self) -> None:
        """Stop every engine so no dispatcher outlives the bot."""
        if self._playlist_registry is not None:
            for engine in self._playlist_registry:
                engine.stop()
        logger.debug("Container shutdown complete")


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
