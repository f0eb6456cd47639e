"""Dispatches playlist commands to the guild's engine and voice transport."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from discord_playlist.application.commands.models import (
    AddSongCommand,
    CommandContext,
    JoinCommand,
    LeaveCommand,
    PauseCommand,
    PlayCommand,
    PlaylistCommand,
    ResumeCommand,
    ShowQueueCommand,
)
from discord_playlist.domain.shared.exceptions import (
    CommandError,
    PreconditionViolationError,
    ResolutionError,
)
from discord_playlist.domain.shared.messages import (
    DiscordUIMessages,
    ErrorMessages,
    LogTemplates,
)

if TYPE_CHECKING:
    from discord_playlist.application.services.playlist_engine import PlaylistEngine
    from discord_playlist.application.services.registry import PlaylistRegistry

logger = logging.getLogger(__name__)


class PlaylistCommandHandler:
    """Runs one command against the issuing guild's engine.

    Returns the text to reply with, or None when the engine posts its own
    notification. User-facing failures are raised as ``CommandError``.
    """

    def __init__(self, *, registry: PlaylistRegistry) -> None:
        self._registry = registry

    async def handle(self, command: PlaylistCommand, ctx: CommandContext) -> str | None:
        logger.debug(LogTemplates.COMMAND_RECEIVED, command.kind, ctx.author_name, ctx.guild_id)
        engine = self._registry.get_or_create(ctx.guild_id)

        match command:
            case JoinCommand():
                return await self._join(engine, ctx)
            case LeaveCommand():
                return await self._leave(engine, ctx)
            case AddSongCommand(url=url):
                return await self._add(engine, url, ctx)
            case ShowQueueCommand():
                return engine.describe_queue()
            case PlayCommand():
                self._play(engine, ctx)
                return None
            case PauseCommand():
                engine.pause()
                return None
            case ResumeCommand():
                engine.resume()
                return None

    async def _join(self, engine: PlaylistEngine, ctx: CommandContext) -> str:
        if ctx.voice_channel_id is None:
            raise CommandError(ErrorMessages.JOIN_REQUIRES_VOICE)

        if not await engine.transport.connect(ctx.voice_channel_id):
            raise CommandError(
                ErrorMessages.VOICE_CONNECT_FAILED.format(name=ctx.voice_channel_name)
            )
        return DiscordUIMessages.VOICE_JOINED.format(name=ctx.voice_channel_name)

    async def _leave(self, engine: PlaylistEngine, ctx: CommandContext) -> str:
        if not ctx.in_voice:
            raise CommandError(ErrorMessages.LEAVE_REQUIRES_VOICE)

        engine.stop()
        await engine.transport.disconnect()
        return DiscordUIMessages.VOICE_LEFT.format(name=ctx.voice_channel_name)

    async def _add(self, engine: PlaylistEngine, url: str, ctx: CommandContext) -> str:
        try:
            song = await engine.enqueue(url, ctx.author_name)
        except ResolutionError as exc:
            logger.info(LogTemplates.COMMAND_REJECTED, "add", ctx.guild_id, exc.reason)
            raise CommandError(ErrorMessages.INVALID_LINK.format(reason=exc.reason)) from exc
        return DiscordUIMessages.SONG_ADDED.format(title=song.title)

    def _play(self, engine: PlaylistEngine, ctx: CommandContext) -> None:
        engine.bind_output_channel(ctx.output_channel)
        try:
            engine.advance()
        except PreconditionViolationError as exc:
            logger.info(LogTemplates.COMMAND_REJECTED, "play", ctx.guild_id, exc)
            raise CommandError(DiscordUIMessages.NOT_CONNECTED) from exc
