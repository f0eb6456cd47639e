"""Playlist commands: slash commands plus the prefixed chat form (``!add <url>``)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from discord_playlist.application.commands import (
    AddSongCommand,
    CommandContext,
    JoinCommand,
    LeaveCommand,
    PauseCommand,
    PlayCommand,
    PlaylistCommand,
    ResumeCommand,
    ShowQueueCommand,
    parse_command,
)
from discord_playlist.domain.shared.exceptions import CommandError
from discord_playlist.domain.shared.messages import DiscordUIMessages, ErrorMessages, LogTemplates
from discord_playlist.infrastructure.discord.output_channel import DiscordOutputChannel

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)

COMMAND_ACK = "👍"


class PlaylistCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    @property
    def prefix(self) -> str:
        return self.container.settings.discord.command_prefix

    def build_context(
        self,
        guild: discord.Guild,
        author: discord.abc.User,
        channel: discord.abc.Messageable,
    ) -> CommandContext:
        voice = getattr(author, "voice", None)
        voice_channel = voice.channel if voice else None
        return CommandContext(
            guild_id=guild.id,
            author_name=author.name,
            output_channel=DiscordOutputChannel(channel),
            voice_channel_id=voice_channel.id if voice_channel else None,
            voice_channel_name=voice_channel.name if voice_channel else None,
        )

    async def run_command(self, command: PlaylistCommand, ctx: CommandContext) -> str | None:
        """Execute *command*, turning a ``CommandError`` into its reply text."""
        try:
            return await self.container.command_handler.handle(command, ctx)
        except CommandError as exc:
            return DiscordUIMessages.COMMAND_FAILED.format(error=exc.message)

    # ─────────────────────────────────────────────────────────────────
    # Prefixed chat commands
    # ─────────────────────────────────────────────────────────────────

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message) -> None:
        if message.author.bot or message.guild is None:
            return

        try:
            command = parse_command(message.content, self.prefix)
        except CommandError as exc:
            logger.debug(
                LogTemplates.COMMAND_REJECTED, message.content, message.guild.id, exc.message
            )
            await message.channel.send(DiscordUIMessages.COMMAND_FAILED.format(error=exc.message))
            return

        if command is None:
            return

        ctx = self.build_context(message.guild, message.author, message.channel)
        reply = await self.run_command(command, ctx)
        if reply:
            await message.channel.send(reply)

    # ─────────────────────────────────────────────────────────────────
    # Slash commands
    # ─────────────────────────────────────────────────────────────────

    async def _respond(self, interaction: discord.Interaction, command: PlaylistCommand) -> None:
        if interaction.guild is None or interaction.channel is None:
            await interaction.response.send_message(DiscordUIMessages.GUILD_ONLY, ephemeral=True)
            return

        await interaction.response.defer(thinking=True)
        ctx = self.build_context(interaction.guild, interaction.user, interaction.channel)
        reply = await self.run_command(command, ctx)
        await interaction.followup.send(reply or COMMAND_ACK)

    @app_commands.command(name="join", description="Join your voice channel.")
    async def join(self, interaction: discord.Interaction) -> None:
        await self._respond(interaction, JoinCommand())

    @app_commands.command(
        name="leave", description="Stop playback, clear the queue and leave the voice channel."
    )
    async def leave(self, interaction: discord.Interaction) -> None:
        await self._respond(interaction, LeaveCommand())

    @app_commands.command(name="add", description="Add a song to the queue by URL.")
    @app_commands.describe(url="Video URL")
    async def add(self, interaction: discord.Interaction, url: str) -> None:
        if not url.strip():
            await interaction.response.send_message(ErrorMessages.ADD_REQUIRES_URL, ephemeral=True)
            return
        await self._respond(interaction, AddSongCommand(url=url.strip()))

    @app_commands.command(name="queue", description="Show the queued songs.")
    async def queue(self, interaction: discord.Interaction) -> None:
        await self._respond(interaction, ShowQueueCommand())

    @app_commands.command(name="play", description="Start playing the queue.")
    async def play(self, interaction: discord.Interaction) -> None:
        await self._respond(interaction, PlayCommand())

    @app_commands.command(name="pause", description="Pause playback.")
    async def pause(self, interaction: discord.Interaction) -> None:
        await self._respond(interaction, PauseCommand())

    @app_commands.command(name="resume", description="Resume playback.")
    async def resume(self, interaction: discord.Interaction) -> None:
        await self._respond(interaction, ResumeCommand())


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(PlaylistCog(bot, container))
