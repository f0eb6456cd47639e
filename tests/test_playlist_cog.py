"""
Unit Tests for PlaylistCog

Tests for:
- Prefixed chat commands routed through on_message
- Slash command callbacks (/join, /leave, /add, /queue, /play, /pause, /resume)
- Command errors surfaced as replies
- Cog setup via the bot's container
"""

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from discord_playlist.application.commands import (
    AddSongCommand,
    JoinCommand,
    LeaveCommand,
    PauseCommand,
    PlayCommand,
    PlaylistCommandHandler,
    ResumeCommand,
    ShowQueueCommand,
)
from discord_playlist.domain.shared.exceptions import CommandError
from discord_playlist.domain.shared.messages import DiscordUIMessages
from discord_playlist.infrastructure.discord.cogs.playlist_cog import (
    COMMAND_ACK,
    PlaylistCog,
    setup,
)
from discord_playlist.infrastructure.discord.output_channel import DiscordOutputChannel

GUILD_ID = 111111111
VOICE_ID = 444444444

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mock_container():
    container = MagicMock()
    container.settings.discord.command_prefix = "!"
    container.command_handler = MagicMock()
    container.command_handler.handle = AsyncMock(return_value="ok")
    return container


@pytest.fixture
def cog(mock_container):
    return PlaylistCog(MagicMock(), mock_container)


def make_member(in_voice: bool = True) -> MagicMock:
    member = MagicMock(spec=discord.Member)
    member.name = "testuser"
    member.bot = False
    if in_voice:
        member.voice = MagicMock()
        member.voice.channel = MagicMock()
        member.voice.channel.id = VOICE_ID
        member.voice.channel.name = "General"
    else:
        member.voice = None
    return member


@pytest.fixture
def mock_message():
    message = MagicMock(spec=discord.Message)
    message.author = make_member()
    message.guild = MagicMock()
    message.guild.id = GUILD_ID
    message.channel = MagicMock()
    message.channel.send = AsyncMock()
    return message


@pytest.fixture
def mock_interaction():
    interaction = MagicMock(spec=discord.Interaction)
    interaction.response = MagicMock()
    interaction.response.send_message = AsyncMock()
    interaction.response.defer = AsyncMock()
    interaction.followup = MagicMock()
    interaction.followup.send = AsyncMock()
    interaction.guild = MagicMock()
    interaction.guild.id = GUILD_ID
    interaction.channel = MagicMock()
    interaction.user = make_member()
    return interaction


# =============================================================================
# Context Tests
# =============================================================================


class TestBuildContext:
    """Unit tests for PlaylistCog.build_context."""

    def test_context_from_member_in_voice(self, cog):
        guild, channel = MagicMock(id=GUILD_ID), MagicMock()

        ctx = cog.build_context(guild, make_member(), channel)

        assert ctx.guild_id == GUILD_ID
        assert ctx.author_name == "testuser"
        assert ctx.voice_channel_id == VOICE_ID
        assert ctx.voice_channel_name == "General"
        assert isinstance(ctx.output_channel, DiscordOutputChannel)
        assert ctx.output_channel.channel is channel

    def test_context_without_voice(self, cog):
        ctx = cog.build_context(MagicMock(id=GUILD_ID), make_member(in_voice=False), MagicMock())

        assert not ctx.in_voice
        assert ctx.voice_channel_name is None


# =============================================================================
# Prefixed Command Tests
# =============================================================================


class TestOnMessage:
    """Unit tests for the chat command listener."""

    async def test_dispatches_parsed_command(self, cog, mock_container, mock_message):
        mock_message.content = "!add https://youtu.be/abc"

        await cog.on_message(mock_message)

        command, ctx = mock_container.command_handler.handle.await_args.args
        assert command == AddSongCommand(url="https://youtu.be/abc")
        assert ctx.guild_id == GUILD_ID
        mock_message.channel.send.assert_awaited_once_with("ok")

    async def test_no_reply_when_handler_returns_none(self, cog, mock_container, mock_message):
        mock_container.command_handler.handle.return_value = None
        mock_message.content = "!play"

        await cog.on_message(mock_message)

        mock_message.channel.send.assert_not_awaited()

    async def test_ignores_plain_chat(self, cog, mock_container, mock_message):
        mock_message.content = "hello everyone"

        await cog.on_message(mock_message)

        mock_container.command_handler.handle.assert_not_awaited()
        mock_message.channel.send.assert_not_awaited()

    async def test_ignores_bots(self, cog, mock_container, mock_message):
        mock_message.author.bot = True
        mock_message.content = "!play"

        await cog.on_message(mock_message)

        mock_container.command_handler.handle.assert_not_awaited()

    async def test_ignores_direct_messages(self, cog, mock_container, mock_message):
        mock_message.guild = None
        mock_message.content = "!play"

        await cog.on_message(mock_message)

        mock_container.command_handler.handle.assert_not_awaited()

    async def test_missing_add_url_replies_with_error(self, cog, mock_container, mock_message):
        mock_message.content = "!add"

        await cog.on_message(mock_message)

        mock_container.command_handler.handle.assert_not_awaited()
        mock_message.channel.send.assert_awaited_once_with(
            '❌ Enter a url after the "add" command'
        )

    async def test_command_error_becomes_reply(self, cog, mock_container, mock_message):
        mock_container.command_handler.handle.side_effect = CommandError(
            "Not currently in a voice channel!"
        )
        mock_message.content = "!leave"

        await cog.on_message(mock_message)

        mock_message.channel.send.assert_awaited_once_with("❌ Not currently in a voice channel!")

    async def test_end_to_end_with_real_handler(self, mock_message, registry):
        container = MagicMock()
        container.settings.discord.command_prefix = "!"
        container.command_handler = PlaylistCommandHandler(registry=registry)
        cog = PlaylistCog(MagicMock(), container)
        mock_message.content = "!add songA"

        await cog.on_message(mock_message)

        mock_message.channel.send.assert_awaited_once_with("Added **Title of songA** to the queue")
        assert [s.url for s in registry.get(GUILD_ID).queue] == ["songA"]


# =============================================================================
# Slash Command Tests
# =============================================================================


class TestSlashCommands:
    """Unit tests for the slash command callbacks."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("join", JoinCommand()),
            ("leave", LeaveCommand()),
            ("queue", ShowQueueCommand()),
            ("play", PlayCommand()),
            ("pause", PauseCommand()),
            ("resume", ResumeCommand()),
        ],
    )
    async def test_command_routed_to_handler(
        self, cog, mock_container, mock_interaction, name, expected
    ):
        await getattr(cog, name).callback(cog, mock_interaction)

        command, ctx = mock_container.command_handler.handle.await_args.args
        assert command == expected
        assert ctx.voice_channel_id == VOICE_ID
        mock_interaction.response.defer.assert_awaited_once_with(thinking=True)
        mock_interaction.followup.send.assert_awaited_once_with("ok")

    async def test_add_passes_url(self, cog, mock_container, mock_interaction):
        await cog.add.callback(cog, mock_interaction, url="  https://youtu.be/abc ")

        command, _ = mock_container.command_handler.handle.await_args.args
        assert command == AddSongCommand(url="https://youtu.be/abc")

    async def test_add_blank_url_is_ephemeral_error(self, cog, mock_container, mock_interaction):
        await cog.add.callback(cog, mock_interaction, url="   ")

        mock_container.command_handler.handle.assert_not_awaited()
        mock_interaction.response.send_message.assert_awaited_once_with(
            'Enter a url after the "add" command', ephemeral=True
        )

    async def test_acknowledges_when_no_reply(self, cog, mock_container, mock_interaction):
        mock_container.command_handler.handle.return_value = None

        await cog.play.callback(cog, mock_interaction)

        mock_interaction.followup.send.assert_awaited_once_with(COMMAND_ACK)

    async def test_command_error_sent_as_followup(self, cog, mock_container, mock_interaction):
        mock_container.command_handler.handle.side_effect = CommandError("nope")

        await cog.join.callback(cog, mock_interaction)

        mock_interaction.followup.send.assert_awaited_once_with("❌ nope")

    @pytest.mark.parametrize("missing", ["guild", "channel"])
    async def test_outside_guild_replies_ephemerally(
        self, cog, mock_container, mock_interaction, missing
    ):
        """Interactions without a guild channel still get an answer."""
        setattr(mock_interaction, missing, None)

        await cog.queue.callback(cog, mock_interaction)

        mock_interaction.response.send_message.assert_awaited_once_with(
            DiscordUIMessages.GUILD_ONLY, ephemeral=True
        )
        mock_interaction.response.defer.assert_not_awaited()
        mock_container.command_handler.handle.assert_not_awaited()

    def test_leave_description_mentions_cleared_queue(self, cog):
        assert "clear the queue" in cog.leave.description


# =============================================================================
# Setup Tests
# =============================================================================


class TestSetup:
    async def test_setup_adds_cog(self, mock_container):
        bot = MagicMock()
        bot.container = mock_container
        bot.add_cog = AsyncMock()

        await setup(bot)

        cog = bot.add_cog.await_args.args[0]
        assert isinstance(cog, PlaylistCog)
        assert cog.container is mock_container

    async def test_setup_without_container(self):
        bot = MagicMock(spec=["add_cog"])

        with pytest.raises(RuntimeError, match="Container not found"):
            await setup(bot)
