"""Discord voice transport: plays streams through a guild's VoiceClient."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import discord

from discord_playlist.application.interfaces.transport import EventedDispatcher, Transport
from discord_playlist.config.settings import AudioSettings
from discord_playlist.domain.shared.exceptions import PlaybackError
from discord_playlist.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from discord_playlist.application.interfaces.media_resolver import StreamHandle

logger = logging.getLogger(__name__)


class DiscordDispatcher(EventedDispatcher):
    """One stream on one VoiceClient.

    The stream is opened in a task so ``play()`` stays synchronous. FFmpeg's
    ``after`` callback runs on the player thread and is handed back to the
    event loop before any listener sees it.
    """

    def __init__(
        self,
        voice_client: discord.VoiceClient,
        stream: StreamHandle,
        *,
        guild_id: int,
        loop: asyncio.AbstractEventLoop,
        settings: AudioSettings,
    ) -> None:
        super().__init__(guild_id)
        self._voice_client = voice_client
        self._stream = stream
        self._loop = loop
        self._settings = settings
        self._source: discord.AudioSource | None = None
        self._paused = False
        self._task: asyncio.Task[None] | None = None

    @property
    def is_started(self) -> bool:
        return self._source is not None

    def start(self) -> None:
        self._task = self._loop.create_task(self._open_and_play())

    async def _open_and_play(self) -> None:
        try:
            media_url = await self._stream.open()
        except PlaybackError as exc:
            logger.warning(LogTemplates.DISPATCHER_OPEN_FAILED, self.guild_id, exc)
            self._emit_error(exc)
            return
        except Exception as exc:
            logger.exception(LogTemplates.DISPATCHER_OPEN_FAILED, self.guild_id, exc)
            self._emit_error(exc)
            return

        if self.is_disposed:
            return

        try:
            source = discord.PCMVolumeTransformer(
                discord.FFmpegPCMAudio(
                    media_url,
                    before_options=self._settings.ffmpeg_options.get("before_options", ""),
                    options=self._settings.ffmpeg_options.get("options", ""),
                ),
                volume=self._settings.default_volume,
            )
            if self._voice_client.is_playing() or self._voice_client.is_paused():
                self._voice_client.stop()
            self._voice_client.play(source, after=self._after)
        except discord.ClientException as exc:
            logger.warning(LogTemplates.DISPATCHER_OPEN_FAILED, self.guild_id, exc)
            self._emit_error(exc)
            return
        except Exception as exc:
            logger.exception(LogTemplates.DISPATCHER_OPEN_FAILED, self.guild_id, exc)
            self._emit_error(exc)
            return

        self._source = source
        if self._paused:
            self._voice_client.pause()
        logger.info(LogTemplates.DISPATCHER_STARTED, self.guild_id)

    def _after(self, error: Exception | None = None) -> None:
        # FFmpeg player thread
        self._loop.call_soon_threadsafe(self._finish, error)

    def _finish(self, error: Exception | None) -> None:
        logger.debug(LogTemplates.DISPATCHER_FINISHED, self.guild_id, error)
        if error is None:
            self._emit_end()
        else:
            self._emit_error(error)

    def _owns_playback(self) -> bool:
        return self._source is not None and self._voice_client.source is self._source

    def pause(self) -> None:
        self._paused = True
        if self._owns_playback() and self._voice_client.is_playing():
            self._voice_client.pause()

    def resume(self) -> None:
        self._paused = False
        if self._owns_playback() and self._voice_client.is_paused():
            self._voice_client.resume()

    def _release(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        if self._owns_playback():
            self._voice_client.stop()
        logger.debug(LogTemplates.DISPATCHER_DISPOSED, self.guild_id)


class DiscordTransport(Transport):
    """Voice connection for a single guild."""

    def __init__(
        self, bot: discord.Client, guild_id: int, settings: AudioSettings | None = None
    ) -> None:
        self._bot = bot
        self._guild_id = guild_id
        self._settings = settings or AudioSettings()

    @property
    def guild_id(self) -> int:
        return self._guild_id

    def _get_guild(self) -> discord.Guild | None:
        return self._bot.get_guild(self._guild_id)

    def _get_voice_client(self) -> discord.VoiceClient | None:
        guild = self._get_guild()
        if not guild:
            return None

        vc = guild.voice_client
        return vc if isinstance(vc, discord.VoiceClient) else None

    def is_connected(self) -> bool:
        vc = self._get_voice_client()
        return vc is not None and vc.is_connected()

    async def connect(self, channel_id: int) -> bool:
        """Connect to *channel_id*, moving the existing connection if needed."""
        guild = self._get_guild()
        if not guild:
            logger.warning(LogTemplates.GUILD_NOT_FOUND, self._guild_id)
            return False

        channel = guild.get_channel(channel_id)
        if not isinstance(channel, discord.VoiceChannel | discord.StageChannel):
            logger.warning(LogTemplates.CHANNEL_NOT_VOICE, channel_id)
            return False

        vc = self._get_voice_client()
        if vc and vc.is_connected() and vc.channel and vc.channel.id == channel_id:
            return True

        try:
            async with asyncio.timeout(self._settings.connect_timeout_s):
                if vc and vc.is_connected():
                    await vc.move_to(channel)
                    logger.info(LogTemplates.VOICE_MOVED, channel.name)
                else:
                    await channel.connect(self_deaf=True)
                    logger.info(LogTemplates.VOICE_CONNECTED, channel.name, guild.name)
            return True
        except TimeoutError:
            logger.error(LogTemplates.VOICE_CONNECTION_TIMEOUT, channel_id)
            return False
        except discord.Forbidden:
            logger.error(LogTemplates.VOICE_NO_PERMISSION, channel_id)
            return False
        except discord.ClientException as e:
            logger.error(LogTemplates.VOICE_CLIENT_ERROR, e)
            return False

    async def disconnect(self) -> bool:
        vc = self._get_voice_client()
        if not vc:
            return True

        try:
            await vc.disconnect(force=True)
        except discord.HTTPException:
            logger.exception("Failed to disconnect from voice")
            return False
        logger.info(LogTemplates.VOICE_DISCONNECTED, self._guild_id)
        return True

    def play(self, stream: StreamHandle) -> DiscordDispatcher:
        vc = self._get_voice_client()
        if vc is None or not vc.is_connected():
            logger.warning(LogTemplates.VOICE_NOT_CONNECTED, self._guild_id)
            raise PlaybackError(ErrorMessages.VOICE_NOT_CONNECTED)

        dispatcher = DiscordDispatcher(
            vc,
            stream,
            guild_id=self._guild_id,
            loop=asyncio.get_running_loop(),
            settings=self._settings,
        )
        dispatcher.start()
        return dispatcher
