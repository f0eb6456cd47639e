"""OutputChannel backed by a Discord text channel."""

from __future__ import annotations

import asyncio
import logging

import discord

from discord_playlist.application.interfaces.output_channel import OutputChannel
from discord_playlist.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


class DiscordOutputChannel(OutputChannel):
    """Posts notices with ``channel.send`` on a background task.

    Pending sends are held here so they are not garbage collected mid-flight.
    """

    def __init__(self, channel: discord.abc.Messageable) -> None:
        self._channel = channel
        self._pending: set[asyncio.Task[None]] = set()

    def __repr__(self) -> str:
        return f"DiscordOutputChannel({getattr(self._channel, 'id', self._channel)!r})"

    @property
    def channel(self) -> discord.abc.Messageable:
        return self._channel

    @property
    def pending(self) -> int:
        return len(self._pending)

    def post(self, text: str) -> None:
        task = asyncio.get_running_loop().create_task(self._send(text))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _send(self, text: str) -> None:
        try:
            await self._channel.send(text)
        except discord.HTTPException:
            logger.warning(LogTemplates.OUTPUT_SEND_FAILED, getattr(self._channel, "id", None))
