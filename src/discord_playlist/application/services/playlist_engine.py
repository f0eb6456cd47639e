"""Per-guild playlist engine: queue, current song, and the playback state machine."""

from __future__ import annotations

import logging
from collections import deque
from functools import partial
from typing import TYPE_CHECKING, Final

from discord_playlist.domain.music.entities import Song
from discord_playlist.domain.music.value_objects import PlaybackState
from discord_playlist.domain.shared.exceptions import (
    PlaybackError,
    PreconditionViolationError,
    ResolutionError,
)
from discord_playlist.domain.shared.messages import (
    DiscordUIMessages,
    ErrorMessages,
    LogTemplates,
)
from discord_playlist.domain.shared.types import SONG_TITLE_MAX_LENGTH

if TYPE_CHECKING:
    from discord_playlist.application.interfaces.media_resolver import MediaResolver
    from discord_playlist.application.interfaces.output_channel import OutputChannel
    from discord_playlist.application.interfaces.transport import DispatcherHandle, Transport

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_DISPLAY_LIMIT: Final[int] = 15


class PlaylistEngine:
    """Owns one guild's queue and serializes playback through a single dispatcher.

    ``advance()`` is a plain synchronous transition. Stream completion arrives
    as a dispatcher event on the event loop and calls ``advance()`` from there,
    so playback never recurses. Events from a dispatcher that has already been
    replaced are ignored.
    """

    def __init__(
        self,
        guild_id: int,
        *,
        resolver: MediaResolver,
        transport: Transport,
        display_limit: int = DEFAULT_QUEUE_DISPLAY_LIMIT,
    ) -> None:
        self._guild_id = guild_id
        self._resolver = resolver
        self._transport = transport
        self._display_limit = display_limit

        self._queue: deque[Song] = deque()
        self._current: Song | None = None
        self._dispatcher: DispatcherHandle | None = None
        self._output_channel: OutputChannel | None = None
        self._state = PlaybackState.IDLE

    def __repr__(self) -> str:
        return (
            f"PlaylistEngine(guild_id={self._guild_id}, state={self._state.value}, "
            f"queued={len(self._queue)})"
        )

    @property
    def guild_id(self) -> int:
        return self._guild_id

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def display_limit(self) -> int:
        return self._display_limit

    @property
    def queue(self) -> tuple[Song, ...]:
        return tuple(self._queue)

    @property
    def queue_length(self) -> int:
        return len(self._queue)

    @property
    def current(self) -> Song | None:
        return self._current

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state is PlaybackState.PLAYING

    @property
    def is_paused(self) -> bool:
        return self._state is PlaybackState.PAUSED

    @property
    def is_idle(self) -> bool:
        return self._state is PlaybackState.IDLE

    @property
    def has_dispatcher(self) -> bool:
        return self._dispatcher is not None

    @property
    def output_channel(self) -> OutputChannel | None:
        return self._output_channel

    def bind_output_channel(self, channel: OutputChannel) -> None:
        self._output_channel = channel
        logger.debug(LogTemplates.OUTPUT_CHANNEL_BOUND, channel, self._guild_id)

    async def enqueue(self, url: str, requester: str) -> Song:
        """Resolve *url* and append it to the tail of the queue.

        Raises:
            ResolutionError: The resolver rejected the URL. The queue is unchanged.
        """
        try:
            media = await self._resolver.resolve(url)
        except ResolutionError as exc:
            logger.info(LogTemplates.SONG_RESOLVE_FAILED, url, self._guild_id, exc.reason)
            raise

        song = Song(url=url, title=media.title[:SONG_TITLE_MAX_LENGTH], requester=requester)
        self._queue.append(song)
        logger.info(
            LogTemplates.SONG_ENQUEUED, song.title, requester, self._guild_id, len(self._queue)
        )
        return song

    def advance(self) -> None:
        """Drop the current song and start the next queued one, or go idle.

        Songs whose stream cannot be started are reported and skipped.

        Raises:
            PreconditionViolationError: The transport has no voice connection.
                Nothing is dequeued and the engine is left idle.
        """
        self._release_dispatcher()
        self._current = None

        if not self._transport.is_connected():
            self._transition_to(PlaybackState.IDLE)
            raise PreconditionViolationError(
                operation="advance", requirement=ErrorMessages.VOICE_NOT_CONNECTED
            )

        while self._queue:
            song = self._queue.popleft()
            self._current = song
            try:
                dispatcher = self._transport.play(self._resolver.stream(song.url))
            except PlaybackError as exc:
                logger.warning(LogTemplates.SONG_START_FAILED, song.title, self._guild_id, exc)
                self._current = None
                self._notify(DiscordUIMessages.PLAYBACK_ERROR_SKIPPING.format(title=song.title))
                continue

            self._attach_dispatcher(dispatcher)
            self._transition_to(PlaybackState.PLAYING)
            logger.info(LogTemplates.SONG_STARTED, song.title, self._guild_id)
            self._notify(
                DiscordUIMessages.NOW_PLAYING.format(title=song.title, requester=song.requester)
            )
            return

        self._transition_to(PlaybackState.IDLE)
        logger.info(LogTemplates.QUEUE_EMPTY, self._guild_id)
        self._notify(DiscordUIMessages.QUEUE_EXHAUSTED)

    def pause(self) -> bool:
        """Pause the active stream. Does nothing unless a song is playing."""
        if self._state is not PlaybackState.PLAYING or self._dispatcher is None:
            logger.debug(LogTemplates.PAUSE_IGNORED, self._guild_id, self._state.value)
            return False

        self._dispatcher.pause()
        self._transition_to(PlaybackState.PAUSED)
        logger.info(LogTemplates.PLAYBACK_PAUSED, self._guild_id)
        self._notify(DiscordUIMessages.PLAYBACK_PAUSED)
        return True

    def resume(self) -> bool:
        """Resume a paused stream. Does nothing unless playback is paused."""
        if self._state is not PlaybackState.PAUSED or self._dispatcher is None:
            logger.debug(LogTemplates.RESUME_IGNORED, self._guild_id, self._state.value)
            return False

        self._dispatcher.resume()
        self._transition_to(PlaybackState.PLAYING)
        logger.info(LogTemplates.PLAYBACK_RESUMED, self._guild_id)
        self._notify(DiscordUIMessages.PLAYBACK_RESUMED)
        return True

    def stop(self) -> None:
        """Release the dispatcher and forget the current song and the queue."""
        dropped = len(self._queue)
        self._release_dispatcher()
        self._current = None
        self._queue.clear()
        self._transition_to(PlaybackState.IDLE)
        logger.info(LogTemplates.PLAYBACK_STOPPED, self._guild_id, dropped)

    def describe_queue(self) -> str:
        count = len(self._queue)
        details = DiscordUIMessages.QUEUE_HEADER.format(count=count)
        if count > self._display_limit:
            details += DiscordUIMessages.QUEUE_TRUNCATED.format(limit=self._display_limit)

        if count == 0:
            return details + DiscordUIMessages.QUEUE_EMPTY_HINT

        entries = [
            DiscordUIMessages.QUEUE_ENTRY.format(
                position=position, title=song.title, requester=song.requester
            )
            for position, song in enumerate(list(self._queue)[: self._display_limit], start=1)
        ]
        return details + "\n```" + "\n".join(entries) + "```"

    # ─────────────────────────────────────────────────────────────────
    # Dispatcher lifecycle
    # ─────────────────────────────────────────────────────────────────

    def _attach_dispatcher(self, dispatcher: DispatcherHandle) -> None:
        self._dispatcher = dispatcher
        dispatcher.on_end(partial(self._on_stream_end, dispatcher))
        dispatcher.on_error(partial(self._on_stream_error, dispatcher))

    def _release_dispatcher(self) -> None:
        dispatcher, self._dispatcher = self._dispatcher, None
        if dispatcher is not None:
            dispatcher.dispose()

    def _on_stream_end(self, dispatcher: DispatcherHandle) -> None:
        if dispatcher is not self._dispatcher:
            logger.debug(LogTemplates.STALE_DISPATCHER_EVENT, "end", self._guild_id)
            return

        if self._current is not None:
            logger.debug(LogTemplates.SONG_ENDED, self._current.title, self._guild_id)
        self._auto_advance()

    def _on_stream_error(self, dispatcher: DispatcherHandle, error: Exception) -> None:
        if dispatcher is not self._dispatcher:
            logger.debug(LogTemplates.STALE_DISPATCHER_EVENT, "error", self._guild_id)
            return

        title = self._current.title if self._current is not None else "unknown"
        logger.warning(LogTemplates.SONG_ERRORED, title, self._guild_id, error)
        self._notify(DiscordUIMessages.PLAYBACK_ERROR_SKIPPING.format(title=title))
        self._auto_advance()

    def _transition_to(self, new_state: PlaybackState) -> None:
        if not self._state.can_transition_to(new_state):
            raise PreconditionViolationError(
                operation=f"transition to {new_state.value}",
                requirement=f"state is {self._state.value}",
            )
        self._state = new_state

    def _auto_advance(self) -> None:
        try:
            self.advance()
        except PreconditionViolationError as exc:
            logger.warning(LogTemplates.AUTO_ADVANCE_FAILED, self._guild_id, exc)

    def _notify(self, text: str) -> None:
        if self._output_channel is None:
            logger.warning(LogTemplates.NO_OUTPUT_CHANNEL, self._guild_id, text)
            return
        self._output_channel.post(text)
