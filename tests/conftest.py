"""Shared fakes for the playlist engine's collaborators."""

from __future__ import annotations

import pytest

from discord_playlist.application.interfaces.media_resolver import (
    MediaResolver,
    ResolvedMedia,
    StreamHandle,
)
from discord_playlist.application.interfaces.output_channel import OutputChannel
from discord_playlist.application.interfaces.transport import EventedDispatcher, Transport
from discord_playlist.application.services.playlist_engine import PlaylistEngine
from discord_playlist.application.services.registry import PlaylistRegistry
from discord_playlist.domain.shared.exceptions import PlaybackError, ResolutionError

# ============================================================================
# Fakes
# ============================================================================


class FakeStream(StreamHandle):
    async def open(self) -> str:
        return f"https://media.example/{self.locator}"


class FakeResolver(MediaResolver):
    """Titles every locator ``Title of <locator>``; rejects locators starting with ``bad``."""

    def __init__(self, titles: dict[str, str] | None = None) -> None:
        self.titles = titles or {}
        self.resolve_calls: list[str] = []
        self.stream_calls: list[str] = []

    async def resolve(self, locator: str) -> ResolvedMedia:
        self.resolve_calls.append(locator)
        if locator.startswith("bad"):
            raise ResolutionError(locator, "Video unavailable")
        return ResolvedMedia(title=self.title_for(locator), stream=FakeStream(locator))

    def stream(self, locator: str) -> FakeStream:
        self.stream_calls.append(locator)
        return FakeStream(locator)

    def title_for(self, locator: str) -> str:
        return self.titles.get(locator, f"Title of {locator}")


class FakeDispatcher(EventedDispatcher):
    def __init__(self, stream: StreamHandle, guild_id: int) -> None:
        super().__init__(guild_id)
        self.stream = stream
        self.pause_calls = 0
        self.resume_calls = 0
        self.released = False

    def pause(self) -> None:
        self.pause_calls += 1

    def resume(self) -> None:
        self.resume_calls += 1

    def _release(self) -> None:
        self.released = True

    def finish(self) -> None:
        """Simulate the stream reaching its natural end."""
        self._emit_end()

    def fail(self, error: Exception) -> None:
        self._emit_error(error)


class FakeTransport(Transport):
    def __init__(self, guild_id: int = 1, *, connected: bool = True) -> None:
        self.guild_id = guild_id
        self.connected = connected
        self.connect_result = True
        self.channel_id: int | None = None
        self.failing: set[str] = set()
        self.dispatchers: list[FakeDispatcher] = []

    def is_connected(self) -> bool:
        return self.connected

    async def connect(self, channel_id: int) -> bool:
        if self.connect_result:
            self.connected = True
            self.channel_id = channel_id
        return self.connect_result

    async def disconnect(self) -> bool:
        self.connected = False
        self.channel_id = None
        return True

    def play(self, stream: StreamHandle) -> FakeDispatcher:
        if stream.locator in self.failing:
            raise PlaybackError(f"cannot stream {stream.locator}")
        dispatcher = FakeDispatcher(stream, self.guild_id)
        self.dispatchers.append(dispatcher)
        return dispatcher

    @property
    def live_dispatchers(self) -> list[FakeDispatcher]:
        return [d for d in self.dispatchers if not d.is_disposed and not d.is_finished]


class RecordingChannel(OutputChannel):
    def __init__(self) -> None:
        self.posts: list[str] = []

    def post(self, text: str) -> None:
        self.posts.append(text)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def transport():
    return FakeTransport(guild_id=42)


@pytest.fixture
def channel():
    return RecordingChannel()


@pytest.fixture
def engine(resolver, transport, channel):
    """Engine for guild 42 with an output channel already bound."""
    engine = PlaylistEngine(42, resolver=resolver, transport=transport)
    engine.bind_output_channel(channel)
    return engine


@pytest.fixture
def transports():
    """Transports created by the registry, keyed by guild id."""
    return {}


@pytest.fixture
def registry(resolver, transports):
    def factory(guild_id: int) -> FakeTransport:
        transports[guild_id] = FakeTransport(guild_id)
        return transports[guild_id]

    return PlaylistRegistry(resolver=resolver, transport_factory=factory)
