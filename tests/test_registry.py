"""
Unit Tests for PlaylistRegistry

Tests for:
- Lazy engine creation per guild
- Engine identity across lookups
- Guild isolation of queues and transports
"""

from discord_playlist.application.services.playlist_engine import PlaylistEngine
from discord_playlist.application.services.registry import PlaylistRegistry

from .conftest import FakeTransport


class TestPlaylistRegistry:
    """Unit tests for the guild → engine registry."""

    def test_creates_engine_on_first_lookup(self, registry, transports):
        """Should build an engine with a fresh transport for an unseen guild."""
        engine = registry.get_or_create(100)

        assert isinstance(engine, PlaylistEngine)
        assert engine.guild_id == 100
        assert engine.transport is transports[100]
        assert 100 in registry
        assert len(registry) == 1

    def test_returns_same_engine_for_same_guild(self, registry):
        first = registry.get_or_create(100)
        second = registry.get_or_create(100)

        assert first is second
        assert len(registry) == 1

    def test_get_without_create(self, registry):
        """get() never creates an engine."""
        assert registry.get(5) is None
        assert 5 not in registry

        engine = registry.get_or_create(5)

        assert registry.get(5) is engine

    def test_fresh_engine_is_idle(self, registry):
        engine = registry.get_or_create(1)

        assert engine.is_idle
        assert engine.queue == ()
        assert engine.current is None
        assert not engine.has_dispatcher

    async def test_guilds_are_isolated(self, registry, transports):
        """Songs queued in one guild never appear in another."""
        a = registry.get_or_create(1)
        b = registry.get_or_create(2)

        await a.enqueue("songA", "alice")

        assert [s.url for s in a.queue] == ["songA"]
        assert b.queue == ()
        assert transports[1] is not transports[2]

    def test_iterates_engines(self, registry):
        engines = [registry.get_or_create(g) for g in (3, 1, 2)]

        assert list(registry) == engines
        assert registry.guild_ids() == [3, 1, 2]

    def test_display_limit_passed_to_engines(self, resolver):
        registry = PlaylistRegistry(
            resolver=resolver, transport_factory=FakeTransport, display_limit=3
        )

        engine = registry.get_or_create(9)

        assert engine.display_limit == 3
