"""Guild → playlist engine mapping."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from discord_playlist.application.services.playlist_engine import (
    DEFAULT_QUEUE_DISPLAY_LIMIT,
    PlaylistEngine,
)
from discord_playlist.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from discord_playlist.application.interfaces.media_resolver import MediaResolver
    from discord_playlist.application.interfaces.transport import Transport

logger = logging.getLogger(__name__)


class PlaylistRegistry:
    """Lazily creates one engine per guild and keeps it for the process lifetime.

    Every engine shares the resolver; each gets its own transport from
    *transport_factory*.
    """

    def __init__(
        self,
        *,
        resolver: MediaResolver,
        transport_factory: Callable[[int], Transport],
        display_limit: int = DEFAULT_QUEUE_DISPLAY_LIMIT,
    ) -> None:
        self._resolver = resolver
        self._transport_factory = transport_factory
        self._display_limit = display_limit
        self._engines: dict[int, PlaylistEngine] = {}

    def get_or_create(self, guild_id: int) -> PlaylistEngine:
        engine = self._engines.get(guild_id)
        if engine is None:
            engine = PlaylistEngine(
                guild_id,
                resolver=self._resolver,
                transport=self._transport_factory(guild_id),
                display_limit=self._display_limit,
            )
            self._engines[guild_id] = engine
            logger.debug(LogTemplates.ENGINE_CREATED, guild_id)
        return engine

    def get(self, guild_id: int) -> PlaylistEngine | None:
        return self._engines.get(guild_id)

    def guild_ids(self) -> list[int]:
        return list(self._engines)

    def __contains__(self, guild_id: object) -> bool:
        return guild_id in self._engines

    def __len__(self) -> int:
        return len(self._engines)

    def __iter__(self) -> Iterator[PlaylistEngine]:
        return iter(list(self._engines.values()))
