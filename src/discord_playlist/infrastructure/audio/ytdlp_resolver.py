"""MediaResolver implementation backed by yt-dlp."""

from __future__ import annotations

import asyncio
import logging
import re
import time
from typing import Any, Final, cast

from pydantic import ValidationError
from yt_dlp import YoutubeDL
from yt_dlp.utils import YoutubeDLError

from discord_playlist.application.interfaces.media_resolver import (
    MediaResolver,
    ResolvedMedia,
    StreamHandle,
)
from discord_playlist.config.settings import AudioSettings
from discord_playlist.domain.shared.exceptions import PlaybackError, ResolutionError
from discord_playlist.domain.shared.messages import ErrorMessages, LogTemplates
from discord_playlist.infrastructure.audio.models import (
    CACHE_MAX_SIZE,
    LOG_URL_TRUNCATE,
    CacheEntry,
    YtDlpMediaInfo,
    YtDlpOpts,
)

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL: Final[int] = 3600

URL_PATTERN: Final[re.Pattern[str]] = re.compile(r"^(?:https?://|www\.)\S+$")


class YtDlpStream(StreamHandle):
    """Stream handle whose media URL is looked up only when playback starts."""

    def __init__(self, locator: str, resolver: YtDlpResolver) -> None:
        super().__init__(locator)
        self._resolver = resolver

    async def open(self) -> str:
        try:
            info = await self._resolver.extract(self.locator)
        except ResolutionError as exc:
            raise PlaybackError(exc.reason) from exc

        stream_url = info.stream_url
        if not stream_url:
            raise PlaybackError(ErrorMessages.STREAM_NOT_RESOLVABLE.format(url=self.locator))
        return stream_url


class YtDlpResolver(MediaResolver):
    """Resolves URLs through ``YoutubeDL.extract_info`` on a worker thread.

    Extraction results are cached per URL for *cache_ttl* seconds so the
    stream opened at play time reuses the lookup made when the song was added.
    """

    def __init__(
        self, settings: AudioSettings | None = None, *, cache_ttl: int = DEFAULT_CACHE_TTL
    ) -> None:
        self._settings = settings or AudioSettings()
        self._cache_ttl = cache_ttl
        self._cache: dict[str, CacheEntry] = {}
        self._opts = YtDlpOpts(format=self._settings.ytdlp_format or "bestaudio/best")

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> int:
        count = len(self._cache)
        self._cache.clear()
        return count

    def is_url(self, locator: str) -> bool:
        return bool(URL_PATTERN.match(locator.strip()))

    async def resolve(self, locator: str) -> ResolvedMedia:
        if not self.is_url(locator):
            raise ResolutionError(locator, f"'{locator}' is not a URL")

        info = await self.extract(locator)
        return ResolvedMedia(title=info.title, stream=self.stream(locator))

    def stream(self, locator: str) -> YtDlpStream:
        return YtDlpStream(locator, self)

    async def extract(self, url: str) -> YtDlpMediaInfo:
        return await asyncio.to_thread(self._extract_info_sync, url)

    def _cached(self, url: str, now: float) -> YtDlpMediaInfo | None:
        entry = self._cache.get(url)
        if entry is None:
            return None
        if now - entry.cached_at < self._cache_ttl:
            logger.debug(LogTemplates.CACHE_HIT_URL, url[:LOG_URL_TRUNCATE])
            return entry.info
        self._cache.pop(url, None)
        return None

    def _store(self, url: str, info: YtDlpMediaInfo, now: float) -> None:
        self._cache[url] = CacheEntry(info=info, cached_at=now)
        if len(self._cache) <= CACHE_MAX_SIZE:
            return

        expired = [
            k for k, entry in self._cache.items() if now - entry.cached_at >= self._cache_ttl
        ]
        for k in expired:
            self._cache.pop(k, None)
        if expired:
            logger.debug(LogTemplates.CACHE_EXPIRED_CLEANED, len(expired))

    def _extract_info_sync(self, url: str) -> YtDlpMediaInfo:
        now = time.time()
        cached = self._cached(url, now)
        if cached is not None:
            return cached

        try:
            with YoutubeDL(params=cast(Any, self._opts.model_dump())) as ydl:
                data = ydl.extract_info(url, download=False)
        except YoutubeDLError as exc:
            logger.warning(LogTemplates.YTDLP_FAILED_EXTRACT_INFO, url[:LOG_URL_TRUNCATE])
            raise ResolutionError(url, str(exc)) from exc
        except Exception as exc:
            logger.exception(LogTemplates.YTDLP_FAILED_EXTRACT_INFO, url[:LOG_URL_TRUNCATE])
            raise ResolutionError(url, str(exc)) from exc

        if not isinstance(data, dict):
            raise ResolutionError(url, ErrorMessages.NO_INFO_FOR_URL.format(url=url))

        try:
            info = YtDlpMediaInfo.model_validate(dict(data))
        except ValidationError as exc:
            logger.warning(LogTemplates.YTDLP_INVALID_INFO, url[:LOG_URL_TRUNCATE], exc)
            raise ResolutionError(url, ErrorMessages.NO_INFO_FOR_URL.format(url=url)) from exc

        if not info.stream_url:
            logger.warning(LogTemplates.YTDLP_NO_STREAM_URL, info.title)
            raise ResolutionError(
                url, ErrorMessages.NO_STREAM_URL_FOR_SONG.format(title=info.title)
            )

        self._store(url, info, now)
        return info
