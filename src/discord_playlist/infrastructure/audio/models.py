"""Pydantic models for yt-dlp extraction results and options.

These parse the loosely typed info dict yt-dlp returns and describe the
options handed back to ``YoutubeDL``.
"""

from __future__ import annotations

from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from discord_playlist.domain.shared.types import NonEmptyStr, NonNegativeFloat, PositiveInt

CACHE_MAX_SIZE: Final[int] = 500
DEFAULT_RETRIES: Final[int] = 3
DEFAULT_SOCKET_TIMEOUT: Final[int] = 10
LOG_URL_TRUNCATE: Final[int] = 60
UNKNOWN_TITLE: Final[str] = "Unknown Title"


class AudioFormatInfo(BaseModel):
    """A single format entry from yt-dlp extraction."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    url: NonEmptyStr | None = None
    acodec: NonEmptyStr | None = None
    vcodec: NonEmptyStr | None = None

    @field_validator("url", "acodec", "vcodec", mode="before")
    @classmethod
    def _coerce_empty_to_none(cls, v: Any) -> str | None:
        if not isinstance(v, str) or not v.strip():
            return None
        return v


class YtDlpMediaInfo(BaseModel):
    """Trimmed yt-dlp extraction result.

    Extra fields are dropped; before-validators turn empty or mistyped values
    into ``None`` (or the default title) instead of failing.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    webpage_url: NonEmptyStr | None = None
    url: NonEmptyStr | None = None
    title: NonEmptyStr = UNKNOWN_TITLE
    formats: list[AudioFormatInfo] = Field(default_factory=list)

    @field_validator("webpage_url", "url", mode="before")
    @classmethod
    def _coerce_empty_to_none(cls, v: Any) -> str | None:
        if not isinstance(v, str) or not v.strip():
            return None
        return v

    @field_validator("title", mode="before")
    @classmethod
    def _coerce_title(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            return UNKNOWN_TITLE
        return v

    @property
    def stream_url(self) -> str | None:
        """Direct media URL: the top-level ``url`` or the last audio-bearing format."""
        if self.url:
            return self.url
        audio_formats = [f for f in self.formats if f.acodec != "none" and f.url]
        if audio_formats:
            return audio_formats[-1].url
        return None


class CacheEntry(BaseModel):
    """Cached extraction result with its creation timestamp."""

    model_config = ConfigDict(frozen=True)

    info: YtDlpMediaInfo
    cached_at: NonNegativeFloat


class YtDlpOpts(BaseModel):
    """Typed yt-dlp configuration options passed to ``YoutubeDL``."""

    model_config = ConfigDict(frozen=True)

    quiet: bool = True
    no_warnings: bool = True
    noprogress: bool = True
    noplaylist: bool = True
    forceipv4: bool = True
    retries: PositiveInt = DEFAULT_RETRIES
    socket_timeout: PositiveInt = DEFAULT_SOCKET_TIMEOUT
    format: NonEmptyStr = "bestaudio/best"
    skip_download: bool = True
