"""Application Settings and Configuration

Pydantic-based settings loaded from environment variables and an optional
``.env`` file. Nested sections use the ``__`` delimiter, e.g.
``DISCORD__TOKEN`` or ``PLAYLIST__QUEUE_DISPLAY_LIMIT``. All sections are
frozen after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.messages import ErrorMessages
from ..domain.shared.types import VolumeFloat


class DiscordSettings(BaseModel):
    """Discord bot configuration."""

    model_config = SettingsConfigDict(frozen=True, strict=True, populate_by_name=True)

    token: SecretStr = Field(
        default=SecretStr(""), validation_alias=AliasChoices("token", "bot_token", "discord_token")
    )
    command_prefix: str = Field(
        default="!",
        min_length=1,
        max_length=5,
        validation_alias=AliasChoices("command_prefix", "prefix"),
    )
    test_guild_ids: tuple[int, ...] = Field(
        default_factory=tuple, validation_alias=AliasChoices("test_guild_ids", "test_guilds")
    )
    sync_on_startup: bool = False

    @field_validator("test_guild_ids", mode="before")
    @classmethod
    def validate_guild_ids(cls, v: tuple[int, ...] | list[int]) -> tuple[int, ...]:
        """Convert JSON arrays to tuples and reject non-positive snowflakes."""
        if isinstance(v, list):
            v = tuple(v)
        for snowflake in v:
            if snowflake <= 0:
                raise ValueError(f"Guild ID must be positive, got {snowflake}")
        return v


class AudioSettings(BaseModel):
    """Audio playback configuration."""

    model_config = SettingsConfigDict(frozen=True, strict=True, populate_by_name=True)

    default_volume: VolumeFloat = 0.5
    ffmpeg_options: dict[str, str] = Field(
        default_factory=lambda: {
            "before_options": "-reconnect 1 -reconnect_streamed 1 -reconnect_delay_max 5",
            "options": "-vn",
        }
    )
    ytdlp_format: str = "bestaudio/best"
    connect_timeout_s: float = Field(
        default=10.0,
        gt=0.0,
        le=60.0,
        validation_alias=AliasChoices("connect_timeout_s", "connect_timeout"),
    )


class PlaylistSettings(BaseModel):
    """Queue presentation and resolver caching."""

    model_config = SettingsConfigDict(frozen=True, strict=True)

    queue_display_limit: int = Field(default=15, ge=1, le=50)
    resolve_cache_ttl_seconds: int = Field(default=3600, ge=0)


class Settings(BaseSettings):
    """Application settings container.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - DISCORD__TOKEN, DISCORD__COMMAND_PREFIX, ... (nested)
    - AUDIO__DEFAULT_VOLUME, PLAYLIST__QUEUE_DISPLAY_LIMIT, ...
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        strict=True,
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)
    playlist: PlaylistSettings = Field(default_factory=PlaylistSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=valid_levels)
            )
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings (.env file, then environment, then defaults)."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
