"""Core domain entities for the music bounded context."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from discord_playlist.domain.shared.types import NonEmptyStr, SongTitleStr


class Song(BaseModel):
    """Immutable record of one queued item.

    Created by the playlist engine once the resolver has confirmed the URL is
    playable; the title is the resolver's, the requester is whoever asked.
    """

    model_config = ConfigDict(frozen=True, strict=True)

    url: NonEmptyStr
    title: SongTitleStr
    requester: NonEmptyStr
