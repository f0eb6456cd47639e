"""Reusable Pydantic Annotated types for domain-wide validation.

Models annotate their fields with these instead of repeating constraints::

    from discord_playlist.domain.shared.types import NonEmptyStr

    class Song(BaseModel):
        title: NonEmptyStr
"""

from __future__ import annotations

from typing import Annotated, Final

from pydantic import Field

# ── Numeric constraints ─────────────────────────────────────────────

PositiveInt = Annotated[int, Field(gt=0)]
"""Integer > 0."""

NonNegativeFloat = Annotated[float, Field(ge=0.0)]
"""Float >= 0.0."""

VolumeFloat = Annotated[float, Field(ge=0.0, le=2.0)]
"""Audio volume multiplier in [0.0, 2.0]."""


# ── String constraints ──────────────────────────────────────────────

NonEmptyStr = Annotated[str, Field(min_length=1)]
"""String with at least one character."""

SONG_TITLE_MAX_LENGTH: Final[int] = 500

SongTitleStr = Annotated[str, Field(min_length=1, max_length=SONG_TITLE_MAX_LENGTH)]
"""Song title: 1-500 characters."""
