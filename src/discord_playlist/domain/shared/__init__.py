"""Shared domain primitives used across the playlist bounded context."""

from discord_playlist.domain.shared.exceptions import (
    CommandError,
    DomainError,
    PlaybackError,
    PreconditionViolationError,
    ResolutionError,
)

__all__ = [
    "DomainError",
    "ResolutionError",
    "PlaybackError",
    "PreconditionViolationError",
    "CommandError",
]
