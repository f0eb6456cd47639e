"""Turns prefixed chat text into a playlist command."""

from __future__ import annotations

from discord_playlist.application.commands.models import (
    AddSongCommand,
    JoinCommand,
    LeaveCommand,
    PauseCommand,
    PlayCommand,
    PlaylistCommand,
    ResumeCommand,
    ShowQueueCommand,
)
from discord_playlist.domain.shared.exceptions import CommandError
from discord_playlist.domain.shared.messages import ErrorMessages


def parse_command(content: str, prefix: str) -> PlaylistCommand | None:
    """Parse ``<prefix><verb> [args]``.

    Returns None for text that is not a playlist command. Raises
    ``CommandError`` when the verb is known but its arguments are missing.
    """
    if not content.startswith(prefix):
        return None

    parts = content[len(prefix) :].split()
    if not parts:
        return None

    verb, args = parts[0].lower(), parts[1:]
    match verb:
        case "join":
            return JoinCommand()
        case "leave":
            return LeaveCommand()
        case "add":
            if not args:
                raise CommandError(ErrorMessages.ADD_REQUIRES_URL)
            return AddSongCommand(url=args[0])
        case "queue":
            return ShowQueueCommand()
        case "play":
            return PlayCommand()
        case "pause":
            return PauseCommand()
        case "resume":
            return ResumeCommand()
        case _:
            return None
