"""
Playlist Commands

A closed set of command variants, the chat-text parser that produces them,
and the handler that maps each variant onto engine operations.
"""

from discord_playlist.application.commands.handler import PlaylistCommandHandler
from discord_playlist.application.commands.models import (
    AddSongCommand,
    CommandContext,
    JoinCommand,
    LeaveCommand,
    PauseCommand,
    PlayCommand,
    PlaylistCommand,
    ResumeCommand,
    ShowQueueCommand,
)
from discord_playlist.application.commands.parser import parse_command

__all__ = [
    "AddSongCommand",
    "CommandContext",
    "JoinCommand",
    "LeaveCommand",
    "PauseCommand",
    "PlayCommand",
    "PlaylistCommand",
    "ResumeCommand",
    "ShowQueueCommand",
    "PlaylistCommandHandler",
    "parse_command",
]
