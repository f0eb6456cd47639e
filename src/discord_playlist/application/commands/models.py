"""Closed set of playlist commands and the context they run in."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from discord_playlist.domain.shared.types import NonEmptyStr

if TYPE_CHECKING:
    from discord_playlist.application.interfaces.output_channel import OutputChannel


class JoinCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["join"] = "join"


class LeaveCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["leave"] = "leave"


class AddSongCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["add"] = "add"
    url: NonEmptyStr


class ShowQueueCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["queue"] = "queue"


class PlayCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["play"] = "play"


class PauseCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["pause"] = "pause"


class ResumeCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["resume"] = "resume"


PlaylistCommand = Annotated[
    JoinCommand
    | LeaveCommand
    | AddSongCommand
    | ShowQueueCommand
    | PlayCommand
    | PauseCommand
    | ResumeCommand,
    Field(discriminator="kind"),
]


@dataclass(frozen=True)
class CommandContext:
    """Who issued a command, from where, and where replies go."""

    guild_id: int
    author_name: str
    output_channel: OutputChannel
    voice_channel_id: int | None = None
    voice_channel_name: str | None = None

    @property
    def in_voice(self) -> bool:
        return self.voice_channel_id is not None
