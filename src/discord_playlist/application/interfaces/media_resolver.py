"""Port interface for resolving source locators to playable media."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


class StreamHandle(ABC):
    """Lazily opened audio stream for one source locator.

    Creating a handle does no I/O; the transport calls :meth:`open` when it is
    ready to start playing.
    """

    def __init__(self, locator: str) -> None:
        self.locator = locator

    @abstractmethod
    async def open(self) -> str:
        """Return the direct media URL to feed to the audio player."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.locator!r})"


@dataclass(frozen=True)
class ResolvedMedia:
    title: str
    stream: StreamHandle


class MediaResolver(ABC):
    """Interface for turning a URL into a title and a playable stream."""

    @abstractmethod
    async def resolve(self, locator: str) -> ResolvedMedia:
        """Resolve a locator, raising ``ResolutionError`` if it is not playable."""
        ...

    @abstractmethod
    def stream(self, locator: str) -> StreamHandle:
        """Return a stream handle for an already validated locator."""
        ...
