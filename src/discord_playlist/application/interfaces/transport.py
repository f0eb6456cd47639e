"""Port interface for the voice transport and its dispatcher handles."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from discord_playlist.application.interfaces.media_resolver import StreamHandle
from discord_playlist.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)

EndListener = Callable[[], None]
ErrorListener = Callable[[Exception], None]


class DispatcherHandle(ABC):
    """Live handle for one in-progress audio transmission."""

    @abstractmethod
    def pause(self) -> None: ...

    @abstractmethod
    def resume(self) -> None: ...

    @abstractmethod
    def dispose(self) -> None:
        """Release the underlying audio resource; no events fire afterwards."""
        ...

    @abstractmethod
    def on_end(self, listener: EndListener) -> None: ...

    @abstractmethod
    def on_error(self, listener: ErrorListener) -> None: ...

    @property
    @abstractmethod
    def is_disposed(self) -> bool: ...


class EventedDispatcher(DispatcherHandle):
    """Dispatcher base that owns listener bookkeeping.

    At most one terminal event (``end`` or ``error``) is delivered, and none
    after :meth:`dispose`. Subclasses call :meth:`_emit_end` / :meth:`_emit_error`
    from the event loop and implement :meth:`_release`.
    """

    def __init__(self, guild_id: int) -> None:
        self.guild_id = guild_id
        self._end_listeners: list[EndListener] = []
        self._error_listeners: list[ErrorListener] = []
        self._finished = False
        self._disposed = False

    def on_end(self, listener: EndListener) -> None:
        self._end_listeners.append(listener)

    def on_error(self, listener: ErrorListener) -> None:
        self._error_listeners.append(listener)

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def is_finished(self) -> bool:
        return self._finished

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._end_listeners.clear()
        self._error_listeners.clear()
        self._release()

    @abstractmethod
    def _release(self) -> None:
        """Stop and free whatever audio resource this dispatcher holds."""
        ...

    def _emit_end(self) -> None:
        if not self._claim_terminal_event():
            return
        for listener in list(self._end_listeners):
            self._call_listener("end", listener)

    def _emit_error(self, error: Exception) -> None:
        if not self._claim_terminal_event():
            return
        for listener in list(self._error_listeners):
            self._call_listener("error", listener, error)

    def _claim_terminal_event(self) -> bool:
        if self._finished or self._disposed:
            return False
        self._finished = True
        return True

    def _call_listener(self, kind: str, listener: Callable[..., None], *args: object) -> None:
        try:
            listener(*args)
        except Exception:
            logger.exception(LogTemplates.DISPATCHER_LISTENER_ERROR, kind, self.guild_id)


class Transport(ABC):
    """Interface for a guild's voice connection."""

    @abstractmethod
    def is_connected(self) -> bool: ...

    @abstractmethod
    async def connect(self, channel_id: int) -> bool:
        """Join (or move to) a voice channel."""
        ...

    @abstractmethod
    async def disconnect(self) -> bool: ...

    @abstractmethod
    def play(self, stream: StreamHandle) -> DispatcherHandle:
        """Start transmitting *stream*, raising ``PlaybackError`` if it cannot start."""
        ...
