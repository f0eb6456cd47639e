"""Port interface for posting status notifications."""

from __future__ import annotations

from abc import ABC, abstractmethod


class OutputChannel(ABC):
    """Destination for now-playing, paused, resumed and queue-empty notices."""

    @abstractmethod
    def post(self, text: str) -> None:
        """Send text without waiting for delivery."""
        ...
