"""Immutable value objects for the music bounded context."""

from __future__ import annotations

from enum import Enum


class PlaybackState(Enum):
    """Playback state with enforced transitions.

    State transitions:
    - IDLE -> PLAYING (a dequeued song starts streaming)
    - PLAYING -> PAUSED (pause)
    - PAUSED -> PLAYING (resume)
    - PLAYING -> PLAYING (stream ended, next song started)
    - PLAYING/PAUSED -> IDLE (queue exhausted or stopped)
    """

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"

    def can_transition_to(self, target: PlaybackState) -> bool:
        """Check if transition to target state is valid."""
        valid_transitions = {
            PlaybackState.IDLE: {PlaybackState.PLAYING, PlaybackState.IDLE},
            PlaybackState.PLAYING: {
                PlaybackState.PAUSED,
                PlaybackState.PLAYING,
                PlaybackState.IDLE,
            },
            PlaybackState.PAUSED: {PlaybackState.PLAYING, PlaybackState.IDLE},
        }
        return target in valid_transitions.get(self, set())
