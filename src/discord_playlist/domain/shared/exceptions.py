"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ResolutionError(DomainError):
    """Raised when a source locator cannot be resolved to playable media."""

    def __init__(self, locator: str, reason: str | None = None) -> None:
        msg = reason or f"Could not resolve '{locator}'"
        super().__init__(msg, code="RESOLUTION_ERROR")
        self.locator = locator
        self.reason = msg


class PlaybackError(DomainError):
    """Raised when a transport cannot start or continue a stream."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="PLAYBACK_ERROR")


class PreconditionViolationError(DomainError):
    """Raised when an operation is invoked before its collaborators are ready."""

    def __init__(self, operation: str, requirement: str, message: str | None = None) -> None:
        msg = message or f"Cannot perform '{operation}': {requirement}"
        super().__init__(msg, code="PRECONDITION_VIOLATION")
        self.operation = operation
        self.requirement = requirement


class CommandError(DomainError):
    """Raised when a chat command cannot be carried out; the message is user-facing."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="COMMAND_ERROR")
