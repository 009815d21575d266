"""Exceptions raised while requesting a completion."""
from __future__ import annotations


class CompletionError(Exception):
    """Base exception for completion request failures."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ConfigError(CompletionError):
    """Settings are missing or invalid."""

    pass


class TransportError(CompletionError):
    """The request never produced a complete HTTP response."""

    pass


class UpstreamError(CompletionError):
    """The API answered with a non-success status."""

    pass


class MalformedResponseError(CompletionError):
    """The response body is not a valid completion payload."""

    pass


class EmptyCompletionError(CompletionError):
    """The response carried no candidate completions."""

    def __init__(self, message: str = "No completion returned.") -> None:
        super().__init__(message)
