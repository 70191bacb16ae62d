"""Exceptions raised by the completion client.  Nothing here is retried; callers decide."""

from typing import (
    Any,
    Dict,
    List,
)


class CompletionError(RuntimeError):
    """Base class for every failure surfaced by :mod:`draftly.core.client`."""


class TransportError(CompletionError):
    """Raised when the HTTP call fails or the endpoint answers with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MalformedToolArgs(CompletionError):
    """Raised when a tool call's ``arguments`` string is not valid JSON."""


class MalformedResponse(CompletionError):
    """Raised when a reply cannot be read: not JSON, or missing the expected message."""


class SchemaValidationError(CompletionError):
    """Raised when a JSON reply does not match the requested schema."""

    def __init__(self, message: str, errors: List[Dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class ToolExecutionError(CompletionError):
    """Raised when a registered tool fails while executing."""
