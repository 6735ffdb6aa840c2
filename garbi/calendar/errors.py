"""Exceptions raised while resolving and executing calendar operations."""

from typing import Optional


class CalendarAssistantError(Exception):
    """Base class for errors that abort a dispatch batch."""


class ValidationError(CalendarAssistantError, ValueError):
    """An operation request is missing required fields or carries malformed ones."""

    def __init__(self, message: str, kind: Optional[str] = None):
        super().__init__(message)
        self.kind = kind


class UnsupportedOperationError(CalendarAssistantError):
    """The model asked for an operation kind this engine does not know."""

    def __init__(self, kind: object):
        super().__init__(f"Unknown operation: {kind}")
        self.kind = kind


class BackendError(CalendarAssistantError):
    """A call to the remote calendar service failed.

    The message is always the generic one for the failed operation
    (e.g. "Failed to update event"); the underlying client error is kept
    as ``__cause__`` for logging only.
    """

    def __init__(self, message: str, operation: str):
        super().__init__(message)
        self.operation = operation
