"""
Client Errors

Every failure raised by the client itself derives from SQLClientError.
Errors coming from a transport library (requests, sqlite, OS) are not wrapped
and reach the caller unchanged.
"""

from __future__ import annotations


class SQLClientError(Exception):
    """Base class for errors raised by sqld_client."""


class ConfigError(SQLClientError, ValueError):
    """Missing or invalid client configuration."""


class UnsupportedBackendError(ConfigError):
    """Requested or inferred backend kind is unknown or not installed."""

    def __init__(self, kind: str, enabled: tuple[str, ...] = ()) -> None:
        self.kind = kind
        self.enabled = enabled
        message = f"Unknown backend: {kind!r}."
        if enabled:
            message += f" Enabled backends: {', '.join(enabled)}."
        message += " Make sure the backend exists and its extra is installed."
        super().__init__(message)


class ContextRequiredError(ConfigError):
    """Backend kind needs host-provided context the generic constructor lacks."""

    def __init__(self, kind: str, constructor: str, reason: str) -> None:
        self.kind = kind
        self.constructor = constructor
        super().__init__(
            f"Connecting with the {kind!r} backend {reason}. "
            f"Please call {constructor}() directly."
        )


class ResponseShapeError(SQLClientError):
    """Server response is not a JSON array."""


class ResponseCountMismatchError(SQLClientError):
    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Response array did not contain expected {expected} results (got {actual})"
        )


class StatementParseError(SQLClientError):
    """A single element of the response array could not be parsed."""

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Failed to parse result {index}: {reason}")


class StatementExecutionError(SQLClientError):
    """The database reported an error for one statement."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class HttpStatusError(SQLClientError):
    """A host-provided HTTP transport returned a non-2xx status."""

    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self.body = body
        super().__init__(f"HTTP {status}: {body[:200]}")


class InvariantViolationError(SQLClientError, RuntimeError):
    """A backend returned a result count that breaks the batch contract."""
