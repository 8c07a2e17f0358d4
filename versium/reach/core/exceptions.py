"""Custom exception hierarchy."""

from __future__ import annotations


class ReachError(Exception):
    """Base exception for all library errors."""

    pass


class ConfigurationError(ReachError):
    """Client configuration is missing or invalid."""

    pass


class AuthenticationError(ReachError):
    """API key was rejected by the server (HTTP 401).

    This is a global condition, not a per-record one: it aborts the whole
    append batch instead of being recorded on a single response.
    """

    def __init__(
        self,
        message: str = "ReachClient received 401 unauthorized from the server. Check your API key.",
    ) -> None:
        super().__init__(message)
        self.status_code = 401


class RequestTimeoutError(ReachError):
    """A timed HTTP call did not complete within its deadline."""

    def __init__(self, message: str, timeout: float | None = None) -> None:
        super().__init__(message)
        self.timeout = timeout


class TransientHTTPError(ReachError):
    """Non-2xx response that is worth retrying."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedBodyError(ReachError):
    """A streamed NDJSON line could not be decoded."""

    def __init__(self, message: str, line: str, line_number: int) -> None:
        super().__init__(message)
        self.line = line
        self.line_number = line_number
