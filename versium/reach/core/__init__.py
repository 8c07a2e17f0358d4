"""Core components."""

from .config import DEFAULT_BASE_URL, PACING_INTERVAL, ReachClientConfig
from .enums import AppendTool, ListgenOutputType, ListgenTool
from .exceptions import (
    AuthenticationError,
    ConfigurationError,
    MalformedBodyError,
    ReachError,
    RequestTimeoutError,
    TransientHTTPError,
)

__all__ = [
    "ReachClientConfig",
    "DEFAULT_BASE_URL",
    "PACING_INTERVAL",
    # Enums
    "AppendTool",
    "ListgenTool",
    "ListgenOutputType",
    # Exceptions
    "ReachError",
    "AuthenticationError",
    "ConfigurationError",
    "MalformedBodyError",
    "RequestTimeoutError",
    "TransientHTTPError",
]
