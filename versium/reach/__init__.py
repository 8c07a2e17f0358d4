"""Versium REACH - batched, rate-limited client for the REACH enrichment API."""

from .client import ReachClient
from .core import (
    AppendTool,
    AuthenticationError,
    ConfigurationError,
    ListgenOutputType,
    ListgenTool,
    MalformedBodyError,
    ReachClientConfig,
    ReachError,
    RequestTimeoutError,
    TransientHTTPError,
)
from .models import AppendResponse, ListgenResponse
from .runtime.streaming import LineFramer, iter_lines

__version__ = "0.1.0"

__all__ = [
    # Client
    "ReachClient",
    "ReachClientConfig",
    # Enums
    "AppendTool",
    "ListgenTool",
    "ListgenOutputType",
    # Models
    "AppendResponse",
    "ListgenResponse",
    # Streaming
    "LineFramer",
    "iter_lines",
    # Exceptions
    "ReachError",
    "AuthenticationError",
    "ConfigurationError",
    "MalformedBodyError",
    "RequestTimeoutError",
    "TransientHTTPError",
]
