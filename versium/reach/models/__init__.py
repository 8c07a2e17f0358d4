"""Data models."""

from .responses import (
    AppendResponse,
    InputRecord,
    ListgenResponse,
    has_match,
    parse_append_body,
)

__all__ = [
    "AppendResponse",
    "ListgenResponse",
    "InputRecord",
    "has_match",
    "parse_append_body",
]
