"""Request construction helpers."""

from .urls import API_KEY_HEADER, build_api_url, build_headers, build_query

__all__ = [
    "API_KEY_HEADER",
    "build_api_url",
    "build_headers",
    "build_query",
]
