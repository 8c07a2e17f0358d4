"""Async HTTP client with per-call wall-clock deadlines.

The session itself is created without a total timeout; every call carries
its own deadline instead, so append requests (seconds) and listgen streams
(minutes) can share one connection pool. When a deadline elapses the
in-flight call is cancelled, which closes its connection rather than
leaving it to finish in the background.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass
from typing import Any, Optional, TypeVar

import aiohttp

from ...core.exceptions import RequestTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class HTTPResponse:
    """Fully read response."""

    status: int
    headers: Mapping[str, str]
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(self, base_url: Optional[str] = None) -> None:
        self.base_url = base_url
        # Deadlines are enforced per call; the session must not add its own.
        self.timeout = aiohttp.ClientTimeout(total=None)
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def _resolve(self, url: str) -> str:
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url}{url}"
        return url

    async def _timed(self, call: Awaitable[T], url: str, timeout: float | None) -> T:
        """Race ``call`` against ``timeout`` seconds (None = no deadline)."""
        try:
            return await asyncio.wait_for(call, timeout)
        except TimeoutError as e:
            logger.debug("Request to %s timed out after %ss", url, timeout)
            raise RequestTimeoutError(
                f"Request to {url} timed out after {timeout}s", timeout=timeout
            ) from e

    async def fetch(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Optional[Mapping[str, str]] = None,
        timeout: float | None = None,
    ) -> HTTPResponse:
        """Perform one request and read its body within a single deadline.

        Raises:
            RequestTimeoutError: If the deadline elapses first
            aiohttp.ClientError: On transport failures
        """
        url = self._resolve(url)

        async def _call() -> HTTPResponse:
            async with self.session.request(method, url, headers=headers) as response:
                raw = await response.read()
                return HTTPResponse(
                    status=response.status,
                    headers=response.headers,
                    text=raw.decode("utf-8", errors="replace"),
                )

        return await self._timed(_call(), url, timeout)

    async def open(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Optional[Mapping[str, str]] = None,
        timeout: float | None = None,
    ) -> aiohttp.ClientResponse:
        """Start a request and return once headers arrive, body unread.

        The deadline covers connecting and receiving the response head. The
        caller owns the returned response and must release it.
        """
        url = self._resolve(url)

        async def _call() -> aiohttp.ClientResponse:
            return await self.session.request(method, url, headers=headers)

        return await self._timed(_call(), url, timeout)

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "HTTPClient":
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        await self.close()
