"""Consumption of NDJSON listgen responses."""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator, Mapping
from typing import Any

import aiohttp

from ..core.exceptions import MalformedBodyError
from ..models import ListgenResponse
from ..utils import DiagnosticSink
from .rest import HTTPClient
from .streaming import decode_chunks, iter_lines

logger = logging.getLogger(__name__)


async def iter_ndjson(response: aiohttp.ClientResponse) -> AsyncIterator[Any]:
    """Yield one decoded JSON value per line of ``response``'s body.

    Whitespace-only lines are skipped. The response is released when the
    stream is exhausted, fails, or the consumer stops iterating.

    Raises:
        MalformedBodyError: If a line is not valid JSON
    """
    line_number = 0
    try:
        async for line in iter_lines(decode_chunks(response.content.iter_any())):
            line_number += 1
            # Blank lines carry no record; skip them instead of failing the stream.
            if not line.strip():
                continue
            try:
                yield json.loads(line)
            except ValueError as e:
                raise MalformedBodyError(
                    f"Invalid JSON on line {line_number} of listgen stream",
                    line=line,
                    line_number=line_number,
                ) from e
    finally:
        logger.debug("Listgen stream closed after %d lines", line_number)
        response.release()


class StreamConsumer:
    """Opens a listgen request and exposes its body as a record stream."""

    def __init__(
        self,
        http: HTTPClient,
        *,
        timeout: float | None = 300.0,
        diagnostics: DiagnosticSink | None = None,
    ) -> None:
        self._http = http
        self.timeout = timeout
        self._diagnostics = diagnostics or DiagnosticSink()

    async def open(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        inputs: Mapping[str, Any],
    ) -> ListgenResponse:
        """Issue the request and wrap the response.

        A non-2xx response is returned with ``success=False`` and an empty
        record stream; its body is never read.

        Raises:
            RequestTimeoutError: If the response head does not arrive in time
        """
        response = await self._http.open(url, headers=headers, timeout=self.timeout)

        if not 200 <= response.status < 300:
            self._diagnostics.log(f"Listgen request failed ({response.status})")
            response.release()
            return ListgenResponse(
                success=False,
                http_status=response.status,
                headers=response.headers,
                inputs=inputs,
            )

        return ListgenResponse(
            success=True,
            http_status=response.status,
            headers=response.headers,
            inputs=inputs,
            _records=lambda: iter_ndjson(response),
            _release=response.release,
        )
