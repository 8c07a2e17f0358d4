"""Response records returned by ReachClient."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

InputRecord = Mapping[str, Any]


def parse_append_body(raw: str) -> Any | None:
    """Parse an append response body, returning None if it is not JSON."""
    try:
        return json.loads(raw)
    except ValueError:
        return None


def has_match(body: Any) -> bool:
    """True when ``body.versium.num_matches`` is present and nonzero."""
    if not isinstance(body, dict):
        return False
    envelope = body.get("versium")
    if not isinstance(envelope, dict):
        return False
    return bool(envelope.get("num_matches"))


@dataclass
class AppendResponse:
    """Outcome of one append input record.

    One of these is produced for every input, whether the request
    succeeded, failed with a non-2xx status after all retries, or never
    received a response at all (``http_status == 0`` and ``error`` set).

    Attributes:
        success: True for a 2xx response
        http_status: HTTP status code, 0 if no response was received
        headers: Response headers (empty if no response was received)
        body: Parsed JSON body, None if absent or not valid JSON
        body_raw: Raw response text
        match_found: Whether the API reported at least one match
        inputs: The input record this response answers
        error: Failure that made the record terminal, None on success
    """

    success: bool
    http_status: int
    headers: Mapping[str, str]
    body: Any | None
    body_raw: str
    match_found: bool
    inputs: InputRecord
    error: Exception | None = None

    @property
    def results(self) -> list[Any]:
        """Records under ``body.versium.results``, or an empty list."""
        if not isinstance(self.body, dict):
            return []
        envelope = self.body.get("versium")
        if not isinstance(envelope, dict):
            return []
        return list(envelope.get("results") or [])

    @classmethod
    def from_body(
        cls,
        *,
        status: int,
        headers: Mapping[str, str],
        body_raw: str,
        inputs: InputRecord,
        error: Exception | None = None,
    ) -> AppendResponse:
        body = parse_append_body(body_raw)
        return cls(
            success=200 <= status < 300,
            http_status=status,
            headers=headers,
            body=body,
            body_raw=body_raw,
            match_found=has_match(body),
            inputs=inputs,
            error=error,
        )

    @classmethod
    def from_error(cls, error: Exception, inputs: InputRecord) -> AppendResponse:
        return cls(
            success=False,
            http_status=0,
            headers={},
            body=None,
            body_raw="",
            match_found=False,
            inputs=inputs,
            error=error,
        )


@dataclass
class ListgenResponse:
    """Result of a listgen call.

    ``get_records()`` returns a single-pass async iterator over the
    streamed records. It is empty when the request did not succeed.

    A response whose records are not read to the end holds its HTTP
    connection until ``close()`` is called; using the response as an
    async context manager does that automatically.
    """

    success: bool
    http_status: int
    headers: Mapping[str, str]
    inputs: Mapping[str, Any]
    _records: Callable[[], AsyncIterator[Any]] | None = field(default=None, repr=False)
    _release: Callable[[], None] | None = field(default=None, repr=False)
    _consumed: bool = field(default=False, repr=False)

    def get_records(self) -> AsyncIterator[Any]:
        """Return the record stream.

        Raises:
            RuntimeError: If the stream was already requested once
        """
        if self._consumed:
            raise RuntimeError("Listgen records can only be iterated once")
        self._consumed = True
        if self._records is None:
            return _empty()
        return self._records()

    async def close(self) -> None:
        """Release the underlying connection, discarding unread records."""
        self._consumed = True
        if self._release is not None:
            self._release()
            self._release = None

    async def __aenter__(self) -> ListgenResponse:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


async def _empty() -> AsyncIterator[Any]:
    return
    yield
