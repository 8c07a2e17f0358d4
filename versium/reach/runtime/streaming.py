"""Incremental newline framing for streamed response bodies.

A transport hands us the body in arbitrarily sized chunks; a chunk may end
in the middle of a line or even in the middle of a multi-byte character.
LineFramer keeps the unterminated tail between chunks and releases only
complete lines, so the concatenation of everything it yields (plus the
final flushed remainder) is exactly the original text.
"""

from __future__ import annotations

import codecs
from collections.abc import AsyncIterable, AsyncIterator


class LineFramer:
    """Stateful splitter turning text chunks into newline-terminated lines.

    The search cursor remembers how much of the buffered tail has already
    been scanned, so a long line delivered in many small chunks is scanned
    once overall instead of once per chunk.
    """

    def __init__(self) -> None:
        self._buffer = ""
        self._cursor = 0

    @property
    def pending(self) -> str:
        """Buffered text not yet terminated by a newline."""
        return self._buffer

    def feed(self, chunk: str) -> list[str]:
        """Append a chunk and return every line it completes.

        Returned lines keep their trailing ``\\n``.
        """
        if not chunk:
            return []

        self._buffer += chunk
        lines: list[str] = []
        start = 0
        search_from = self._cursor
        while True:
            eol = self._buffer.find("\n", search_from)
            if eol < 0:
                break
            lines.append(self._buffer[start : eol + 1])
            start = eol + 1
            search_from = start

        if start:
            self._buffer = self._buffer[start:]
        self._cursor = len(self._buffer)
        return lines

    def flush(self) -> str | None:
        """Return the unterminated remainder (if any) and reset the buffer."""
        remainder = self._buffer
        self._buffer = ""
        self._cursor = 0
        return remainder or None


async def iter_lines(chunks: AsyncIterable[str]) -> AsyncIterator[str]:
    """Yield complete lines from an async source of text chunks.

    A trailing segment without a newline is yielded once the source is
    exhausted. A source ending exactly on a newline yields no empty tail.
    """
    framer = LineFramer()
    async for chunk in chunks:
        for line in framer.feed(chunk):
            yield line
    remainder = framer.flush()
    if remainder is not None:
        yield remainder


async def decode_chunks(
    chunks: AsyncIterable[bytes], encoding: str = "utf-8"
) -> AsyncIterator[str]:
    """Decode byte chunks to text, carrying split multi-byte sequences over."""
    decoder = codecs.getincrementaldecoder(encoding)()
    async for chunk in chunks:
        text = decoder.decode(chunk)
        if text:
            yield text
    tail = decoder.decode(b"", final=True)
    if tail:
        yield tail
