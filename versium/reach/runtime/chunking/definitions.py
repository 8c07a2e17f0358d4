"""Chunking metadata definitions and policy structures.

This module defines the data structures used to describe how an append
batch is split into rate-budgeted chunks.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from ...core.config import PACING_INTERVAL

T = TypeVar("T")


@dataclass(frozen=True)
class ChunkPolicy:
    """Chunking policy for a rate-limited endpoint.

    Attributes:
        size: Records per chunk, equal to the requests-per-second budget
        interval: Base spacing between chunk starts, in seconds
        pad: Extra seconds added to the interval as a safety margin
    """

    size: int
    interval: float = PACING_INTERVAL
    pad: float = 0.1

    def __post_init__(self) -> None:
        """Validate chunk policy configuration."""
        if self.size < 1:
            raise ValueError("ChunkPolicy size must be >= 1")
        if self.interval < 0 or self.pad < 0:
            raise ValueError("ChunkPolicy interval and pad must be >= 0")

    @property
    def window(self) -> float:
        """Minimum time between two chunk starts."""
        return self.interval + self.pad


@dataclass(frozen=True)
class ChunkPlan(Generic[T]):
    """Plan for a single chunk.

    Attributes:
        items: Contiguous slice of the input batch
        chunk_index: Zero-based index of this chunk in the overall plan
        total_chunks: Number of chunks in the plan
        offset: Position of the first item in the full batch
    """

    items: Sequence[T]
    chunk_index: int = 0
    total_chunks: int = 1
    offset: int = 0

    @property
    def is_last(self) -> bool:
        return self.chunk_index == self.total_chunks - 1
