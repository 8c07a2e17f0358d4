"""Chunk planning logic.

This module provides the ChunkPlanner class that splits an input batch
into contiguous chunks sized to the endpoint's rate budget.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from .definitions import ChunkPlan, ChunkPolicy
from .telemetry import log_chunk_plan

T = TypeVar("T")


def chunk_items(items: Sequence[T], size: int) -> list[Sequence[T]]:
    """Split ``items`` into contiguous slices of ``size`` (last may be shorter)."""
    if size < 1:
        raise ValueError("size must be >= 1")
    return [items[i : i + size] for i in range(0, len(items), size)]


class ChunkPlanner:
    """Plans rate-budgeted chunks for an append batch."""

    def __init__(self, policy: ChunkPolicy, endpoint_id: str = "unknown") -> None:
        self._policy = policy
        self._endpoint_id = endpoint_id

    def plan(self, items: Sequence[T]) -> list[ChunkPlan[T]]:
        """Plan chunks for a batch.

        Args:
            items: Full input batch, in order

        Returns:
            List of chunk plans covering every item exactly once, in order.
            Empty if ``items`` is empty.
        """
        slices = chunk_items(items, self._policy.size)
        plans = [
            ChunkPlan(
                items=chunk,
                chunk_index=index,
                total_chunks=len(slices),
                offset=index * self._policy.size,
            )
            for index, chunk in enumerate(slices)
        ]

        log_chunk_plan(
            endpoint_id=self._endpoint_id,
            total_chunks=len(plans),
            total_items=len(items),
            chunk_size=self._policy.size,
        )
        return plans
