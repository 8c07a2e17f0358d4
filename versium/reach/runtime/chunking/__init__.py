"""Chunked, rate-paced dispatch of append batches.

Architecture:
    The chunking layer consists of:
    - definitions.py: Chunk metadata structures (ChunkPolicy, ChunkPlan)
    - planners.py: Splits a batch into contiguous rate-budgeted chunks
    - executors.py: Runs chunks concurrently with per-second pacing
    - telemetry.py: Structured logging
"""

from __future__ import annotations

from .definitions import ChunkPlan, ChunkPolicy
from .executors import ChunkExecutor
from .planners import ChunkPlanner, chunk_items

__all__ = [
    "ChunkPolicy",
    "ChunkPlan",
    "ChunkPlanner",
    "ChunkExecutor",
    "chunk_items",
]
