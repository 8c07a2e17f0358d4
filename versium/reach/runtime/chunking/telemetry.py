"""Structured logging for chunked dispatch.

This module provides telemetry hooks for chunking operations, emitting
structured log records with the details in ``extra``.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_chunk_plan(*, endpoint_id: str, total_chunks: int, total_items: int, chunk_size: int) -> None:
    """Log chunk plan creation.

    Args:
        endpoint_id: Endpoint identifier
        total_chunks: Total number of chunks planned
        total_items: Number of input records in the batch
        chunk_size: Records per chunk
    """
    logger.debug(
        "chunk_plan_created",
        extra={
            "endpoint_id": endpoint_id,
            "total_chunks": total_chunks,
            "total_items": total_items,
            "chunk_size": chunk_size,
        },
    )


def log_chunk_started(
    *,
    endpoint_id: str,
    chunk_index: int,
    total_chunks: int,
    size: int,
    waited_s: float = 0.0,
) -> None:
    logger.debug(
        "chunk_started",
        extra={
            "endpoint_id": endpoint_id,
            "chunk_index": chunk_index,
            "total_chunks": total_chunks,
            "size": size,
            "waited_s": waited_s,
        },
    )


def log_chunk_completed(
    *,
    endpoint_id: str,
    chunk_index: int,
    records: int,
    failures: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single chunk.

    Args:
        endpoint_id: Endpoint identifier
        chunk_index: Zero-based index of the chunk
        records: Number of responses produced for this chunk
        failures: Number of those responses that were not successful
        latency_ms: Latency in milliseconds, pacing wait included (optional)
    """
    logger.info(
        "chunk_completed",
        extra={
            "endpoint_id": endpoint_id,
            "chunk_index": chunk_index,
            "records": records,
            "failures": failures,
            "latency_ms": latency_ms,
        },
    )


def log_chunk_execution_complete(
    *,
    endpoint_id: str,
    chunks_used: int,
    total_records: int,
    total_latency_ms: float | None = None,
) -> None:
    logger.info(
        "chunk_execution_complete",
        extra={
            "endpoint_id": endpoint_id,
            "chunks_used": chunks_used,
            "total_records": total_records,
            "total_latency_ms": total_latency_ms,
        },
    )


def log_chunk_error(
    *,
    endpoint_id: str,
    chunk_index: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log chunk execution error.

    Args:
        endpoint_id: Endpoint identifier
        chunk_index: Zero-based index of the chunk that failed
        error_type: Type of error (e.g., "AuthenticationError")
        error_message: Error message
    """
    logger.error(
        "chunk_error",
        extra={
            "endpoint_id": endpoint_id,
            "chunk_index": chunk_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )
