"""Rate-paced execution of chunk plans.

This module provides the ChunkExecutor class that runs each chunk's
records concurrently and spaces chunk starts so the requests-per-second
budget holds regardless of how quickly responses come back.

Pacing:
    - Within one ``execute`` call, chunk N+1 starts no earlier than
      ``policy.window`` seconds after chunk N started. Each non-final chunk
      runs a pacing timer alongside its records and only completes when
      both have settled. The final chunk skips the timer.
    - Across calls, the executor remembers when its last chunk started and
      waits out the rest of the window before the first chunk of the next
      call.

Concurrency contract:
    ``last_chunk_start`` has a single writer: the ``execute`` call that is
    currently running. Concurrent ``execute`` calls on one executor are not
    supported; give each concurrent caller its own executor.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any, Generic, TypeVar

from ...utils import DiagnosticSink
from .definitions import ChunkPlan, ChunkPolicy
from .telemetry import (
    log_chunk_completed,
    log_chunk_error,
    log_chunk_execution_complete,
    log_chunk_started,
)

T = TypeVar("T")
R = TypeVar("R")


class ChunkExecutor(Generic[T, R]):
    """Executes chunk plans with per-second pacing.

    The executor takes chunk plans and a per-record coroutine function,
    runs each chunk's records concurrently, and yields each chunk's results
    in input order. An exception from any record cancels the rest of its
    chunk and propagates, so no further chunks run.
    """

    def __init__(
        self,
        policy: ChunkPolicy,
        *,
        diagnostics: DiagnosticSink | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize chunk executor.

        Args:
            policy: Chunking policy (chunk size and pacing window)
            diagnostics: Sink for verbose progress messages
            clock: Monotonic clock in seconds
        """
        self._policy = policy
        self._diagnostics = diagnostics or DiagnosticSink()
        self._clock = clock
        self._last_chunk_start: float | None = None

    @property
    def policy(self) -> ChunkPolicy:
        return self._policy

    @property
    def last_chunk_start(self) -> float | None:
        """Clock reading when the most recent chunk started, if any."""
        return self._last_chunk_start

    async def execute(
        self,
        *,
        plans: list[ChunkPlan[T]],
        run_item: Callable[[T], Awaitable[R]],
        endpoint_id: str = "unknown",
    ) -> AsyncIterator[list[R]]:
        """Execute chunk plans, yielding one result list per chunk.

        Args:
            plans: Chunk plans, in order
            run_item: Coroutine function producing the result for one item
            endpoint_id: Endpoint identifier for telemetry

        Yields:
            Results for each chunk, aligned with the chunk's items
        """
        if not plans:
            return

        waited = await self._wait_for_window()
        execution_start = self._clock()
        total_records = 0

        for plan in plans:
            chunk_start = self._clock()
            self._last_chunk_start = chunk_start
            self._diagnostics.verbose_log(
                f"Processing chunk {plan.chunk_index + 1} of {plan.total_chunks}..."
            )
            log_chunk_started(
                endpoint_id=endpoint_id,
                chunk_index=plan.chunk_index,
                total_chunks=plan.total_chunks,
                size=len(plan.items),
                waited_s=waited if plan.chunk_index == 0 else 0.0,
            )

            try:
                results = await self._run_chunk(plan, run_item, pace=not plan.is_last)
            except Exception as e:
                log_chunk_error(
                    endpoint_id=endpoint_id,
                    chunk_index=plan.chunk_index,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                raise

            elapsed_ms = (self._clock() - chunk_start) * 1000.0
            total_records += len(results)
            log_chunk_completed(
                endpoint_id=endpoint_id,
                chunk_index=plan.chunk_index,
                records=len(results),
                failures=sum(1 for r in results if getattr(r, "success", True) is False),
                latency_ms=elapsed_ms,
            )
            self._diagnostics.verbose_log(
                f"Chunk {plan.chunk_index + 1} of {plan.total_chunks} processed in {elapsed_ms:.0f}ms"
            )

            yield results

        log_chunk_execution_complete(
            endpoint_id=endpoint_id,
            chunks_used=len(plans),
            total_records=total_records,
            total_latency_ms=(self._clock() - execution_start) * 1000.0,
        )

    async def _wait_for_window(self) -> float:
        """Wait until a full window has passed since the previous chunk start."""
        if self._last_chunk_start is None:
            return 0.0
        since_last = self._clock() - self._last_chunk_start
        if since_last >= self._policy.window:
            return 0.0
        wait = self._policy.window - since_last
        self._diagnostics.verbose_log(
            f"Time since last chunk start: {since_last * 1000:.0f}ms\n",
            f"Waiting {wait * 1000:.0f}ms before starting...",
        )
        await asyncio.sleep(wait)
        return wait

    async def _run_chunk(
        self,
        plan: ChunkPlan[T],
        run_item: Callable[[T], Awaitable[R]],
        *,
        pace: bool,
    ) -> list[R]:
        """Run every item of a chunk concurrently (and the pacing timer).

        Results are collected from per-item tasks created in input order, so
        the returned list matches the chunk order, not completion order. The
        first task to fail cancels the others.
        """
        tasks: list[asyncio.Task[Any]] = [
            asyncio.ensure_future(run_item(item)) for item in plan.items
        ]
        timer = asyncio.ensure_future(asyncio.sleep(self._policy.window)) if pace else None
        try:
            pending = set(tasks)
            while pending:
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_EXCEPTION)
                for task in done:
                    error = task.exception()
                    if error is not None:
                        raise error
            if timer is not None:
                await timer
        finally:
            leftovers = [t for t in (*tasks, timer) if t is not None and not t.done()]
            for task in leftovers:
                task.cancel()
            if leftovers:
                await asyncio.gather(*leftovers, return_exceptions=True)

        return [task.result() for task in tasks]
