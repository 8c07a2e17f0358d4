"""ReachClient: batched, rate-limited access to the Versium REACH API.

Architecture:
    ReachClient is a thin facade wiring the runtime components together:
    - ChunkPlanner / ChunkExecutor: split append batches into chunks of
      ``queries_per_second`` records and pace chunk starts one window apart
    - RetryDriver: runs each record with bounded retries
    - StreamConsumer: opens listgen requests and frames their NDJSON body
    - HTTPClient: owns the aiohttp session and enforces per-call deadlines

Concurrency:
    One client instance supports one ``append`` at a time. The executor's
    pacing state is per instance; run concurrent batches on separate clients.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping, Sequence
from functools import partial
from typing import Any

from .api import build_api_url, build_headers
from .core.config import ReachClientConfig
from .core.enums import AppendTool, ListgenOutputType, ListgenTool
from .models import AppendResponse, InputRecord, ListgenResponse
from .runtime.chunking import ChunkExecutor, ChunkPlanner, ChunkPolicy
from .runtime.rest import HTTPClient
from .runtime.retry import RetryDriver
from .runtime.stream import StreamConsumer
from .utils import DiagnosticSink

logger = logging.getLogger(__name__)


class ReachClient:
    """Client for REACH append and listgen APIs.

    Example:
        >>> async with ReachClient("my-api-key") as client:
        ...     async for chunk in client.append("contact", rows, ["phone"]):
        ...         for response in chunk:
        ...             print(response.match_found, response.results)
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        config: ReachClientConfig | None = None,
        http: HTTPClient | None = None,
        **options: Any,
    ) -> None:
        """Initialize client.

        Args:
            api_key: REACH API key; read from REACH_API_KEY when omitted
            config: Complete configuration; built from api_key/options if omitted
            http: HTTP client to use; one is created and owned otherwise
            **options: Any other ReachClientConfig field, e.g. ``queries_per_second``
        """
        if api_key is not None:
            options["api_key"] = api_key
        if config is None:
            config = ReachClientConfig.from_env(**options)
        elif options:
            config = ReachClientConfig(**{**config.model_dump(), **options})
        self.config = config
        self._owns_http = http is None
        self._http = http or HTTPClient()
        self._diagnostics = DiagnosticSink(config.logging_function, verbose=config.verbose)
        self._policy = ChunkPolicy(
            size=config.queries_per_second, interval=config.pacing_window, pad=0.0
        )
        self._executor: ChunkExecutor[InputRecord, AppendResponse] = ChunkExecutor(
            self._policy, diagnostics=self._diagnostics
        )

    @property
    def executor(self) -> ChunkExecutor[InputRecord, AppendResponse]:
        return self._executor

    def _url(
        self,
        tool: str,
        inputs: Mapping[str, Any],
        output_types: Sequence[str],
        extra: Mapping[str, Any] | None = None,
    ) -> str:
        return build_api_url(
            self.config.base_url, self.config.api_version, str(tool), inputs, output_types, extra
        )

    def _append_url(self, tool: str, output_types: Sequence[str], inputs: InputRecord) -> str:
        hint = self.config.max_time_hint
        # Ask the API to answer before the local deadline fires.
        extra = {"rcfg_max_time": hint} if hint is not None else None
        return self._url(tool, inputs, output_types, extra)

    def _retry_driver(self, tool: str, output_types: Sequence[str]) -> RetryDriver:
        return RetryDriver(
            self._http,
            build_url=partial(self._append_url, tool, output_types),
            headers=build_headers(self.config.api_key),
            max_retries=self.config.max_retries,
            retry_delay=self.config.retry_delay,
            timeout=self.config.timeout,
            diagnostics=self._diagnostics,
        )

    async def append(
        self,
        tool: AppendTool | str,
        inputs: Sequence[InputRecord],
        output_types: Sequence[str] | None = None,
    ) -> AsyncIterator[list[AppendResponse]]:
        """Query an append API for every input record.

        See API docs: https://api-documentation.versium.com/reference/welcome

        Args:
            tool: Append data tool name
            inputs: Input records (field name -> value)
            output_types: Requested output types; empty means API default

        Yields:
            One list per chunk of ``queries_per_second`` records, aligned
            with that slice of ``inputs``. Every input gets exactly one
            AppendResponse. With no inputs a single empty list is yielded.

        Raises:
            AuthenticationError: If the API key is rejected; no further chunks
                are yielded
        """
        if not inputs:
            self._diagnostics.log("ReachClient.append: No input data was given.")
            yield []
            return

        tool = str(tool)
        output_types = [str(o) for o in (output_types or [])]
        planner = ChunkPlanner(self._policy, endpoint_id=tool)
        driver = self._retry_driver(tool, output_types)

        async for results in self._executor.execute(
            plans=planner.plan(list(inputs)),
            run_item=driver.run,
            endpoint_id=tool,
        ):
            yield results

    async def append_all(
        self,
        tool: AppendTool | str,
        inputs: Sequence[InputRecord],
        output_types: Sequence[str] | None = None,
    ) -> list[AppendResponse]:
        """Run :meth:`append` to completion and return a flat list."""
        responses: list[AppendResponse] = []
        async for chunk in self.append(tool, inputs, output_types):
            responses.extend(chunk)
        return responses

    async def listgen(
        self,
        tool: ListgenTool | str,
        inputs: Mapping[str, Any],
        output_types: Sequence[ListgenOutputType | str],
    ) -> ListgenResponse:
        """Query a listgen API.

        See API docs: https://api-documentation.versium.com/reference/account-based-list-abm

        Args:
            tool: Listgen data tool name
            inputs: Query inputs; list values are sent as ``key[]`` parameters
            output_types: Requested output types

        Returns:
            ListgenResponse whose ``get_records()`` streams the results.
            Read the records to the end or call its ``close()`` (or use it
            with ``async with``) to release the connection.

        Raises:
            RequestTimeoutError: If the response does not start within
                ``stream_timeout``
        """
        url = self._url(str(tool), inputs, [str(o) for o in output_types])
        logger.debug("Opening listgen stream for %s", tool)
        consumer = StreamConsumer(
            self._http, timeout=self.config.stream_timeout, diagnostics=self._diagnostics
        )
        return await consumer.open(
            url, headers=build_headers(self.config.api_key, accept_json=False), inputs=inputs
        )

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_http:
            await self._http.close()

    async def __aenter__(self) -> ReachClient:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
