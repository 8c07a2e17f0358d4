"""Per-record retry driver for append requests.

Architecture:
    Each input record is driven through a small state machine:

        ATTEMPTING(n) --success--------------------------> DONE
        ATTEMPTING(n) --retryable, n < max_retries - 1---> ATTEMPTING(n + 1)
        ATTEMPTING(n) --retryable, n == max_retries - 1--> DONE (terminal failure)
        ATTEMPTING(n) --fatal----------------------------> ABORTED

    Every attempt's outcome is first classified into an AttemptOutcome, and
    only the classification drives transitions. DONE always produces an
    AppendResponse (success or reified failure); ABORTED raises
    AuthenticationError, which the chunk executor turns into a batch abort.

Classification:
    - HTTP 401: fatal
    - other non-2xx: retryable (TransientHTTPError)
    - local deadline elapsed: retryable (RequestTimeoutError)
    - any other transport error: retryable
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum

import aiohttp

from ..core.exceptions import AuthenticationError, RequestTimeoutError, TransientHTTPError
from ..models import AppendResponse, InputRecord
from ..utils import DiagnosticSink
from .rest import HTTPClient, HTTPResponse

logger = logging.getLogger(__name__)


class AttemptState(str, Enum):
    ATTEMPTING = "attempting"
    DONE = "done"
    ABORTED = "aborted"


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    RETRYABLE = "retryable"
    FATAL = "fatal"


class FailureReason(str, Enum):
    AUTHENTICATION = "authentication"
    HTTP_STATUS = "http_status"
    TIMEOUT = "timeout"
    TRANSPORT = "transport"


@dataclass(frozen=True)
class AttemptOutcome:
    """Classified result of one attempt.

    Attributes:
        kind: Success, retryable or fatal
        response: The response, if one was received
        reason: Failure category (None on success)
        error: Exception describing the failure (None on success)
    """

    kind: OutcomeKind
    response: HTTPResponse | None = None
    reason: FailureReason | None = None
    error: Exception | None = None


def classify_response(response: HTTPResponse) -> AttemptOutcome:
    """Classify a received response by status code."""
    if response.status == 401:
        return AttemptOutcome(
            kind=OutcomeKind.FATAL,
            response=response,
            reason=FailureReason.AUTHENTICATION,
            error=AuthenticationError(),
        )
    if response.ok:
        return AttemptOutcome(kind=OutcomeKind.SUCCESS, response=response)
    return AttemptOutcome(
        kind=OutcomeKind.RETRYABLE,
        response=response,
        reason=FailureReason.HTTP_STATUS,
        error=TransientHTTPError(f"Request failed ({response.status})", response.status),
    )


def classify_error(error: Exception) -> AttemptOutcome:
    """Classify an exception raised before a response was received."""
    reason = (
        FailureReason.TIMEOUT if isinstance(error, RequestTimeoutError) else FailureReason.TRANSPORT
    )
    return AttemptOutcome(kind=OutcomeKind.RETRYABLE, reason=reason, error=error)


class RetryDriver:
    """Runs one append request per input record with bounded retries."""

    def __init__(
        self,
        http: HTTPClient,
        *,
        build_url: Callable[[InputRecord], str],
        headers: Mapping[str, str],
        max_retries: int = 3,
        retry_delay: float = 2.0,
        timeout: float | None = 10.0,
        diagnostics: DiagnosticSink | None = None,
    ) -> None:
        """Initialize retry driver.

        Args:
            http: Client used for the timed calls
            build_url: Builds the request URL for a record; called on every attempt
            headers: Request headers
            max_retries: Total number of attempts per record (>= 1)
            retry_delay: Seconds to wait between attempts
            timeout: Per-attempt deadline in seconds, None for no deadline
            diagnostics: Sink for retry and failure messages
        """
        if max_retries < 1:
            raise ValueError("max_retries must be >= 1")
        self._http = http
        self._build_url = build_url
        self._headers = dict(headers)
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout = timeout
        self._diagnostics = diagnostics or DiagnosticSink()

    async def attempt(self, inputs: InputRecord) -> AttemptOutcome:
        """Make a single attempt and classify it."""
        url = self._build_url(inputs)
        try:
            response = await self._http.fetch(url, headers=self._headers, timeout=self.timeout)
        except (RequestTimeoutError, aiohttp.ClientError, OSError) as e:
            return classify_error(e)
        return classify_response(response)

    async def run(self, inputs: InputRecord) -> AppendResponse:
        """Drive ``inputs`` to a terminal response.

        Raises:
            AuthenticationError: If the server rejects the API key
        """
        state = AttemptState.ATTEMPTING
        attempt = 0
        outcome = AttemptOutcome(kind=OutcomeKind.RETRYABLE)

        while state is AttemptState.ATTEMPTING:
            last_try = attempt >= self.max_retries - 1
            outcome = await self.attempt(inputs)

            if outcome.kind is OutcomeKind.SUCCESS:
                state = AttemptState.DONE
            elif outcome.kind is OutcomeKind.FATAL:
                state = AttemptState.ABORTED
            elif last_try:
                self._report(outcome, retrying=False)
                state = AttemptState.DONE
            else:
                self._report(outcome, retrying=True)
                await asyncio.sleep(self.retry_delay)
                attempt += 1

        if state is AttemptState.ABORTED:
            logger.warning("Authentication rejected, aborting batch")
            assert outcome.error is not None
            raise outcome.error

        return self._finalize(outcome, inputs)

    def _report(self, outcome: AttemptOutcome, *, retrying: bool) -> None:
        suffix = f"retrying after {self.retry_delay}s..." if retrying else "no retries remaining."
        if outcome.reason is FailureReason.HTTP_STATUS:
            assert outcome.response is not None
            self._diagnostics.log(f"Request failed ({outcome.response.status}), {suffix}")
        elif outcome.reason is FailureReason.TIMEOUT:
            self._diagnostics.log(f"Request timed out, {suffix}")
        else:
            self._diagnostics.log("Request error:\n", outcome.error, f"\n{suffix.capitalize()}")

    @staticmethod
    def _finalize(outcome: AttemptOutcome, inputs: InputRecord) -> AppendResponse:
        if outcome.response is None:
            assert outcome.error is not None
            return AppendResponse.from_error(outcome.error, inputs)
        return AppendResponse.from_body(
            status=outcome.response.status,
            headers=outcome.response.headers,
            body_raw=outcome.response.text,
            inputs=inputs,
            error=outcome.error,
        )
