"""Runtime orchestration components."""

from .chunking import ChunkExecutor, ChunkPlan, ChunkPlanner, ChunkPolicy
from .rest import HTTPClient, HTTPResponse
from .retry import AttemptOutcome, AttemptState, OutcomeKind, RetryDriver
from .stream import StreamConsumer, iter_ndjson
from .streaming import LineFramer, decode_chunks, iter_lines

__all__ = [
    "HTTPClient",
    "HTTPResponse",
    "RetryDriver",
    "AttemptOutcome",
    "AttemptState",
    "OutcomeKind",
    "ChunkPolicy",
    "ChunkPlan",
    "ChunkPlanner",
    "ChunkExecutor",
    "StreamConsumer",
    "iter_ndjson",
    "LineFramer",
    "iter_lines",
    "decode_chunks",
]
