"""Client configuration model.

Architecture:
    All tunables of ReachClient live in one frozen pydantic model so that
    validation happens once, at construction time, and the runtime
    components (retry driver, chunk executor, stream consumer) can read a
    consistent snapshot without re-checking values.

Units:
    Durations are seconds (floats). ``timeout`` and ``stream_timeout``
    accept ``None`` or ``math.inf`` to mean "no deadline"; both are
    normalized to ``None``.
"""

from __future__ import annotations

import math
import os
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .exceptions import ConfigurationError

API_KEY_ENV_VAR = "REACH_API_KEY"
DEFAULT_BASE_URL = "https://api.versium.com"

# Pacing window per chunk, before the configured pad is added.
PACING_INTERVAL = 1.0

# Subtracted from the local timeout when asking the API to answer early.
MAX_TIME_HINT_MARGIN = 0.2
MIN_MAX_TIME_HINT = 0.1


class ReachClientConfig(BaseModel):
    """Validated options for ReachClient."""

    api_key: str = Field(..., min_length=1)
    base_url: str = DEFAULT_BASE_URL
    api_version: int = Field(default=2, ge=1)
    queries_per_second: int = Field(default=20, ge=1)
    timeout: float | None = Field(default=10.0)
    stream_timeout: float | None = Field(default=300.0)
    max_retries: int = Field(default=3, ge=1)
    retry_delay: float = Field(default=2.0, ge=0)
    rate_limit_pad: float = Field(default=0.1, ge=0)
    verbose: bool = False
    logging_function: Callable[..., Any] | None = None

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("timeout", "stream_timeout")
    @classmethod
    def normalize_unbounded(cls, v: float | None) -> float | None:
        """Map ``math.inf`` to ``None`` and reject non-positive deadlines."""
        if v is None or math.isinf(v):
            return None
        if v <= 0:
            raise ValueError("timeout must be positive, None or math.inf")
        return v

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def pacing_window(self) -> float:
        """Minimum spacing between two chunk starts, in seconds."""
        return PACING_INTERVAL + self.rate_limit_pad

    @property
    def max_time_hint(self) -> float | None:
        """Value of the ``rcfg_max_time`` query hint, or None when unbounded."""
        if self.timeout is None:
            return None
        return max(self.timeout - MAX_TIME_HINT_MARGIN, MIN_MAX_TIME_HINT)

    @classmethod
    def from_env(cls, **overrides: Any) -> ReachClientConfig:
        """Build a config whose API key comes from ``REACH_API_KEY``.

        Raises:
            ConfigurationError: If no key is given and the variable is unset
        """
        if "api_key" not in overrides:
            api_key = os.environ.get(API_KEY_ENV_VAR, "").strip()
            if not api_key:
                raise ConfigurationError(
                    f"No API key provided and {API_KEY_ENV_VAR} is not set"
                )
            overrides["api_key"] = api_key
        return cls(**overrides)
