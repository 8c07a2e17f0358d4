"""Unit tests for ReachClientConfig."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from versium.reach.core import ConfigurationError, ReachClientConfig


class TestReachClientConfigDefaults:
    def test_defaults(self):
        config = ReachClientConfig(api_key="key")
        assert config.base_url == "https://api.versium.com"
        assert config.api_version == 2
        assert config.queries_per_second == 20
        assert config.timeout == 10.0
        assert config.stream_timeout == 300.0
        assert config.max_retries == 3
        assert config.retry_delay == 2.0
        assert config.rate_limit_pad == 0.1
        assert config.verbose is False
        assert config.logging_function is None

    def test_pacing_window(self):
        assert ReachClientConfig(api_key="key").pacing_window == pytest.approx(1.1)
        assert ReachClientConfig(api_key="key", rate_limit_pad=0).pacing_window == 1.0

    def test_frozen(self):
        config = ReachClientConfig(api_key="key")
        with pytest.raises(ValidationError):
            config.timeout = 5.0


class TestReachClientConfigTimeouts:
    @pytest.mark.parametrize("value", [None, math.inf])
    def test_unbounded_timeout(self, value):
        config = ReachClientConfig(api_key="key", timeout=value, stream_timeout=value)
        assert config.timeout is None
        assert config.stream_timeout is None
        assert config.max_time_hint is None

    def test_max_time_hint_leaves_margin(self):
        config = ReachClientConfig(api_key="key", timeout=10.0)
        assert config.max_time_hint == pytest.approx(9.8)

    def test_max_time_hint_has_floor(self):
        config = ReachClientConfig(api_key="key", timeout=0.25)
        assert config.max_time_hint == pytest.approx(0.1)

    @pytest.mark.parametrize("value", [0, -1.0])
    def test_non_positive_timeout_rejected(self, value):
        with pytest.raises(ValidationError):
            ReachClientConfig(api_key="key", timeout=value)


class TestReachClientConfigValidation:
    def test_empty_api_key_rejected(self):
        with pytest.raises(ValidationError):
            ReachClientConfig(api_key="   ")

    @pytest.mark.parametrize(
        "field,value",
        [("queries_per_second", 0), ("max_retries", 0), ("retry_delay", -1), ("rate_limit_pad", -0.1)],
    )
    def test_out_of_range_values_rejected(self, field, value):
        with pytest.raises(ValidationError):
            ReachClientConfig(api_key="key", **{field: value})

    def test_base_url_trailing_slash_removed(self):
        config = ReachClientConfig(api_key="key", base_url="https://example.com/")
        assert config.base_url == "https://example.com"

    def test_logging_function_accepted(self):
        def sink(*msgs):
            pass

        assert ReachClientConfig(api_key="key", logging_function=sink).logging_function is sink


class TestReachClientConfigFromEnv:
    def test_reads_api_key(self, monkeypatch):
        monkeypatch.setenv("REACH_API_KEY", "env-key")
        config = ReachClientConfig.from_env(queries_per_second=5)
        assert config.api_key == "env-key"
        assert config.queries_per_second == 5

    def test_explicit_key_wins(self, monkeypatch):
        monkeypatch.setenv("REACH_API_KEY", "env-key")
        assert ReachClientConfig.from_env(api_key="explicit").api_key == "explicit"

    def test_missing_key_raises(self, monkeypatch):
        monkeypatch.delenv("REACH_API_KEY", raising=False)
        with pytest.raises(ConfigurationError):
            ReachClientConfig.from_env()
