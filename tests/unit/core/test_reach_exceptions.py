"""Precise unit tests for exception hierarchy."""

from versium.reach.core import (
    AuthenticationError,
    ConfigurationError,
    MalformedBodyError,
    ReachError,
    RequestTimeoutError,
    TransientHTTPError,
)


def test_authentication_error_defaults():
    error = AuthenticationError()
    assert error.status_code == 401
    assert "API key" in str(error)
    assert isinstance(error, ReachError)


def test_transient_http_error_with_status_code():
    error = TransientHTTPError("Request failed (503)", 503)
    assert error.status_code == 503
    assert str(error) == "Request failed (503)"


def test_request_timeout_error_keeps_deadline():
    error = RequestTimeoutError("timed out", timeout=10.0)
    assert error.timeout == 10.0
    assert isinstance(error, ReachError)


def test_malformed_body_error_context():
    error = MalformedBodyError("bad line", line="{", line_number=3)
    assert error.line == "{"
    assert error.line_number == 3


def test_configuration_error_is_reach_error():
    assert issubclass(ConfigurationError, ReachError)
