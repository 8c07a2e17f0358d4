"""Shared fixtures for integration tests."""

import os

import pytest


@pytest.fixture
def api_key() -> str:
    return os.environ["REACH_API_KEY"]
