"""Pytest configuration and fixtures shared across all test modules.

Environment variables are pinned before any application import so settings
never point at the real backend during tests.
"""

import os

# CRITICAL: Set these before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("BACKEND_BASE_URL", "http://backend.test/api")
os.environ.setdefault("LOG_FORMAT", "json")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Any

import pytest

from ratelimit_console.adapters.backend.base import AbstractBackendClient
from ratelimit_console.catalog import get_endpoint
from ratelimit_console.schemas.configuration import ConfigurationRequest
from ratelimit_console.schemas.results import EmptyResult, decode_payload


class FakeBackend(AbstractBackendClient):
    """In-memory backend: records calls, replays a queued result or error."""

    base_url = "http://backend.test/api"

    def __init__(self) -> None:
        self.queries: list[tuple[str, str]] = []
        self.configurations: list[ConfigurationRequest] = []
        self.query_outcome: Any = EmptyResult()
        self.configure_error: Exception | None = None
        self.closed = False

    def endpoint_url(self, category: str) -> str:
        return f"{self.base_url}{get_endpoint(category).path}"

    def respond_with(self, data: Any) -> None:
        self.query_outcome = decode_payload(data)

    def fail_with(self, error: Exception) -> None:
        self.query_outcome = error

    async def query(self, category: str, prompt: str):
        self.queries.append((category, prompt))
        if isinstance(self.query_outcome, Exception):
            raise self.query_outcome
        return self.query_outcome

    async def configure(self, request: ConfigurationRequest) -> None:
        self.configurations.append(request)
        if self.configure_error is not None:
            raise self.configure_error

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()
