"""Interface for clients of the rate-limited API."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ratelimit_console.schemas.configuration import ConfigurationRequest
from ratelimit_console.schemas.results import EmptyResult, RecordListResult, TextResult


class AbstractBackendClient(ABC):
    """Operations the console performs against the backend.

    Implementations translate transport and HTTP failures into
    ``ratelimit_console.core.errors`` types so callers never see the
    underlying HTTP library.
    """

    @abstractmethod
    def endpoint_url(self, category: str) -> str:
        """Absolute URL of a category's query endpoint."""
        ...

    @abstractmethod
    async def query(
        self, category: str, prompt: str
    ) -> TextResult | RecordListResult | EmptyResult:
        """Run a prompt against a category endpoint.

        Raises:
            RateLimitedAppError: On HTTP 429.
            BackendAppError: On any other non-success status or unreadable body.
            NetworkAppError: When the backend cannot be reached.
        """
        ...

    @abstractmethod
    async def configure(self, request: ConfigurationRequest) -> None:
        """Send a rate-limit rule to the backend.

        Raises:
            BackendAppError: On a non-success status.
            NetworkAppError: When the backend cannot be reached.
        """
        ...

    async def aclose(self) -> None:
        """Release network resources. No-op by default."""
        return None
