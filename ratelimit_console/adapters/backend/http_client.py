"""httpx-based client for the rate-limited API."""

from __future__ import annotations

import logging
import time

import httpx

from ratelimit_console.adapters.backend.base import AbstractBackendClient
from ratelimit_console.catalog import get_endpoint
from ratelimit_console.core.errors import (
    BackendAppError,
    NetworkAppError,
    RateLimitedAppError,
)
from ratelimit_console.core.logging import correlation_headers
from ratelimit_console.schemas.configuration import ConfigurationRequest
from ratelimit_console.schemas.results import (
    EmptyResult,
    RecordListResult,
    TextResult,
    decode_envelope,
)

logger = logging.getLogger(__name__)


def _retry_after_seconds(response: httpx.Response) -> int | None:
    """Read a delta-seconds ``Retry-After`` header; HTTP dates are ignored."""
    raw = response.headers.get("Retry-After")
    if raw is None:
        return None
    try:
        return max(0, int(raw.strip()))
    except ValueError:
        return None


class HttpxBackendClient(AbstractBackendClient):
    """Async client backed by a single shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: str,
        *,
        config_path: str = "/urls",
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Backend base address, e.g. ``https://host/api``.
            config_path: Path of the configuration endpoint under ``base_url``.
            timeout_seconds: Timeout applied to every request.
            transport: Optional transport override (tests use
                ``httpx.MockTransport``).
        """
        self.base_url = base_url.rstrip("/")
        self.config_url = f"{self.base_url}{config_path}"
        self._client = httpx.AsyncClient(timeout=timeout_seconds, transport=transport)

    def endpoint_url(self, category: str) -> str:
        return f"{self.base_url}{get_endpoint(category).path}"

    async def query(
        self, category: str, prompt: str
    ) -> TextResult | RecordListResult | EmptyResult:
        url = self.endpoint_url(category)
        start = time.perf_counter()

        try:
            response = await self._client.get(
                url,
                params={"prompt": prompt},
                headers=correlation_headers(),
            )
        except httpx.RequestError as exc:
            logger.warning(
                "backend.query.unreachable",
                extra={"category": category, "error_type": type(exc).__name__},
            )
            raise NetworkAppError(
                code="backend_unreachable",
                title="Network Error",
                message="Unable to reach server.",
                details={"category": category, "url": url},
            ) from exc

        duration_ms = round((time.perf_counter() - start) * 1000, 2)
        status = response.status_code

        if status == 429:
            retry_after = _retry_after_seconds(response)
            logger.info(
                "backend.query.rate_limited",
                extra={"category": category, "retry_after_s": retry_after},
            )
            message = "Please wait and try again."
            if retry_after:
                message = f"Please wait {retry_after}s and try again."
            details = {"http_status": status, "category": category}
            if retry_after is not None:
                details["retry_after"] = retry_after
            raise RateLimitedAppError(
                code="rate_limited",
                title="Rate Limit Exceeded",
                message=message,
                details=details,
            )

        if not response.is_success:
            logger.warning(
                "backend.query.failed",
                extra={"category": category, "status_code": status, "duration_ms": duration_ms},
            )
            raise BackendAppError(
                code="backend_error",
                title="Server Error",
                message=f"Status {status}",
                details={"http_status": status, "category": category},
            )

        try:
            body = response.json()
        except ValueError as exc:
            logger.warning(
                "backend.query.invalid_body",
                extra={"category": category, "status_code": status},
            )
            raise BackendAppError(
                code="invalid_response",
                title="Server Error",
                message=f"Unreadable response (status {status})",
                details={"http_status": status, "category": category},
            ) from exc

        result = decode_envelope(body)
        logger.info(
            "backend.query.completed",
            extra={
                "category": category,
                "status_code": status,
                "result_kind": result.kind,
                "duration_ms": duration_ms,
            },
        )
        return result

    async def configure(self, request: ConfigurationRequest) -> None:
        try:
            response = await self._client.post(
                self.config_url,
                json=request.to_payload(),
                headers=correlation_headers(),
            )
        except httpx.RequestError as exc:
            logger.warning(
                "backend.configure.unreachable",
                extra={"target_url": request.url, "error_type": type(exc).__name__},
            )
            raise NetworkAppError(
                code="backend_unreachable",
                title="Network Error",
                message="Could not reach backend.",
                details={"url": self.config_url},
            ) from exc

        if not response.is_success:
            logger.warning(
                "backend.configure.failed",
                extra={"target_url": request.url, "status_code": response.status_code},
            )
            raise BackendAppError(
                code="configuration_failed",
                title="Configuration Failed",
                message=f"Status {response.status_code}",
                details={"http_status": response.status_code, "url": request.url},
            )

        logger.info(
            "backend.configure.completed",
            extra={"target_url": request.url, "algorithm": request.algorithm},
        )

    async def aclose(self) -> None:
        await self._client.aclose()
