"""Application-level exception types.

Every error the console can surface carries a banner (title and message)
for the HTML view alongside the machine-readable code used by the JSON API.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    http_status: int
    retry_after: int
    category: str
    url: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable message, shown under the banner title.
        title: Short banner heading.
        details: Optional structured details for debugging/observability.
    """

    code: str
    message: str
    title: str = "Error"
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Raised when user input is rejected before any network call."""


class RateLimitedAppError(AppError):
    """Raised when the backend answers 429 Too Many Requests."""


class BackendAppError(AppError):
    """Raised when the backend answers with any other non-success status."""


class NetworkAppError(AppError):
    """Raised when the backend cannot be reached at all."""
