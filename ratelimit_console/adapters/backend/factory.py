"""Factory for the backend client used by the application."""

from ratelimit_console.adapters.backend.base import AbstractBackendClient
from ratelimit_console.adapters.backend.http_client import HttpxBackendClient
from ratelimit_console.core.config import settings
from ratelimit_console.core.errors import ValidationAppError


def create_backend_client() -> AbstractBackendClient:
    """Instantiate the backend client from ``settings.backend``.

    Raises:
        ValidationAppError: If the configured base URL is not an http(s) URL.
    """
    base_url = settings.backend.base_url.strip()
    if not base_url.startswith(("http://", "https://")):
        raise ValidationAppError(
            code="backend_invalid_base_url",
            message=f"BACKEND_BASE_URL must be an http(s) URL, got '{base_url}'",
        )

    return HttpxBackendClient(
        base_url,
        config_path=settings.backend.config_path,
        timeout_seconds=settings.backend.timeout_seconds,
    )
