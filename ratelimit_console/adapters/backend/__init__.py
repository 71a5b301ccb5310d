"""Backend adapter layer - the only code that talks to the rate-limited API."""

from ratelimit_console.adapters.backend.base import AbstractBackendClient
from ratelimit_console.adapters.backend.factory import create_backend_client
from ratelimit_console.adapters.backend.http_client import HttpxBackendClient

__all__ = [
    "AbstractBackendClient",
    "HttpxBackendClient",
    "create_backend_client",
]
