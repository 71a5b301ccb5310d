from __future__ import annotations

"""Application factory for the FastAPI app.

Centralizes app construction (backend client, controller, middleware,
handlers, routers, static files) so tests can inject a fake backend.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from ratelimit_console.adapters.backend import AbstractBackendClient, create_backend_client
from ratelimit_console.api.routes import console_router, health_router, proxy_router
from ratelimit_console.core.config import settings
from ratelimit_console.core.exception_handlers import setup_exception_handlers
from ratelimit_console.core.logging import configure_logging
from ratelimit_console.core.middleware import console_session_middleware, request_id_middleware
from ratelimit_console.services.sessions import ConsoleSessionStore

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parents[1] / "static"

OPENAPI_TAGS = [
    {"name": "Console", "description": "Server-rendered console pages."},
    {"name": "Proxy", "description": "JSON access to the rate-limited API."},
    {"name": "Health", "description": "Liveness check."},
]


@asynccontextmanager
async def _lifespan(app: FastAPI):
    logger.info(
        "app.startup",
        extra={"backend_base_url": settings.backend.base_url, "app_env": settings.app_env},
    )
    yield
    await app.state.backend.aclose()
    logger.info("app.shutdown")


def create_app(backend: AbstractBackendClient | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        backend: Backend client to use; built from settings when omitted.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and the
        per-session console controllers attached to ``app.state``.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title=settings.app.title,
        description=(
            "Web console for a rate-limited demo API: query trivia, travel, "
            "sports and movie endpoints and configure the rate-limiting rule "
            "the backend applies to each."
        ),
        version="0.1.0",
        debug=settings.app.debug,
        openapi_tags=OPENAPI_TAGS,
        lifespan=_lifespan,
    )

    app.state.backend = backend or create_backend_client()
    app.state.sessions = ConsoleSessionStore(
        app.state.backend, max_sessions=settings.app.max_sessions
    )

    app.middleware("http")(console_session_middleware)
    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(console_router)
    app.include_router(proxy_router, prefix="/v1")
    app.include_router(health_router)

    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    return app
