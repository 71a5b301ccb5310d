from __future__ import annotations

from ratelimit_console.api.routes.console import router as console_router
from ratelimit_console.api.routes.health import router as health_router
from ratelimit_console.api.routes.proxy import router as proxy_router

__all__ = ["console_router", "health_router", "proxy_router"]
