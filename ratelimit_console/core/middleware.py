"""HTTP middleware for request ID propagation and correlation.

Usage:
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import time
import uuid

from fastapi import Request, Response

from ratelimit_console.core.config import settings
from ratelimit_console.core.logging import clear_request_id, set_request_id


async def request_id_middleware(request: Request, call_next) -> Response:
    """Attach a correlation id to the request, its logs and its response.

    The incoming header (``LOG_REQUEST_ID_HEADER``, default ``X-Request-ID``)
    is reused when present, otherwise a UUID is generated. The id is visible
    to every log line and to the backend adapter for the lifetime of the
    request, then cleared.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response with the request id and ``X-Request-Duration-ms`` headers.
    """

    header_name = settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
    finally:
        clear_request_id()

    duration_ms = (time.perf_counter() - start) * 1000
    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response


async def console_session_middleware(request: Request, call_next) -> Response:
    """Set the console session cookie when a request started a new session.

    The id is chosen by ``get_controller`` and handed over through
    ``request.state``; requests that never touch the console get no cookie.
    """

    response: Response = await call_next(request)

    session_id = getattr(request.state, "new_console_session", None)
    if session_id:
        response.set_cookie(
            settings.app.session_cookie,
            session_id,
            httponly=True,
            samesite="lax",
        )
    return response
