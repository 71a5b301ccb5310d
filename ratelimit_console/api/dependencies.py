"""Request-scoped access to the objects created by the app factory."""

from __future__ import annotations

from fastapi import Request

from ratelimit_console.adapters.backend.base import AbstractBackendClient
from ratelimit_console.core.config import settings
from ratelimit_console.services.console import ConsoleController
from ratelimit_console.services.sessions import new_session_id


def get_controller(request: Request) -> ConsoleController:
    """Return the controller of the caller's browser session.

    A request without a known session cookie starts a new session; the id
    is left on ``request.state`` for ``console_session_middleware`` to set
    as a cookie on the response.
    """
    store = request.app.state.sessions
    session_id = request.cookies.get(settings.app.session_cookie)
    if not session_id or session_id not in store:
        session_id = new_session_id()
        request.state.new_console_session = session_id
    return store.controller_for(session_id)


def get_backend(request: Request) -> AbstractBackendClient:
    return request.app.state.backend
