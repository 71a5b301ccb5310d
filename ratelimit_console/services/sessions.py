"""Per-browser console controllers with LRU eviction.

Each browser session (identified by a cookie) gets its own
``ConsoleController`` and therefore its own ``UIState`` and request-id
bookkeeping. The least recently used session is evicted once the store
holds more than ``max_sessions`` controllers.
"""

from __future__ import annotations

import logging
import secrets
import threading
from collections import OrderedDict

from ratelimit_console.adapters.backend.base import AbstractBackendClient
from ratelimit_console.services.console import ConsoleController

logger = logging.getLogger(__name__)


def new_session_id() -> str:
    return secrets.token_urlsafe(24)


class ConsoleSessionStore:
    """Maps session ids to controllers sharing one backend client."""

    def __init__(self, backend: AbstractBackendClient, *, max_sessions: int = 1024) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be >= 1")
        self._backend = backend
        self._max_sessions = max_sessions
        self._controllers: OrderedDict[str, ConsoleController] = OrderedDict()
        self._lock = threading.RLock()
        self._evictions = 0

    def __len__(self) -> int:
        return len(self._controllers)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._controllers

    def controller_for(self, session_id: str) -> ConsoleController:
        """Return the session's controller, creating it on first use."""
        with self._lock:
            controller = self._controllers.get(session_id)
            if controller is not None:
                self._controllers.move_to_end(session_id)
                return controller

            controller = ConsoleController(self._backend)
            self._controllers[session_id] = controller
            self._evict_if_needed()
            return controller

    def _evict_if_needed(self) -> None:
        while len(self._controllers) > self._max_sessions:
            # popitem(last=False) removes the least recently used session
            self._controllers.popitem(last=False)
            self._evictions += 1
            logger.debug(
                "console.session_evicted",
                extra={"sessions": len(self._controllers), "evictions": self._evictions},
            )
