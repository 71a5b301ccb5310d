"""Console controller: tab selection, queries and rate-limit configuration.

The controller owns a single ``UIState`` and mutates it in response to user
actions and backend responses. Routes render whatever the state holds after
each call.

Overlapping calls are resolved by request id: every call takes the next id
from a monotonically increasing sequence, and a response is applied only if
its id is still the latest one issued for its tab and that tab is still
active. Older responses are logged and dropped.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass

from ratelimit_console.adapters.backend.base import AbstractBackendClient
from ratelimit_console.catalog import (
    CONFIGURE_TAB,
    CONFIGURE_VIEW,
    DEFAULT_CATEGORY,
    ENDPOINTS,
    EndpointDescriptor,
    is_category,
)
from ratelimit_console.core.errors import AppError, ValidationAppError
from ratelimit_console.presentation.views import (
    CONFIGURED_MESSAGE,
    ResultView,
    build_result_view,
    placeholder,
)
from ratelimit_console.schemas.configuration import (
    ConfigurationForm,
    ConfigurationRequest,
    parse_number,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorBanner:
    title: str
    message: str


@dataclass
class UIState:
    """Everything the console page shows besides static markup."""

    active_category: str = DEFAULT_CATEGORY
    prompt: str = ""
    is_loading: bool = False
    error: ErrorBanner | None = None
    results: ResultView | None = None

    @property
    def is_configure_view(self) -> bool:
        return self.active_category == CONFIGURE_TAB

    @property
    def descriptor(self) -> EndpointDescriptor:
        if self.is_configure_view:
            return CONFIGURE_VIEW
        return ENDPOINTS[self.active_category]


class ConsoleController:
    """Reacts to console actions and keeps ``state`` in sync."""

    def __init__(
        self,
        backend: AbstractBackendClient,
        state: UIState | None = None,
    ) -> None:
        self.backend = backend
        self.state = state or UIState()
        self._request_ids = itertools.count(1)
        self._latest_by_tab: dict[str, int] = {}
        self._in_flight = 0

    # Shared UI helpers

    def show_loading(self, show: bool) -> None:
        self.state.is_loading = show

    def show_error(self, title: str, message: str) -> None:
        self.state.error = ErrorBanner(title=title, message=message)

    def hide_error(self) -> None:
        self.state.error = None

    def clear_results(self) -> None:
        self.state.results = None

    # Request bookkeeping

    def _begin(self, tab: str) -> int:
        request_id = next(self._request_ids)
        self._latest_by_tab[tab] = request_id
        self._in_flight += 1
        self.show_loading(True)
        return request_id

    def _end(self) -> None:
        self._in_flight -= 1
        self.show_loading(self._in_flight > 0)

    def _is_current(self, tab: str, request_id: int) -> bool:
        return (
            self._latest_by_tab.get(tab) == request_id
            and self.state.active_category == tab
        )

    def _drop_stale(self, tab: str, request_id: int) -> None:
        logger.info(
            "console.stale_response",
            extra={
                "tab": tab,
                "stale_request_id": request_id,
                "latest_request_id": self._latest_by_tab.get(tab),
                "active_tab": self.state.active_category,
            },
        )

    # Actions

    def select_category(self, tab: str) -> UIState:
        """Switch the active tab and reset results, error and prompt.

        Raises:
            ValidationAppError: If ``tab`` is neither a category nor the
                configuration view.
        """
        if tab != CONFIGURE_TAB and not is_category(tab):
            raise ValidationAppError(
                code="unknown_category",
                title="Unknown Category",
                message=f"'{tab}' is not an available category.",
                details={"category": tab},
            )

        self.state.active_category = tab
        self.state.prompt = ""
        self.clear_results()
        self.hide_error()
        logger.debug("console.tab_selected", extra={"tab": tab})
        return self.state

    async def run_query(self, prompt: str) -> UIState:
        """Query the active category with ``prompt`` and render the outcome.

        Empty input is rejected without a network call. Loading is cleared
        once the call completes, whatever its outcome.
        """
        self.state.prompt = prompt
        text = prompt.strip()
        if not text:
            self.show_error("Empty Input", "Please enter something first.")
            return self.state

        category = self.state.active_category
        if not is_category(category):
            self.show_error("No Category", "Select a category before searching.")
            return self.state

        request_id = self._begin(category)
        self.hide_error()
        self.clear_results()

        try:
            result = await self.backend.query(category, text)
        except AppError as exc:
            if self._is_current(category, request_id):
                self.show_error(exc.title, exc.message)
            else:
                self._drop_stale(category, request_id)
        else:
            if self._is_current(category, request_id):
                self.state.results = build_result_view(result)
            else:
                self._drop_stale(category, request_id)
        finally:
            self._end()

        return self.state

    def build_configuration_request(self, form: ConfigurationForm) -> ConfigurationRequest:
        """Assemble the outbound rule from raw form values.

        Raises:
            ValidationAppError: If the target category or algorithm is missing.
        """
        if not is_category(form.api):
            raise ValidationAppError(
                code="unknown_category",
                title="Invalid Target",
                message=f"'{form.api}' is not an available category.",
                details={"category": form.api},
            )
        algorithm = form.algorithm.strip()
        if not algorithm:
            raise ValidationAppError(
                code="missing_algorithm",
                title="Invalid Configuration",
                message="Choose a rate-limiting algorithm.",
            )

        return ConfigurationRequest(
            url=self.backend.endpoint_url(form.api),
            algorithm=algorithm,
            limit=parse_number(form.limit),
            window_size=parse_number(form.window_size),
            capacity=parse_number(form.capacity),
            refill_rate=parse_number(form.refill_rate),
            refill_interval=parse_number(form.refill_interval),
        )

    async def submit_configuration(self, form: ConfigurationForm) -> UIState:
        """Send a rate-limit rule and show a confirmation or the failure."""
        try:
            request = self.build_configuration_request(form)
        except ValidationAppError as exc:
            self.show_error(exc.title, exc.message)
            return self.state

        request_id = self._begin(CONFIGURE_TAB)
        self.hide_error()
        self.clear_results()

        try:
            await self.backend.configure(request)
        except AppError as exc:
            if self._is_current(CONFIGURE_TAB, request_id):
                self.show_error(exc.title, exc.message)
            else:
                self._drop_stale(CONFIGURE_TAB, request_id)
        else:
            if self._is_current(CONFIGURE_TAB, request_id):
                self.state.results = placeholder(CONFIGURED_MESSAGE)
            else:
                self._drop_stale(CONFIGURE_TAB, request_id)
        finally:
            self._end()

        return self.state
