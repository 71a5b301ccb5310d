"""Server-rendered console.

Plain form posts get the full page back; HTMX requests (``HX-Request``
header) get only the ``#console`` fragment, which they swap in place.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ratelimit_console.api.dependencies import get_controller
from ratelimit_console.catalog import CONFIGURE_TAB, ENDPOINTS
from ratelimit_console.core.config import settings
from ratelimit_console.core.errors import ValidationAppError
from ratelimit_console.schemas.configuration import ConfigurationForm
from ratelimit_console.services.console import ConsoleController

TEMPLATES_DIR = Path(__file__).resolve().parents[2] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["Console"])

Controller = Annotated[ConsoleController, Depends(get_controller)]


def _render(request: Request, controller: ConsoleController) -> HTMLResponse:
    template = "partials/console.html" if request.headers.get("HX-Request") else "index.html"
    return templates.TemplateResponse(
        request,
        template,
        {
            "app_title": settings.app.title,
            "state": controller.state,
            "endpoints": ENDPOINTS,
            "configure_tab": CONFIGURE_TAB,
            "algorithms": settings.app.algorithm_choices,
        },
    )


@router.get("/", response_class=HTMLResponse)
async def console_page(request: Request, controller: Controller) -> HTMLResponse:
    return _render(request, controller)


@router.get("/console/tabs/{tab}", response_class=HTMLResponse)
async def select_tab(request: Request, tab: str, controller: Controller) -> HTMLResponse:
    """Switch to a category tab or to the configuration view."""
    try:
        controller.select_category(tab)
    except ValidationAppError as exc:
        raise HTTPException(status_code=404, detail=exc.message)
    return _render(request, controller)


@router.post("/console/query", response_class=HTMLResponse)
async def run_query(
    request: Request,
    controller: Controller,
    prompt: Annotated[str, Form()] = "",
) -> HTMLResponse:
    await controller.run_query(prompt)
    return _render(request, controller)


@router.post("/console/configure", response_class=HTMLResponse)
async def configure(
    request: Request,
    controller: Controller,
    api: Annotated[str, Form()] = "",
    algorithm: Annotated[str, Form()] = "",
    limit: Annotated[str | None, Form()] = None,
    window_size: Annotated[str | None, Form(alias="windowSize")] = None,
    capacity: Annotated[str | None, Form()] = None,
    refill_rate: Annotated[str | None, Form(alias="refillRate")] = None,
    refill_interval: Annotated[str | None, Form(alias="refillInterval")] = None,
) -> HTMLResponse:
    """Submit the rate-limit configuration form."""
    if not controller.state.is_configure_view:
        controller.select_category(CONFIGURE_TAB)

    form = ConfigurationForm(
        api=api,
        algorithm=algorithm,
        limit=limit,
        window_size=window_size,
        capacity=capacity,
        refill_rate=refill_rate,
        refill_interval=refill_interval,
    )
    await controller.submit_configuration(form)
    return _render(request, controller)
