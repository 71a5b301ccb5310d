"""JSON access to the rate-limited API.

Same backend calls as the console, without the UI state: errors surface
through the global exception handlers as the standard error envelope.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from ratelimit_console.adapters.backend.base import AbstractBackendClient
from ratelimit_console.api.dependencies import get_backend
from ratelimit_console.catalog import ENDPOINTS, is_category
from ratelimit_console.core.errors import ValidationAppError
from ratelimit_console.schemas.configuration import ConfigurationRequest, ConfigureRuleBody
from ratelimit_console.schemas.results import QueryResult

router = APIRouter(tags=["Proxy"])

Backend = Annotated[AbstractBackendClient, Depends(get_backend)]


def _require_category(category: str) -> None:
    if not is_category(category):
        raise ValidationAppError(
            code="unknown_category",
            title="Unknown Category",
            message=f"'{category}' is not an available category.",
            details={"category": category},
        )


@router.get("/categories")
async def list_categories() -> dict:
    """Return the category table (path, title, description, placeholder)."""
    return {
        category: {
            "path": d.path,
            "title": d.title,
            "description": d.description,
            "placeholder": d.placeholder,
        }
        for category, d in ENDPOINTS.items()
    }


@router.get("/query/{category}", response_model=QueryResult)
async def query_category(
    category: str,
    backend: Backend,
    prompt: Annotated[str, Query()] = "",
) -> QueryResult:
    """Run ``prompt`` against a category and return the classified result.

    Raises:
        ValidationAppError: 400 for an unknown category or empty prompt.
        RateLimitedAppError: 429 when the backend throttles the call.
        BackendAppError: 502 for other backend failures.
        NetworkAppError: 503 when the backend is unreachable.
    """
    _require_category(category)
    text = prompt.strip()
    if not text:
        raise ValidationAppError(
            code="empty_prompt",
            title="Empty Input",
            message="Please enter something first.",
        )
    return await backend.query(category, text)


@router.post("/configure")
async def configure_rule(body: ConfigureRuleBody, backend: Backend) -> dict:
    """Forward a rate-limit rule for one category to the backend."""
    _require_category(body.api)
    request = ConfigurationRequest(
        url=backend.endpoint_url(body.api),
        algorithm=body.algorithm,
        limit=body.limit,
        window_size=body.window_size,
        capacity=body.capacity,
        refill_rate=body.refill_rate,
        refill_interval=body.refill_interval,
    )
    await backend.configure(request)
    return {"status": "configured", "rule": request.to_payload()}
