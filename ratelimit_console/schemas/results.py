"""Query result shapes returned by the rate-limited API.

The backend's ``data`` field can be plain text, a JSON-encoded string, a list
of strings or a list of records. It is classified once, here, into one of
three tagged variants; nothing downstream inspects the raw JSON again.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class TextResult(BaseModel):
    """Free text to show as a single block."""

    kind: Literal["text"] = "text"
    text: str


class RecordListResult(BaseModel):
    """Non-empty list of key/value records, one card each."""

    kind: Literal["records"] = "records"
    records: list[dict[str, Any]] = Field(..., min_length=1)


class EmptyResult(BaseModel):
    """Nothing to show; rendered as the "no results" placeholder."""

    kind: Literal["empty"] = "empty"


QueryResult = Annotated[
    Union[TextResult, RecordListResult, EmptyResult],
    Field(discriminator="kind"),
]


def _from_sequence(items: list[Any]) -> TextResult | RecordListResult | EmptyResult:
    if not items:
        return EmptyResult()
    # Some backend prompts answer with a list of sentences; only the first is shown.
    if isinstance(items[0], str):
        return TextResult(text=items[0])
    records = [item if isinstance(item, dict) else {"value": item} for item in items]
    return RecordListResult(records=records)


def _from_string(raw: str) -> TextResult | RecordListResult | EmptyResult:
    if not raw:
        return EmptyResult()
    try:
        decoded = json.loads(raw)
    except ValueError:
        return TextResult(text=raw)

    if isinstance(decoded, str):
        return TextResult(text=decoded) if decoded else EmptyResult()
    if isinstance(decoded, list):
        return _from_sequence(decoded)
    if isinstance(decoded, dict):
        return RecordListResult(records=[decoded])
    # "42", "true", "null": a number-like answer is still text to the user
    return TextResult(text=raw)


def decode_payload(data: Any) -> TextResult | RecordListResult | EmptyResult:
    """Classify the ``data`` field of a successful response.

    Args:
        data: Decoded ``data`` value from the JSON envelope.

    Returns:
        The matching result variant. Strings get a second JSON decode and
        fall back to opaque text when that fails; a bare record is treated
        as a one-element list.
    """
    if data is None:
        return EmptyResult()
    if isinstance(data, str):
        return _from_string(data)
    if isinstance(data, list):
        return _from_sequence(data)
    if isinstance(data, dict):
        return RecordListResult(records=[data])
    if not data:
        return EmptyResult()
    return TextResult(text=json.dumps(data))


def decode_envelope(body: Any) -> TextResult | RecordListResult | EmptyResult:
    """Extract and classify ``data`` from a response body.

    A body that is not a JSON object has no ``data`` field and yields
    ``EmptyResult``.
    """
    if not isinstance(body, dict):
        return EmptyResult()
    return decode_payload(body.get("data"))
