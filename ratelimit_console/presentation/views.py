"""View models for the results area.

Templates only ever see these objects; values are plain strings and are
escaped by Jinja2 when rendered.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Literal

from ratelimit_console.schemas.results import EmptyResult, RecordListResult, TextResult

NO_RESULTS_MESSAGE = "No results found."
CONFIGURED_MESSAGE = "Rate limiting configured successfully"
DEFAULT_CARD_TITLE = "Result"

# Checked in order; the first non-empty one becomes the card heading
HEADING_KEYS: tuple[str, ...] = ("name", "title")

_WORD_START = re.compile(r"\b\w")


@dataclass(frozen=True)
class DataRow:
    label: str
    value: str


@dataclass(frozen=True)
class Card:
    title: str
    rows: tuple[DataRow, ...] = ()


@dataclass(frozen=True)
class ResultView:
    """What the results area shows.

    ``placeholder`` and ``text`` use ``message``; ``cards`` uses ``cards``.
    """

    kind: Literal["placeholder", "text", "cards"]
    message: str = ""
    cards: tuple[Card, ...] = field(default_factory=tuple)


def humanize_key(key: str) -> str:
    """``release_year`` -> ``Release Year``."""
    return _WORD_START.sub(lambda m: m.group(0).upper(), key.replace("_", " "))


def _format_scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def format_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(_format_scalar(item) for item in value)
    return _format_scalar(value)


def _heading_key(record: dict[str, Any]) -> str | None:
    for key in HEADING_KEYS:
        if format_value(record.get(key)):
            return key
    return None


def build_card(record: dict[str, Any]) -> Card:
    heading_key = _heading_key(record)
    title = format_value(record[heading_key]) if heading_key else DEFAULT_CARD_TITLE
    rows = tuple(
        DataRow(label=humanize_key(str(key)), value=format_value(value))
        for key, value in record.items()
        if key != heading_key
    )
    return Card(title=title, rows=rows)


def build_result_view(result: TextResult | RecordListResult | EmptyResult) -> ResultView:
    """Turn a classified query result into what the results area shows."""
    if isinstance(result, TextResult):
        return ResultView(kind="text", message=result.text)
    if isinstance(result, RecordListResult):
        return ResultView(kind="cards", cards=tuple(build_card(r) for r in result.records))
    return placeholder(NO_RESULTS_MESSAGE)


def placeholder(message: str) -> ResultView:
    return ResultView(kind="placeholder", message=message)
