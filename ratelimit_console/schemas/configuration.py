"""Pydantic schemas for rate-limit configuration requests."""

from __future__ import annotations

import math
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

Number = int | float


def parse_number(raw: str | None) -> Number:
    """Parse a numeric form field, defaulting to 0.

    Blank, unparseable, NaN and infinite values all become ``0``. Integral
    values are returned as ``int`` so they serialize as JSON integers.
    """
    if raw is None:
        return 0
    try:
        value = float(str(raw).strip())
    except ValueError:
        return 0
    if not math.isfinite(value):
        return 0
    if value.is_integer():
        return int(value)
    return value


@dataclass(frozen=True)
class ConfigurationForm:
    """Raw values as submitted by the configuration form."""

    api: str
    algorithm: str
    limit: str | None = None
    window_size: str | None = None
    capacity: str | None = None
    refill_rate: str | None = None
    refill_interval: str | None = None


class ConfigurationRequest(BaseModel):
    """Body of ``POST {base}/urls``.

    Field names are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(..., min_length=1, description="Full backend URL the rule applies to.")
    algorithm: str = Field(..., min_length=1, description="Rate-limiting algorithm name.")
    limit: Number = Field(0, description="Requests allowed per window.")
    window_size: Number = Field(0, alias="windowSize", description="Window length.")
    capacity: Number = Field(0, description="Bucket capacity.")
    refill_rate: Number = Field(0, alias="refillRate", description="Tokens added per refill.")
    refill_interval: Number = Field(
        0, alias="refillInterval", description="Time between refills."
    )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class ConfigureRuleBody(BaseModel):
    """JSON API body: target a category instead of a raw URL."""

    model_config = ConfigDict(populate_by_name=True)

    api: str = Field(..., description="Category id the rule applies to.")
    algorithm: str = Field(..., min_length=1)
    limit: Number = 0
    window_size: Number = Field(0, alias="windowSize")
    capacity: Number = 0
    refill_rate: Number = Field(0, alias="refillRate")
    refill_interval: Number = Field(0, alias="refillInterval")
