"""Static table of the backend endpoints the console can query."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, Mapping

CategoryId = Literal["trivia", "travel", "sports", "movies"]

# Tab id of the rate-limit configuration view; not a queryable category
CONFIGURE_TAB = "configure"


@dataclass(frozen=True)
class EndpointDescriptor:
    """Display metadata and backend path for one content category."""

    path: str
    title: str
    description: str
    placeholder: str


ENDPOINTS: Mapping[str, EndpointDescriptor] = MappingProxyType(
    {
        "trivia": EndpointDescriptor(
            path="/trivia",
            title="Trivia Generator",
            description="Discover fascinating facts about anything.",
            placeholder="Enter a topic...",
        ),
        "travel": EndpointDescriptor(
            path="/travel",
            title="Travel Guide",
            description="Plan your next adventure.",
            placeholder="Enter a destination...",
        ),
        "sports": EndpointDescriptor(
            path="/sports",
            title="Sports Center",
            description="Sports facts and history.",
            placeholder="Enter a sport...",
        ),
        "movies": EndpointDescriptor(
            path="/movies",
            title="Movie Suggestions",
            description="Find a movie to watch.",
            placeholder="Enter a genre or mood...",
        ),
    }
)

DEFAULT_CATEGORY: CategoryId = "trivia"

CONFIGURE_VIEW = EndpointDescriptor(
    path="",
    title="Configure Rate Limits",
    description="Choose the algorithm and limits the backend applies to an endpoint.",
    placeholder="",
)


def is_category(tab: str) -> bool:
    return tab in ENDPOINTS


def get_endpoint(category: str) -> EndpointDescriptor:
    """Look up a category's descriptor.

    Raises:
        KeyError: If ``category`` is not one of the known categories.
    """
    return ENDPOINTS[category]
