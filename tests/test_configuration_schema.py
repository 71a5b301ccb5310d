"""Tests for configuration request parsing and serialization."""

import pytest

from ratelimit_console.schemas.configuration import ConfigurationRequest, parse_number


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, 0),
        ("", 0),
        ("   ", 0),
        ("abc", 0),
        ("nan", 0),
        ("inf", 0),
        ("10", 10),
        (" 10 ", 10),
        ("2.5", 2.5),
        ("3.0", 3),
    ],
)
def test_parse_number(raw, expected) -> None:
    value = parse_number(raw)

    assert value == expected
    assert type(value) is type(expected)


def test_payload_uses_wire_names() -> None:
    request = ConfigurationRequest(
        url="http://backend.test/api/trivia",
        algorithm="token-bucket",
        capacity=20,
        refill_rate=5,
        refill_interval=1,
    )

    assert request.to_payload() == {
        "url": "http://backend.test/api/trivia",
        "algorithm": "token-bucket",
        "limit": 0,
        "windowSize": 0,
        "capacity": 20,
        "refillRate": 5,
        "refillInterval": 1,
    }
