"""Tests for sensitive data filtering and correlation in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

from ratelimit_console.core.logging import (
    JsonFormatter,
    SensitiveDataFilter,
    clear_request_id,
    correlation_headers,
    set_request_id,
)


def _capture(name: str) -> tuple[logging.Logger, StringIO]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger, stream


def test_sensitive_filter_redacts_prompts():
    """User prompts never reach the log sink."""

    logger, stream = _capture("test_prompt_redaction")
    logger.info(
        "query_event",
        extra={"prompt": "my secret vacation plans", "category": "travel"},
    )

    output = stream.getvalue()

    assert "secret vacation" not in output
    assert "[REDACTED]" in output
    assert "travel" in output


def test_sensitive_filter_allows_safe_fields():
    logger, stream = _capture("test_safe_fields")
    logger.info(
        "safe_event",
        extra={
            "request_id": "req-123",
            "category": "movies",
            "status_code": 200,
            "duration_ms": 150.5,
        },
    )

    output = stream.getvalue()

    assert "req-123" in output
    assert "movies" in output
    assert "200" in output
    assert "[REDACTED]" not in output


def test_sensitive_filter_redacts_nested_dicts():
    logger, stream = _capture("test_nested")
    logger.info(
        "nested_event",
        extra={
            "headers": {"authorization": "Bearer abc", "user-agent": "pytest"},
        },
    )

    output = stream.getvalue()

    assert "Bearer abc" not in output
    assert "[REDACTED]" in output
    assert "pytest" in output


def test_json_formatter_emits_one_object_per_line():
    logger, stream = _capture("test_json_shape")
    logger.warning("backend.query.failed", extra={"status_code": 502})

    record = json.loads(stream.getvalue().strip())

    assert record["message"] == "backend.query.failed"
    assert record["level"] == "warning"
    assert record["status_code"] == 502


def test_correlation_headers_follow_request_id():
    set_request_id("req-abc")
    try:
        assert correlation_headers() == {"X-Request-ID": "req-abc"}
    finally:
        clear_request_id()

    assert correlation_headers() == {}
