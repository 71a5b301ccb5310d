from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from ratelimit_console.core.app_factory import create_app


@pytest.fixture
def client(fake_backend) -> TestClient:
    return TestClient(create_app(backend=fake_backend))


def test_preserves_incoming_request_id_header(client: TestClient):
    incoming_id = "test-request-id-123"
    resp = client.get("/health", headers={"X-Request-ID": incoming_id})

    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == incoming_id


def test_generates_request_id_when_missing(client: TestClient):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID")
    assert resp.headers.get("X-Request-Duration-ms") is not None
