"""Tests for the server-rendered console routes."""

import pytest
from fastapi.testclient import TestClient

from ratelimit_console.core.app_factory import create_app
from ratelimit_console.core.errors import BackendAppError, RateLimitedAppError

HTMX = {"HX-Request": "true"}


@pytest.fixture
def client(fake_backend) -> TestClient:
    return TestClient(create_app(backend=fake_backend))


def test_index_renders_default_category(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "Trivia Generator" in response.text
    assert 'placeholder="Enter a topic..."' in response.text
    assert "<!DOCTYPE html>" in response.text


def test_tab_switch_updates_header_and_active_nav(client: TestClient) -> None:
    response = client.get("/console/tabs/travel", headers=HTMX)

    assert response.status_code == 200
    assert "<!DOCTYPE html>" not in response.text
    assert "Plan your next adventure." in response.text
    assert 'placeholder="Enter a destination..."' in response.text
    assert 'data-type="travel" class="nav-item active"' in response.text


def test_unknown_tab_is_404(client: TestClient) -> None:
    assert client.get("/console/tabs/weather").status_code == 404


def test_configure_tab_shows_form(client: TestClient) -> None:
    response = client.get("/console/tabs/configure")

    assert 'id="configure-view"' in response.text
    assert 'name="windowSize"' in response.text
    assert "token-bucket" in response.text


def test_query_renders_cards(client: TestClient, fake_backend) -> None:
    fake_backend.respond_with([{"name": "Paris", "country": "France"}])

    response = client.post("/console/query", data={"prompt": "Paris"}, headers=HTMX)

    assert response.status_code == 200
    assert "<h3>Paris</h3>" in response.text
    assert '<span class="data-key">Country:</span> France' in response.text
    assert fake_backend.queries == [("trivia", "Paris")]


def test_query_escapes_backend_values(client: TestClient, fake_backend) -> None:
    fake_backend.respond_with("<script>alert(1)</script>")

    response = client.post("/console/query", data={"prompt": "x"})

    assert "<script>alert(1)</script>" not in response.text
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in response.text


def test_empty_prompt_shows_banner(client: TestClient, fake_backend) -> None:
    response = client.post("/console/query", data={"prompt": "   "})

    assert "Empty Input" in response.text
    assert "Please enter something first." in response.text
    assert fake_backend.queries == []


def test_rate_limit_banner(client: TestClient, fake_backend) -> None:
    fake_backend.fail_with(
        RateLimitedAppError(
            code="rate_limited",
            title="Rate Limit Exceeded",
            message="Please wait and try again.",
        )
    )

    response = client.post("/console/query", data={"prompt": "cats"})

    assert response.status_code == 200
    assert "Rate Limit Exceeded" in response.text
    assert 'class="card"' not in response.text


def test_configure_submission(client: TestClient, fake_backend) -> None:
    response = client.post(
        "/console/configure",
        data={
            "api": "sports",
            "algorithm": "token-bucket",
            "capacity": "20",
            "refillRate": "5",
            "refillInterval": "",
        },
        headers=HTMX,
    )

    assert "Rate limiting configured successfully" in response.text
    sent = fake_backend.configurations[0]
    assert sent.url == "http://backend.test/api/sports"
    assert sent.capacity == 20
    assert sent.refill_rate == 5
    assert sent.refill_interval == 0


def test_configure_failure_banner(client: TestClient, fake_backend) -> None:
    fake_backend.configure_error = BackendAppError(
        code="configuration_failed", title="Configuration Failed", message="Status 500"
    )

    response = client.post(
        "/console/configure", data={"api": "trivia", "algorithm": "fixed-window"}
    )

    assert "Configuration Failed" in response.text
    assert "Status 500" in response.text


def test_static_stylesheet_served(client: TestClient) -> None:
    response = client.get("/static/console.css")

    assert response.status_code == 200
    assert ".card" in response.text


def test_server_side_loading_state_stays_visible_under_htmx(client: TestClient) -> None:
    css = client.get("/static/console.css").text

    rule = next(line for line in css.splitlines() if line.startswith(".loading.active"))
    assert "display: block" in rule
    assert "opacity: 1" in rule
