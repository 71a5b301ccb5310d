"""Tests for per-browser console sessions."""

import pytest
from fastapi.testclient import TestClient

from ratelimit_console.core.app_factory import create_app
from ratelimit_console.core.config import settings
from ratelimit_console.services.sessions import ConsoleSessionStore

COOKIE = settings.app.session_cookie


class TestConsoleSessionStore:
    def test_same_id_returns_same_controller(self, fake_backend) -> None:
        store = ConsoleSessionStore(fake_backend)

        assert store.controller_for("a") is store.controller_for("a")

    def test_sessions_have_separate_state(self, fake_backend) -> None:
        store = ConsoleSessionStore(fake_backend)

        store.controller_for("a").select_category("movies")

        assert store.controller_for("b").state.active_category == "trivia"

    def test_least_recently_used_session_evicted(self, fake_backend) -> None:
        store = ConsoleSessionStore(fake_backend, max_sessions=2)

        store.controller_for("a")
        store.controller_for("b")
        store.controller_for("a")
        store.controller_for("c")

        assert len(store) == 2
        assert "a" in store
        assert "b" not in store
        assert "c" in store

    def test_invalid_max_sessions(self, fake_backend) -> None:
        with pytest.raises(ValueError):
            ConsoleSessionStore(fake_backend, max_sessions=0)


class TestSessionIsolation:
    @pytest.fixture
    def app(self, fake_backend):
        return create_app(backend=fake_backend)

    def test_first_console_visit_sets_cookie(self, app) -> None:
        client = TestClient(app)

        response = client.get("/")

        assert COOKIE in response.cookies

    def test_known_session_is_not_reissued(self, app) -> None:
        client = TestClient(app)
        client.get("/")

        response = client.get("/")

        assert COOKIE not in response.cookies

    def test_health_does_not_start_a_session(self, app) -> None:
        response = TestClient(app).get("/health")

        assert COOKIE not in response.cookies

    def test_visitors_do_not_see_each_other(self, app, fake_backend) -> None:
        alice = TestClient(app)
        bob = TestClient(app)
        alice.get("/")
        bob.get("/")

        fake_backend.respond_with("a very private answer")
        alice.post("/console/query", data={"prompt": "my private medical question"})

        bob_page = bob.get("/").text
        assert "my private medical question" not in bob_page
        assert "a very private answer" not in bob_page

        bob.get("/console/tabs/movies")

        alice_page = alice.get("/").text
        assert 'data-type="trivia" class="nav-item active"' in alice_page
        assert 'data-type="movies" class="nav-item active"' not in alice_page
        assert "a very private answer" in alice_page
        assert 'value="my private medical question"' in alice_page

    def test_unknown_cookie_starts_fresh_session(self, app, fake_backend) -> None:
        client = TestClient(app)
        client.cookies.set(COOKIE, "forged-or-evicted")

        response = client.get("/")

        assert response.cookies.get(COOKIE) not in (None, "forged-or-evicted")
