"""Tests for app-level wiring: health probes, request ids, error handlers."""

from fastapi.testclient import TestClient

from chronotrack.api.app import create_app
from chronotrack.ops.context import Services


class TestHealth:
    def test_live(self, client):
        resp = client.get("/health/live")
        assert resp.status_code == 200
        assert resp.json() == {"status": "alive"}

    def test_health(self, client):
        body = client.get("/health").json()
        assert body["status"] == "healthy"
        assert body["service"] == "chronotrack"


class TestRequestId:
    def test_generated(self, client):
        resp = client.get("/health/live")
        assert resp.headers["X-Request-ID"]

    def test_echoed(self, client):
        resp = client.get("/api/v1/jobs", headers={"X-Request-ID": "req-42"})
        assert resp.headers["X-Request-ID"] == "req-42"

    def test_on_error_responses(self, client):
        resp = client.get("/api/v1/jobs/999", headers={"X-Request-ID": "req-43"})
        assert resp.status_code == 404
        assert resp.headers["X-Request-ID"] == "req-43"


class TestInjectedServices:
    def test_uses_given_services(self, settings):
        services = Services.in_memory()
        services.jobs.create("preloaded")
        with TestClient(create_app(settings=settings, services=services)) as client:
            names = [j["name"] for j in client.get("/api/v1/jobs").json()["data"]]
        assert names == ["preloaded"]


class TestUnhandled:
    def test_internal_error_is_problem_detail(self, settings, monkeypatch):
        app = create_app(settings=settings)

        def explode(*args, **kwargs):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(app.state.services.jobs, "get_by_id", explode)
        with TestClient(app, raise_server_exceptions=False) as client:
            resp = client.get("/api/v1/jobs/1")
        assert resp.status_code == 500
        body = resp.json()
        assert body["errors"][0]["code"] == "INTERNAL"
        assert "kaboom" not in body["detail"]
