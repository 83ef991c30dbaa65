"""
Tests for the session control API.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient

from conftest import FakeProvider
from models.config import Config
from runtime.context import RuntimeContext, build_runtime
from web.app import create_app


def _runtime(valid_config, load_scene=True):
    valid_config["providers"]["enabled"] = ["webxr"]
    return asyncio.run(build_runtime(Config.from_dict(valid_config), load_scene=load_scene))


@pytest.fixture
def ctx(valid_config):
    return _runtime(valid_config)


@pytest.fixture
def client(ctx):
    return TestClient(create_app(ctx))


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_uninitialized_runtime(self):
        client = TestClient(create_app())
        assert client.get("/api/session").status_code == 503


class TestSessionStatus:
    def test_ready_session(self, client):
        data = client.get("/api/session").json()

        assert data["readiness"] == "ready"
        assert data["scene_loaded"] is True
        assert data["session_ready"] is True
        assert data["current_provider"] is None
        assert data["providers"] == [
            {"name": "webxr", "loaded": True, "session_active": False, "supported_types": ["slam"]}
        ]
        assert data["load_failures"] == []

    def test_failed_provider_reported(self, ctx, client):
        failing = FakeProvider(ctx.engine, name="broken", load_error=RuntimeError("boom"))
        asyncio.run(ctx.session.register_provider(failing))

        data = client.get("/api/session").json()

        # Ready already fired before the failing registration
        assert data["readiness"] == "ready"
        assert data["load_failures"] == ["broken"]


class TestStartStop:
    def test_start_and_stop(self, client):
        response = client.post("/api/session/start", json={"provider": "webxr"})
        assert response.status_code == 200
        assert response.json()["current_provider"] == "webxr"

        status = client.get("/api/session").json()
        assert status["current_provider"] == "webxr"

        response = client.post("/api/session/stop")
        assert response.status_code == 200
        assert client.get("/api/session").json()["current_provider"] is None

    def test_stop_without_session(self, client):
        response = client.post("/api/session/stop")

        assert response.status_code == 200
        assert response.json()["message"] == "No tracking session is active"

    def test_start_unknown_provider(self, client):
        response = client.post("/api/session/start", json={"provider": "zappar"})
        assert response.status_code == 404

    def test_start_before_ready(self, valid_config):
        ctx = _runtime(valid_config, load_scene=False)
        client = TestClient(create_app(ctx))

        response = client.post("/api/session/start", json={"provider": "webxr"})

        assert response.status_code == 409
        assert "pending" in response.json()["detail"]

    def test_start_with_unsupported_required_feature(self, client):
        response = client.post(
            "/api/session/start",
            json={"provider": "webxr", "required_features": ["local", "depth-sensing"]},
        )

        assert response.status_code == 422
        assert "depth-sensing" in response.json()["detail"]

    def test_runtime_status(self, ctx):
        assert isinstance(ctx, RuntimeContext)
        assert ctx.get_status()["engine"] == "main"
        assert [p.name for p in ctx.providers] == ["webxr"]
