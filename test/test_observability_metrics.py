import importlib

from fastapi.testclient import TestClient

from api.backend import BackendAPI
from api.config import Settings
from api.dependencies import get_backend, get_settings
from llm.llm_client import LLMClient
from llm.providers.mock_provider import MockProvider


def _import_app():
    return importlib.import_module("api.main")


def test_metrics_endpoint_exposes_prometheus_text() -> None:
    mod = _import_app()
    client = TestClient(mod.app)

    r = client.get("/metrics")
    assert r.status_code == 200
    assert "text/plain" in r.headers.get("content-type", "")
    body = r.text
    assert "todo_requests_total" in body
    assert "todo_request_latency_seconds" in body
    assert "todo_llm_calls_total" in body


def test_prioritize_increments_request_counter() -> None:
    mod = _import_app()
    settings = Settings(llm_provider="mock")
    mod.app.dependency_overrides[get_backend] = lambda: BackendAPI(
        settings=settings, llm_client=LLMClient(provider=MockProvider())
    )
    try:
        client = TestClient(mod.app)
        r = client.post("/api/prioritize", json={"todos": [{"text": "Buy milk"}]})
        assert r.status_code == 200

        body = client.get("/metrics").text
    finally:
        mod.app.dependency_overrides.clear()

    found = any(
        line.startswith('todo_requests_total{endpoint="/api/prioritize",status="200"}')
        for line in body.splitlines()
    )
    assert found, "Expected todo_requests_total sample line for /api/prioritize"
    assert any(line.startswith('todo_llm_calls_total{outcome="ok"}') for line in body.splitlines())


def test_health_reports_credential_state() -> None:
    mod = _import_app()
    client = TestClient(mod.app)

    mod.app.dependency_overrides[get_settings] = lambda: Settings(gemini_api_key="")
    try:
        not_ready = client.get("/health").json()
        mod.app.dependency_overrides[get_settings] = lambda: Settings(gemini_api_key="k")
        ready = client.get("/health").json()
    finally:
        mod.app.dependency_overrides.clear()

    assert not_ready["credential"] == "not_ready"
    assert not_ready["status"] == "degraded"
    assert ready["credential"] == "ready"
    assert ready["status"] == "healthy"
    assert ready["persistence"] == "disabled"
