"""애플리케이션 진입점 및 지도 API 동작 테스트."""

from __future__ import annotations

import importlib

import pytest
from fastapi.testclient import TestClient

from station_map.api.dependencies import get_route_orchestrator
from station_map.core.config import get_settings
from station_map.schemas.route import RouteResponse
from station_map.services.graph_service import GraphServiceUnavailableError
from station_map.services.route_orchestrator import RouteOrchestrator, begin_loading
from tests.mocks.mock_graph_service import MockGraphService


def _set_required_env(monkeypatch, **overrides: str) -> None:
    monkeypatch.setenv("DOCS_MODE", "disabled")
    monkeypatch.setenv("LOAD_GRAPH_ON_STARTUP", "false")
    monkeypatch.setenv("SERVICE_SECRET", "test-service-secret")
    for key, value in overrides.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()


def _load_main_module():
    import station_map.main as main_module

    return importlib.reload(main_module)


@pytest.fixture
def service() -> MockGraphService:
    return MockGraphService(
        stations=["Grifo Central", "Grifo Norte", "Estación Sur"],
        edges=[
            ("Grifo Central", "Grifo Norte", 1.5),
            ("Grifo Norte", "Grifo Central", 1.5),
            ("Grifo Norte", "Estación Sur", 2.0),
        ],
        routes={
            ("Grifo Central", "Estación Sur"): RouteResponse(
                path=["Grifo Central", "Grifo Norte", "Estación Sur"],
                cost=3.5,
            )
        },
    )


@pytest.fixture
def orchestrator(service: MockGraphService) -> RouteOrchestrator:
    return RouteOrchestrator(service)


@pytest.fixture
def client(monkeypatch, orchestrator: RouteOrchestrator):
    _set_required_env(monkeypatch)
    main_module = _load_main_module()
    main_module.app.dependency_overrides[get_route_orchestrator] = lambda: orchestrator
    yield TestClient(main_module.app)
    main_module.app.dependency_overrides.clear()


def test_health_check_endpoint(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "message": "Station Route Map is running"}


def test_security_headers_are_attached(client: TestClient) -> None:
    response = client.get("/")

    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
    assert response.headers["referrer-policy"] == "no-referrer"


def test_docs_disabled_by_default(client: TestClient) -> None:
    assert client.get("/docs").status_code == 404
    assert client.get("/openapi.json").status_code == 404


def test_docs_secret_mode_requires_service_secret(monkeypatch) -> None:
    _set_required_env(monkeypatch, DOCS_MODE="secret")
    main_module = _load_main_module()

    client = TestClient(main_module.app)

    assert client.get("/docs").status_code == 401
    assert client.get("/docs", headers={"x-service-secret": "test-service-secret"}).status_code == 200


def test_reload_then_read_map_state(client: TestClient) -> None:
    reloaded = client.post("/api/v1/map/reload")
    state = client.get("/api/v1/map").json()

    assert reloaded.status_code == 200
    assert [station["name"] for station in state["stations"]] == ["Grifo Central", "Grifo Norte", "Estación Sur"]
    assert [(edge["from"], edge["to"]) for edge in state["edges"]] == [
        ("Grifo Central", "Grifo Norte"),
        ("Grifo Norte", "Estación Sur"),
    ]
    assert state["busy"] is False
    assert [(segment["source"], segment["target"]) for segment in state["segments"]] == [
        ("Grifo Central", "Grifo Norte"),
        ("Grifo Norte", "Estación Sur"),
    ]
    assert state["center"]["lat"] == state["stations"][0]["lat"]


def test_calculate_route_returns_stops(client: TestClient) -> None:
    client.post("/api/v1/map/reload")

    response = client.post("/api/v1/route", json={"start": "Grifo Central", "end": "Estación Sur"})

    body = response.json()
    assert response.status_code == 200
    assert [stop["name"] for stop in body["route"]] == ["Grifo Central", "Grifo Norte", "Estación Sur"]
    assert [stop["badge"] for stop in body["route"]] == ["S", "1", "F"]
    assert body["route_cost"] == 3.5
    assert body["notice"] is None


def test_calculate_route_rejects_same_station(client: TestClient, service: MockGraphService) -> None:
    response = client.post("/api/v1/route", json={"start": "Grifo Norte", "end": "Grifo Norte"})

    assert response.status_code == 400
    assert service.method_calls("compute_route") == []


def test_calculate_route_reports_notice_on_missing_endpoint(client: TestClient, service: MockGraphService) -> None:
    service.errors["compute_route"] = GraphServiceUnavailableError("nf", status_code=404)

    response = client.post("/api/v1/route", json={"start": "Grifo Central", "end": "Estación Sur"})

    body = response.json()
    assert response.status_code == 200
    assert body["notice"]["kind"] == "service_unavailable"
    assert body["busy"] is False
    assert body["route"] == []


def test_busy_orchestrator_rejects_new_operations(client: TestClient, orchestrator: RouteOrchestrator) -> None:
    orchestrator._state = begin_loading(orchestrator.state)

    assert client.post("/api/v1/map/reload").status_code == 409
    assert client.post("/api/v1/route", json={"start": "A", "end": "B"}).status_code == 409


def test_full_graph_toggle_hides_edges(client: TestClient) -> None:
    client.post("/api/v1/map/reload")

    hidden = client.put("/api/v1/map/full-graph", json={"enabled": False}).json()
    shown = client.put("/api/v1/map/full-graph", json={"enabled": True}).json()

    assert hidden["show_full_graph"] is False
    assert hidden["edges"] == []
    assert hidden["segments"] == []
    assert len(shown["edges"]) == 2


def test_search_stations_endpoint(client: TestClient) -> None:
    client.post("/api/v1/map/reload")

    response = client.get("/api/v1/stations", params={"query": "grifo", "exclude": "Grifo Central"})

    assert response.status_code == 200
    assert [station["name"] for station in response.json()["stations"]] == ["Grifo Norte"]
