"""타임아웃 정책 및 설정 유틸 테스트."""

from station_map.core.config import Settings
from station_map.core.timeout_policy import build_timeout_policy, to_requests_timeout


def test_build_timeout_policy_caps_by_request_timeout() -> None:
    settings = Settings(
        REQUEST_TIMEOUT_SECONDS=20,
        EXTERNAL_API_TIMEOUT_SECONDS=50,
        GRAPH_API_TIMEOUT_SECONDS=30,
        ROUTE_TIMEOUT_SECONDS=45,
    )

    policy = build_timeout_policy(settings)

    assert policy.request_timeout_seconds == 20
    assert policy.external_api_timeout_seconds == 20
    assert policy.graph_api_timeout_seconds == 20
    assert policy.route_timeout_seconds == 20


def test_build_timeout_policy_normalizes_non_positive_values() -> None:
    settings = Settings(GRAPH_API_TIMEOUT_SECONDS=0, ROUTE_TIMEOUT_SECONDS=-5)

    policy = build_timeout_policy(settings)

    assert policy.graph_api_timeout_seconds == 1
    assert policy.route_timeout_seconds == 1


def test_to_requests_timeout_returns_connect_and_read_timeout() -> None:
    connect_timeout, read_timeout = to_requests_timeout(10)

    assert connect_timeout == 3.0
    assert read_timeout == 7.0


def test_settings_normalize_graph_urls() -> None:
    settings = Settings(GRAPH_API_BASE_URL="http://graph.test:5000/", GRAPH_ROUTE_PATH="api/route")

    assert settings.GRAPH_API_BASE_URL == "http://graph.test:5000"
    assert settings.GRAPH_ROUTE_PATH == "/api/route"
