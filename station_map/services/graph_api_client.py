"""외부 그래프/경로 계산 서비스 HTTP 클라이언트."""

from __future__ import annotations

import asyncio
from functools import lru_cache
from typing import Any

import requests
from pydantic import ValidationError

from station_map.core.config import get_settings
from station_map.core.logger import get_logger
from station_map.core.timeout_policy import get_timeout_policy, to_requests_timeout
from station_map.schemas.graph import EdgeListResponse, GraphEdge, StationListResponse
from station_map.schemas.route import RouteRequest, RouteResponse
from station_map.services.graph_service import (
    GraphServiceConnectionError,
    GraphServiceProtocol,
    GraphServiceResponseError,
    GraphServiceStatusError,
    GraphServiceUnavailableError,
)

logger = get_logger(__name__)


def _extract_error_message(response: requests.Response) -> str | None:
    """오류 응답 본문의 `message` 필드를 꺼냅니다."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


class GraphApiClient(GraphServiceProtocol):
    """`requests` 기반 그래프 서비스 클라이언트.

    블로킹 호출은 `asyncio.to_thread`로 실행하므로 이벤트 루프는
    응답을 기다리는 동안에만 양보합니다.
    """

    def __init__(
        self,
        base_url: str,
        *,
        stations_path: str = "/api/stations",
        edges_path: str = "/api/edges",
        route_path: str = "/api/route/dijkstra",
        statistics_path: str = "/api/statistics",
        timeout_seconds: int = 10,
        route_timeout_seconds: int = 30,
    ) -> None:
        if not base_url:
            raise ValueError("GRAPH_API_BASE_URL is not configured.")
        self._base_url = base_url.rstrip("/")
        self._stations_path = stations_path
        self._edges_path = edges_path
        self._route_path = route_path
        self._statistics_path = statistics_path
        self._timeout_seconds = timeout_seconds
        self._route_timeout_seconds = route_timeout_seconds

    @property
    def base_url(self) -> str:
        return self._base_url

    @classmethod
    def from_settings(cls) -> GraphApiClient:
        """애플리케이션 설정으로 클라이언트 인스턴스를 생성합니다."""
        settings = get_settings()
        timeout_policy = get_timeout_policy(settings)
        return cls(
            base_url=settings.GRAPH_API_BASE_URL,
            stations_path=settings.GRAPH_STATIONS_PATH,
            edges_path=settings.GRAPH_EDGES_PATH,
            route_path=settings.GRAPH_ROUTE_PATH,
            statistics_path=settings.GRAPH_STATISTICS_PATH,
            timeout_seconds=timeout_policy.graph_api_timeout_seconds,
            route_timeout_seconds=timeout_policy.route_timeout_seconds,
        )

    async def fetch_station_names(self) -> list[str]:
        """역 이름 목록을 조회합니다. 빈 이름은 버립니다."""
        data = await self._request("GET", self._stations_path)
        try:
            payload = StationListResponse.model_validate(data or {})
        except ValidationError as exc:
            raise GraphServiceResponseError(f"invalid station list payload: {exc.error_count()} errors") from exc

        names = [name for name in payload.stations if name.strip()]
        if len(names) != len(payload.stations):
            logger.warning("Dropped blank station names: count=%d", len(payload.stations) - len(names))
        return names

    async def fetch_edges(self) -> list[GraphEdge]:
        """원본 간선 목록을 조회합니다. 형식이 잘못된 간선은 건너뜁니다."""
        data = await self._request("GET", self._edges_path)
        try:
            payload = EdgeListResponse.model_validate(data or {})
        except ValidationError as exc:
            raise GraphServiceResponseError(f"invalid edge list payload: {exc.error_count()} errors") from exc

        edges: list[GraphEdge] = []
        dropped = 0
        for raw in payload.edges:
            try:
                edges.append(GraphEdge.model_validate(raw))
            except ValidationError:
                dropped += 1
        if dropped:
            logger.warning("Dropped malformed edges: count=%d total=%d", dropped, len(payload.edges))
        return edges

    async def compute_route(self, start: str, end: str) -> RouteResponse:
        """경로 계산 서비스에 최단 경로를 요청합니다."""
        data = await self._request(
            "POST",
            self._route_path,
            payload=RouteRequest(start=start, end=end).model_dump(),
            timeout_seconds=self._route_timeout_seconds,
        )
        try:
            response = RouteResponse.model_validate(data or {})
        except ValidationError as exc:
            raise GraphServiceResponseError(f"invalid route payload: {exc.error_count()} errors") from exc

        if any(not name.strip() for name in response.path):
            raise GraphServiceResponseError("route payload contains blank station names")
        return response

    async def fetch_statistics(self) -> dict[str, Any]:
        """그래프 통계를 조회합니다."""
        data = await self._request("GET", self._statistics_path)
        statistics = (data or {}).get("statistics")
        if not isinstance(statistics, dict):
            raise GraphServiceResponseError("statistics payload is missing")
        return statistics

    async def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
        timeout_seconds: int | None = None,
    ) -> dict[str, Any] | None:
        url = f"{self._base_url}{path}"
        request_timeout = to_requests_timeout(timeout_seconds or self._timeout_seconds)

        def _send() -> requests.Response:
            with requests.Session() as session:
                return session.request(
                    method=method,
                    url=url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                    timeout=request_timeout,
                )

        try:
            response = await asyncio.to_thread(_send)
            response.raise_for_status()
        except requests.HTTPError as exc:
            error_response = exc.response
            status_code = error_response.status_code if error_response is not None else None
            message = _extract_error_message(error_response) if error_response is not None else None
            logger.error("Graph service error: method=%s url=%s status=%s message=%s", method, url, status_code, message)
            if status_code == 404:
                raise GraphServiceUnavailableError(
                    message or "endpoint not found",
                    status_code=404,
                    service_message=message,
                ) from exc
            raise GraphServiceStatusError(
                message or f"HTTP {status_code}",
                status_code=status_code,
                service_message=message,
            ) from exc
        except requests.RequestException as exc:
            logger.error("Graph service request failed: method=%s url=%s error=%s", method, url, exc)
            raise GraphServiceConnectionError(str(exc)) from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Graph service response parse failed: url=%s error=%s", url, exc)
            raise GraphServiceResponseError("response body is not valid JSON", status_code=response.status_code) from exc

        if data is not None and not isinstance(data, dict):
            raise GraphServiceResponseError("response body is not a JSON object", status_code=response.status_code)
        return data


@lru_cache(maxsize=1)
def get_graph_api_client() -> GraphApiClient:
    """설정 재사용을 위한 프로세스 단위 싱글톤을 반환합니다."""
    return GraphApiClient.from_settings()
