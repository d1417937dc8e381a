"""그래프 서비스 Mock.

실제 HTTP 호출 없이 미리 정해 둔 역/간선/경로를 반환한다.
메서드 이름별로 예외를 지정해 실패 시나리오를 재현할 수 있다.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from station_map.schemas.graph import GraphEdge
from station_map.schemas.route import RouteResponse
from station_map.services.graph_service import GraphServiceError, GraphServiceProtocol


class MockGraphService(GraphServiceProtocol):
    """메모리 기반 그래프 서비스."""

    def __init__(
        self,
        stations: list[str] | None = None,
        edges: list[tuple[str, str, float]] | None = None,
        routes: dict[tuple[str, str], RouteResponse] | None = None,
        statistics: dict[str, Any] | None = None,
        errors: dict[str, GraphServiceError] | None = None,
        on_call: Callable[[str], None] | None = None,
    ) -> None:
        self.stations = list(stations or [])
        self.edges = [GraphEdge(source=a, target=b, cost=cost) for a, b, cost in (edges or [])]
        self.routes = dict(routes or {})
        self.statistics = statistics
        self.errors = dict(errors or {})
        self.on_call = on_call
        self.calls: list[tuple[str, ...]] = []

    def _enter(self, method: str, *args: str) -> None:
        self.calls.append((method, *args))
        if self.on_call is not None:
            self.on_call(method)
        if method in self.errors:
            raise self.errors[method]

    async def fetch_station_names(self) -> list[str]:
        self._enter("fetch_station_names")
        return list(self.stations)

    async def fetch_edges(self) -> list[GraphEdge]:
        self._enter("fetch_edges")
        return list(self.edges)

    async def compute_route(self, start: str, end: str) -> RouteResponse:
        self._enter("compute_route", start, end)
        return self.routes.get((start, end), RouteResponse(path=[], cost=0))

    async def fetch_statistics(self) -> dict[str, Any]:
        self._enter("fetch_statistics")
        if self.statistics is None:
            return await super().fetch_statistics()
        return dict(self.statistics)

    def method_calls(self, method: str) -> list[tuple[str, ...]]:
        return [call for call in self.calls if call[0] == method]
