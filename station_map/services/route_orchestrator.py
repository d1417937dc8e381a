"""그래프 로딩과 경로 계산의 비동기 상태 전이를 관리하는 오케스트레이터.

상태 전이는 `Idle -> Loading -> (성공 | 실패) -> Idle`이며, 어떤 실패도
시스템을 `Loading`에 남겨 두지 않습니다. 상태 변경은 외부 서비스 응답을
기다리는 지점 사이에서만 동기적으로 일어납니다.

동시에 하나의 작업만 실행된다고 가정합니다. 호출자는 `is_busy`인 동안
트리거를 막아야 하며, 겹쳐 실행되면 나중에 끝난 작업의 결과가 남습니다.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from station_map.core.logger import get_logger
from station_map.schemas.graph import GraphEdge, Station
from station_map.schemas.map_state import LoadState, MapNotice, MapState, NoticeKind
from station_map.schemas.route import RoutePath, RouteResponse
from station_map.services.graph_assembler import assemble_edges
from station_map.services.graph_service import (
    GraphServiceConnectionError,
    GraphServiceError,
    GraphServiceProtocol,
    GraphServiceResponseError,
    GraphServiceUnavailableError,
)

logger = get_logger(__name__)

_DEFAULT_SERVICE_URL = "http://127.0.0.1:5000"
NO_ROUTE_FOUND_MESSAGE = "선택한 역 사이에서 경로를 찾지 못했습니다."
COMPUTATION_FAILED_MESSAGE = "경로 계산 중 오류가 발생했습니다."
ROUTE_MISMATCH_MESSAGE = "경로 응답이 요청한 출발/도착 역과 일치하지 않습니다."
DATA_LOAD_FAILED_MESSAGE = "역/간선 데이터를 불러오지 못했습니다."


def route_precondition_error(start: str, end: str) -> str | None:
    """경로 요청 전제 조건을 검사하고 위반 사유를 반환합니다."""
    if not start or not end:
        return "출발 역과 도착 역을 모두 선택해야 합니다."
    if start == end:
        return "출발 역과 도착 역은 서로 달라야 합니다."
    return None


def begin_loading(state: MapState) -> MapState:
    return state.model_copy(update={"load_state": LoadState.LOADING})


def finish_loading(state: MapState) -> MapState:
    return state.model_copy(update={"load_state": LoadState.IDLE})


def apply_graph(
    state: MapState,
    stations: list[Station],
    edges: list[GraphEdge],
    statistics: dict[str, Any] | None = None,
) -> MapState:
    """새로 불러온 역과 간선을 한 번에 반영합니다."""
    return state.model_copy(
        update={
            "stations": stations,
            "edges": edges,
            "statistics": statistics if statistics is not None else state.statistics,
            "notice": None,
        }
    )


def apply_route_response(state: MapState, response: RouteResponse) -> MapState:
    """성공 응답을 경로 상태로 변환합니다. 빈 경로는 '경로 없음'으로 처리합니다."""
    if not response.path:
        return state.model_copy(
            update={
                "route": None,
                "notice": MapNotice(kind=NoticeKind.NO_ROUTE_FOUND, message=NO_ROUTE_FOUND_MESSAGE),
            }
        )

    route = RoutePath(
        stations=[Station.from_name(name) for name in response.path],
        cost=float(response.cost or 0.0),
    )
    return state.model_copy(update={"route": route, "notice": None})


def apply_failure(state: MapState, notice: MapNotice) -> MapState:
    """데이터는 그대로 두고 알림만 갱신합니다."""
    return state.model_copy(update={"notice": notice})


def notice_for_error(exc: GraphServiceError, *, loading_graph: bool, service_url: str | None = None) -> MapNotice:
    """서비스 오류를 사용자 알림으로 분류합니다."""
    url = service_url or _DEFAULT_SERVICE_URL

    if isinstance(exc, GraphServiceUnavailableError):
        detail = exc.service_message or "엔드포인트를 찾을 수 없습니다"
        return MapNotice(
            kind=NoticeKind.SERVICE_UNAVAILABLE,
            message=f"서버에 연결할 수 없습니다. 백엔드가 {url}에서 실행 중인지 확인하세요. (상세: {detail})",
        )
    if isinstance(exc, GraphServiceConnectionError):
        return MapNotice(
            kind=NoticeKind.NETWORK_FAILURE,
            message=f"네트워크 연결 오류입니다. 백엔드가 {url}에서 실행 중인지 확인하세요.",
        )
    if loading_graph:
        message = DATA_LOAD_FAILED_MESSAGE
        if exc.service_message:
            message = f"{message} ({exc.service_message})"
        return MapNotice(kind=NoticeKind.DATA_LOAD_FAILED, message=message)
    if isinstance(exc, GraphServiceResponseError):
        return MapNotice(kind=NoticeKind.COMPUTATION_FAILED, message=COMPUTATION_FAILED_MESSAGE)
    return MapNotice(
        kind=NoticeKind.COMPUTATION_FAILED,
        message=exc.service_message or COMPUTATION_FAILED_MESSAGE,
    )


def _unique_names(names: Iterable[str]) -> list[str]:
    return [name for name in dict.fromkeys(names) if name]


class RouteOrchestrator:
    """지도 상태를 소유하고 그래프 로딩/경로 계산 작업을 실행합니다."""

    def __init__(
        self,
        service: GraphServiceProtocol,
        *,
        statistics_enabled: bool = False,
        show_full_graph: bool = True,
        service_url: str | None = None,
    ) -> None:
        self._service = service
        self._statistics_enabled = statistics_enabled
        self._service_url = service_url
        self._state = MapState(show_full_graph=show_full_graph)

    @property
    def state(self) -> MapState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return self._state.is_busy

    def set_show_full_graph(self, enabled: bool) -> MapState:
        """전체 그래프 표시 여부를 바꿉니다. 저장된 간선은 건드리지 않습니다."""
        self._state = self._state.model_copy(update={"show_full_graph": enabled})
        return self._state

    async def load_graph(self) -> MapState:
        """역 목록과 간선을 불러와 표시 가능한 그래프를 구성합니다."""
        self._state = begin_loading(self._state)
        try:
            statistics = await self._fetch_statistics()
            names = _unique_names(await self._service.fetch_station_names())
            stations = [Station.from_name(name) for name in names]
            raw_edges = await self._service.fetch_edges()
            edges = assemble_edges(raw_edges, {station.name for station in stations})
        except GraphServiceError as exc:
            notice = notice_for_error(exc, loading_graph=True, service_url=self._service_url)
            logger.warning("Graph load failed: kind=%s error=%s", notice.kind.value, exc)
            self._state = apply_failure(self._state, notice)
        else:
            self._state = apply_graph(self._state, stations, edges, statistics)
            logger.info(
                "Graph loaded: stations=%d raw_edges=%d edges=%d",
                len(stations),
                len(raw_edges),
                len(edges),
            )
        finally:
            self._state = finish_loading(self._state)
        return self._state

    async def calculate_route(self, start: str, end: str) -> MapState:
        """두 역 사이의 경로를 계산합니다.

        전제 조건(두 역 모두 지정, 서로 다름)을 만족하지 않으면 호출 없이
        현재 상태를 그대로 반환합니다.
        """
        if reason := route_precondition_error(start, end):
            logger.debug("Route request rejected: start=%r end=%r reason=%s", start, end, reason)
            return self._state

        self._state = begin_loading(self._state)
        try:
            response = await self._service.compute_route(start, end)
            if response.path and (response.path[0] != start or response.path[-1] != end):
                raise GraphServiceResponseError(ROUTE_MISMATCH_MESSAGE)
            if not all(response.path):
                raise GraphServiceResponseError("route contains blank station names")
        except GraphServiceError as exc:
            notice = notice_for_error(exc, loading_graph=False, service_url=self._service_url)
            logger.warning(
                "Route calculation failed: start=%s end=%s kind=%s error=%s",
                start,
                end,
                notice.kind.value,
                exc,
            )
            self._state = apply_failure(self._state, notice)
        else:
            self._state = apply_route_response(self._state, response)
            if self._state.route is None:
                logger.info("No route found: start=%s end=%s", start, end)
            else:
                logger.info(
                    "Route calculated: start=%s end=%s stops=%d cost=%s",
                    start,
                    end,
                    len(self._state.route.stations),
                    self._state.route.cost,
                )
        finally:
            self._state = finish_loading(self._state)
        return self._state

    async def _fetch_statistics(self) -> dict[str, Any] | None:
        """통계는 부가 정보이므로 실패해도 로딩을 막지 않습니다."""
        if not self._statistics_enabled:
            return None
        try:
            return await self._service.fetch_statistics()
        except GraphServiceError as exc:
            logger.debug("Statistics unavailable, skipping: %s", exc)
            return None
