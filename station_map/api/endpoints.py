"""지도 상태 API 엔드포인트 정의."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from station_map.api.dependencies import get_route_orchestrator, require_idle_orchestrator
from station_map.core.logger import get_logger
from station_map.schemas.map_state import (
    FullGraphToggleRequest,
    MapStateResponse,
    RouteCalculationRequest,
    StationSearchResponse,
)
from station_map.services.map_view import build_map_state_response, selectable_stations
from station_map.services.route_orchestrator import RouteOrchestrator, route_precondition_error

router = APIRouter(prefix="/api/v1", tags=["map"])
logger = get_logger(__name__)


@router.get("/map", response_model=MapStateResponse)
async def get_map_state(
    orchestrator: RouteOrchestrator = Depends(get_route_orchestrator),  # noqa: B008
) -> MapStateResponse:
    """현재 지도 상태(역, 간선, 경로, 로딩 여부, 알림)를 반환합니다."""
    return build_map_state_response(orchestrator.state)


@router.post("/map/reload", response_model=MapStateResponse)
async def reload_graph(
    orchestrator: RouteOrchestrator = Depends(get_route_orchestrator),  # noqa: B008
) -> MapStateResponse:
    """역 목록과 간선을 다시 불러옵니다."""
    require_idle_orchestrator(orchestrator)
    logger.info("Graph reload requested")
    state = await orchestrator.load_graph()
    return build_map_state_response(state)


@router.post("/route", response_model=MapStateResponse)
async def calculate_route(
    request: RouteCalculationRequest,
    orchestrator: RouteOrchestrator = Depends(get_route_orchestrator),  # noqa: B008
) -> MapStateResponse:
    """두 역 사이의 최단 경로를 계산합니다.

    전제 조건 위반은 외부 호출 없이 400으로 거부하고, 서비스 오류는
    응답 본문의 `notice`로 전달합니다.
    """
    if reason := route_precondition_error(request.start, request.end):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=reason)

    require_idle_orchestrator(orchestrator)
    logger.info("Route requested: start=%s end=%s", request.start, request.end)
    state = await orchestrator.calculate_route(request.start, request.end)
    return build_map_state_response(state)


@router.put("/map/full-graph", response_model=MapStateResponse)
async def toggle_full_graph(
    request: FullGraphToggleRequest,
    orchestrator: RouteOrchestrator = Depends(get_route_orchestrator),  # noqa: B008
) -> MapStateResponse:
    """전체 그래프 표시 여부를 바꿉니다."""
    state = orchestrator.set_show_full_graph(request.enabled)
    return build_map_state_response(state)


@router.get("/stations", response_model=StationSearchResponse)
async def search_stations(
    query: str = Query("", description="역 이름 검색어"),
    exclude: str | None = Query(None, description="결과에서 제외할 역 이름"),
    orchestrator: RouteOrchestrator = Depends(get_route_orchestrator),  # noqa: B008
) -> StationSearchResponse:
    """불러온 역 중 이름에 검색어가 포함된 역을 반환합니다."""
    stations = selectable_stations(orchestrator.state.stations, query, excluded=exclude)
    return StationSearchResponse(query=query, stations=stations)
