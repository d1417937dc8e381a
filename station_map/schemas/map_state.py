"""지도 상태 스냅샷과 지도 API 요청/응답 스키마."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from station_map.schemas.graph import GraphEdge, Station
from station_map.schemas.route import RoutePath, RouteStop


class LoadState(str, Enum):
    """사용자 트리거 작업의 동시 실행을 막는 로딩 플래그."""

    IDLE = "idle"
    LOADING = "loading"


class NoticeKind(str, Enum):
    """사용자에게 보여줄 알림 종류."""

    NO_ROUTE_FOUND = "no_route_found"
    SERVICE_UNAVAILABLE = "service_unavailable"
    COMPUTATION_FAILED = "computation_failed"
    DATA_LOAD_FAILED = "data_load_failed"
    NETWORK_FAILURE = "network_failure"


class MapNotice(BaseModel):
    """사용자에게 노출되는 알림."""

    model_config = ConfigDict(frozen=True)

    kind: NoticeKind = Field(..., description="알림 종류")
    message: str = Field(..., description="사용자 메시지")


class MapState(BaseModel):
    """오케스트레이터가 소유하는 지도 상태 스냅샷.

    각 작업은 상태를 직접 고치지 않고 새 스냅샷을 반환합니다.
    """

    model_config = ConfigDict(frozen=True)

    stations: list[Station] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
    route: RoutePath | None = None
    load_state: LoadState = LoadState.IDLE
    notice: MapNotice | None = None
    statistics: dict[str, Any] | None = None
    show_full_graph: bool = True

    @property
    def is_busy(self) -> bool:
        return self.load_state is LoadState.LOADING

    @property
    def route_cost(self) -> float | None:
        return self.route.cost if self.route is not None else None

    @property
    def visible_edges(self) -> list[GraphEdge]:
        """전체 그래프 표시가 켜져 있을 때만 간선을 노출합니다."""
        return list(self.edges) if self.show_full_graph else []


class MapCenter(BaseModel):
    """지도 초기 중심과 줌."""

    lat: float
    lng: float
    zoom: int


class EdgeSegment(BaseModel):
    """지도에 선으로 그릴 간선. `positions`는 두 끝점의 `(lat, lng)`입니다."""

    source: str = Field(..., description="출발 역 이름")
    target: str = Field(..., description="도착 역 이름")
    positions: tuple[tuple[float, float], tuple[float, float]] = Field(..., description="끝점 좌표 쌍")


class MapStateResponse(BaseModel):
    """`GET /api/v1/map` 응답."""

    stations: list[Station] = Field(..., description="표시할 역 목록")
    edges: list[GraphEdge] = Field(..., description="표시할 간선 목록")
    segments: list[EdgeSegment] = Field(..., description="끝점 역이 있는 표시 간선의 좌표 선분")
    route: list[RouteStop] = Field(..., description="계산된 경로 정류장")
    route_cost: float | None = Field(None, description="경로 총비용")
    busy: bool = Field(..., description="로딩 중 여부")
    notice: MapNotice | None = Field(None, description="최근 알림")
    show_full_graph: bool = Field(..., description="전체 그래프 표시 여부")
    center: MapCenter = Field(..., description="지도 중심")


class RouteCalculationRequest(BaseModel):
    """`POST /api/v1/route` 요청 본문."""

    start: str = Field("", description="출발 역 이름")
    end: str = Field("", description="도착 역 이름")


class FullGraphToggleRequest(BaseModel):
    """`PUT /api/v1/map/full-graph` 요청 본문."""

    enabled: bool = Field(..., description="전체 그래프 표시 여부")


class StationSearchResponse(BaseModel):
    """`GET /api/v1/stations` 응답."""

    query: str = Field(..., description="검색어")
    stations: list[Station] = Field(..., description="검색된 역 목록")
