"""지도와 사이드바가 그대로 소비하는 렌더링용 데이터 변환."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from station_map.schemas.graph import GraphEdge, Station
from station_map.schemas.map_state import EdgeSegment, MapCenter, MapState, MapStateResponse
from station_map.schemas.route import RoutePath, RouteStop, StopRole

DEFAULT_CENTER = (-12.0464, -77.0428)
DEFAULT_ZOOM = 12


def search_stations(stations: Iterable[Station], term: str | None) -> list[Station]:
    """이름에 검색어가 포함된 역을 대소문자 구분 없이 찾습니다."""
    needle = (term or "").strip().lower()
    if not needle:
        return list(stations)
    return [station for station in stations if needle in station.name.lower()]


def selectable_stations(stations: Iterable[Station], term: str | None, excluded: str | None = None) -> list[Station]:
    """검색 결과에서 반대편 선택값으로 이미 고른 역을 뺍니다."""
    return [station for station in search_stations(stations, term) if station.name != excluded]



def route_stops(route: RoutePath | None) -> list[RouteStop]:
    """경로를 순번, 역할, 배지가 붙은 정류장 목록으로 변환합니다."""
    if route is None:
        return []

    last_index = len(route.stations) - 1
    stops: list[RouteStop] = []
    for index, station in enumerate(route.stations):
        if index == 0:
            role, badge = StopRole.START, "S"
        elif index == last_index:
            role, badge = StopRole.END, "F"
        else:
            role, badge = StopRole.WAYPOINT, str(index)
        stops.append(
            RouteStop(
                index=index,
                name=station.name,
                lat=station.lat,
                lng=station.lng,
                role=role,
                badge=badge,
                has_next=index < last_index,
            )
        )
    return stops


def map_center(stations: Sequence[Station]) -> MapCenter:
    """첫 번째 역을 지도 중심으로 사용합니다."""
    if not stations:
        lat, lng = DEFAULT_CENTER
    else:
        lat, lng = stations[0].lat, stations[0].lng
    return MapCenter(lat=lat, lng=lng, zoom=DEFAULT_ZOOM)


def edge_segments(edges: Iterable[GraphEdge], stations: Iterable[Station]) -> list[EdgeSegment]:
    """간선을 좌표 선분으로 바꿉니다. 끝점 역이 없는 간선은 그리지 않습니다."""
    positions = {station.name: (station.lat, station.lng) for station in stations}
    segments: list[EdgeSegment] = []
    for edge in edges:
        source = positions.get(edge.source)
        target = positions.get(edge.target)
        if source is None or target is None:
            continue
        segments.append(EdgeSegment(source=edge.source, target=edge.target, positions=(source, target)))
    return segments


def build_map_state_response(state: MapState) -> MapStateResponse:
    edges = state.visible_edges
    return MapStateResponse(
        stations=list(state.stations),
        edges=edges,
        segments=edge_segments(edges, state.stations),
        route=route_stops(state.route),
        route_cost=state.route_cost,
        busy=state.is_busy,
        notice=state.notice,
        show_full_graph=state.show_full_graph,
        center=map_center(state.stations),
    )
