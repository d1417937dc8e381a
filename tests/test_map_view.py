"""렌더링용 지도 데이터 변환 테스트."""

from __future__ import annotations

from station_map.schemas.graph import GraphEdge, Station
from station_map.schemas.map_state import LoadState, MapNotice, MapState, NoticeKind
from station_map.schemas.route import RoutePath, StopRole
from station_map.services.map_view import (
    DEFAULT_CENTER,
    build_map_state_response,
    edge_segments,
    map_center,
    route_stops,
    search_stations,
    selectable_stations,
)

_STATIONS = [Station.from_name(name) for name in ["Grifo Central", "Grifo Norte", "Estación Sur"]]


def test_search_stations_is_case_insensitive_substring() -> None:
    assert [s.name for s in search_stations(_STATIONS, "GRIFO")] == ["Grifo Central", "Grifo Norte"]
    assert [s.name for s in search_stations(_STATIONS, "sur")] == ["Estación Sur"]
    assert search_stations(_STATIONS, "zzz") == []


def test_search_stations_blank_term_returns_all() -> None:
    assert search_stations(_STATIONS, "") == _STATIONS
    assert search_stations(_STATIONS, None) == _STATIONS


def test_selectable_stations_excludes_other_endpoint() -> None:
    names = [s.name for s in selectable_stations(_STATIONS, "grifo", excluded="Grifo Norte")]

    assert names == ["Grifo Central"]


def test_route_stops_roles_and_badges() -> None:
    route = RoutePath(stations=[Station.from_name(name) for name in ["A", "B", "C", "D"]], cost=7)

    stops = route_stops(route)

    assert [stop.role for stop in stops] == [StopRole.START, StopRole.WAYPOINT, StopRole.WAYPOINT, StopRole.END]
    assert [stop.badge for stop in stops] == ["S", "1", "2", "F"]
    assert [stop.has_next for stop in stops] == [True, True, True, False]
    assert stops[2].lat == route.stations[2].lat


def test_route_stops_without_route() -> None:
    assert route_stops(None) == []


def test_map_center_uses_first_station_or_default() -> None:
    center = map_center(_STATIONS)
    empty = map_center([])

    assert (center.lat, center.lng) == (_STATIONS[0].lat, _STATIONS[0].lng)
    assert (empty.lat, empty.lng) == DEFAULT_CENTER
    assert center.zoom == 12


def test_edge_segments_skip_missing_endpoints() -> None:
    edges = [
        GraphEdge(source="Grifo Central", target="Grifo Norte", cost=1),
        GraphEdge(source="Grifo Central", target="Ghost", cost=2),
    ]

    segments = edge_segments(edges, _STATIONS)

    assert [(segment.source, segment.target) for segment in segments] == [("Grifo Central", "Grifo Norte")]
    assert segments[0].positions == ((_STATIONS[0].lat, _STATIONS[0].lng), (_STATIONS[1].lat, _STATIONS[1].lng))


def test_build_map_state_response_hides_edges_when_full_graph_off() -> None:
    state = MapState(
        stations=_STATIONS,
        edges=[GraphEdge(source="Grifo Central", target="Grifo Norte", cost=1)],
        route=RoutePath(stations=_STATIONS[:2], cost=1.5),
        load_state=LoadState.LOADING,
        notice=MapNotice(kind=NoticeKind.NO_ROUTE_FOUND, message="none"),
        show_full_graph=False,
    )

    response = build_map_state_response(state)

    assert response.edges == []
    assert response.segments == []
    assert response.busy is True
    assert response.route_cost == 1.5
    assert [stop.badge for stop in response.route] == ["S", "F"]
    assert response.notice.kind is NoticeKind.NO_ROUTE_FOUND


def test_build_map_state_response_includes_segments_for_visible_edges() -> None:
    state = MapState(
        stations=_STATIONS,
        edges=[
            GraphEdge(source="Grifo Central", target="Grifo Norte", cost=1),
            GraphEdge(source="Grifo Norte", target="Ghost", cost=2),
        ],
    )

    response = build_map_state_response(state)

    assert len(response.edges) == 2
    assert [(segment.source, segment.target) for segment in response.segments] == [("Grifo Central", "Grifo Norte")]
