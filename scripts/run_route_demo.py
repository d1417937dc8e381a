"""실행 중인 그래프 서비스에 붙어 로딩과 경로 계산을 확인하는 수동 스크립트."""

import argparse
import asyncio
import os
import sys


async def run_demo(start: str | None, end: str | None) -> int:
    """그래프를 불러오고, 출발/도착이 주어지면 경로를 계산해 출력합니다."""
    from station_map.core.config import get_settings
    from station_map.services.graph_api_client import GraphApiClient
    from station_map.services.map_view import route_stops
    from station_map.services.route_orchestrator import RouteOrchestrator

    settings = get_settings()
    client = GraphApiClient.from_settings()
    orchestrator = RouteOrchestrator(
        client,
        statistics_enabled=settings.GRAPH_STATISTICS_ENABLED,
        service_url=client.base_url,
    )

    print(f"🛰️ 그래프 로딩: {client.base_url}")
    state = await orchestrator.load_graph()
    if state.notice is not None:
        print(f"   ❌ {state.notice.kind.value}: {state.notice.message}")
        return 1
    print(f"   ✅ 역 {len(state.stations)}개, 간선 {len(state.edges)}개")

    if not (start and end):
        return 0

    print(f"\n🧭 경로 계산: {start} -> {end}")
    state = await orchestrator.calculate_route(start, end)
    if state.notice is not None:
        print(f"   ❌ {state.notice.kind.value}: {state.notice.message}")
        return 1
    if state.route is None:
        print("   ⚠️ 출발/도착 역이 같거나 비어 있습니다.")
        return 1

    for stop in route_stops(state.route):
        print(f"   [{stop.badge}] {stop.name} ({stop.lat:.5f}, {stop.lng:.5f})")
    print(f"   💰 비용: {state.route.cost:.2f}")
    return 0


if __name__ == "__main__":
    PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    sys.path.insert(0, PROJECT_ROOT)

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--start", help="출발 역 이름")
    parser.add_argument("--end", help="도착 역 이름")
    args = parser.parse_args()

    sys.exit(asyncio.run(run_demo(args.start, args.end)))
