"""API 의존성 모음."""

from functools import lru_cache

from fastapi import Header, HTTPException, status

from station_map.core.config import get_settings
from station_map.services.graph_api_client import get_graph_api_client
from station_map.services.route_orchestrator import RouteOrchestrator


@lru_cache(maxsize=1)
def get_route_orchestrator() -> RouteOrchestrator:
    """프로세스 단위로 지도 상태를 소유하는 오케스트레이터를 제공합니다."""
    settings = get_settings()
    client = get_graph_api_client()
    return RouteOrchestrator(
        client,
        statistics_enabled=settings.GRAPH_STATISTICS_ENABLED,
        show_full_graph=settings.SHOW_FULL_GRAPH,
        service_url=client.base_url,
    )


def require_idle_orchestrator(orchestrator: RouteOrchestrator) -> RouteOrchestrator:
    """다른 작업이 진행 중이면 새 작업을 거부한다."""
    if orchestrator.is_busy:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="이미 처리 중인 작업이 있습니다.",
        )
    return orchestrator


def require_service_secret(
    x_service_secret: str | None = Header(default=None, alias="x-service-secret"),
) -> None:
    """서비스 간 인증을 위한 시크릿 헤더를 검증한다."""
    settings = get_settings()
    if not settings.SERVICE_SECRET:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="서비스 시크릿 설정이 없습니다.",
        )

    if x_service_secret != settings.SERVICE_SECRET:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="유효하지 않은 서비스 시크릿입니다.",
        )
