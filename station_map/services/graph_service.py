"""그래프 서비스 추상 프로토콜과 오류 분류 정의."""

from abc import ABC, abstractmethod
from typing import Any

from station_map.schemas.graph import GraphEdge
from station_map.schemas.route import RouteResponse


class GraphServiceError(RuntimeError):
    """그래프 서비스 호출 실패의 기반 예외."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        service_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        # 서비스가 오류 본문의 `message`로 직접 알려준 내용
        self.service_message = service_message


class GraphServiceUnavailableError(GraphServiceError):
    """엔드포인트가 404를 반환한 경우. 서비스가 떠 있지 않을 가능성이 큽니다."""


class GraphServiceStatusError(GraphServiceError):
    """404 이외의 비정상 상태 코드."""


class GraphServiceResponseError(GraphServiceError):
    """성공 응답의 본문을 해석할 수 없는 경우."""


class GraphServiceConnectionError(GraphServiceError):
    """응답 자체를 받지 못한 경우 (연결 실패, 타임아웃 등)."""


class GraphServiceProtocol(ABC):
    """역/간선/경로를 제공하는 외부 그래프 서비스 인터페이스."""

    @abstractmethod
    async def fetch_station_names(self) -> list[str]:
        """전체 역 이름 목록을 조회합니다."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_edges(self) -> list[GraphEdge]:
        """중복이 포함될 수 있는 원본 간선 목록을 조회합니다."""
        raise NotImplementedError

    @abstractmethod
    async def compute_route(self, start: str, end: str) -> RouteResponse:
        """두 역 사이의 최단 경로를 요청합니다.

        Args:
            start: 출발 역 이름
            end: 도착 역 이름

        Returns:
            경로 이름 순서와 비용. 경로가 없으면 빈 `path`.

        Raises:
            GraphServiceError: 호출이 실패한 경우
        """
        raise NotImplementedError

    async def fetch_statistics(self) -> dict[str, Any]:
        """그래프 통계를 조회합니다. 지원하지 않는 서비스도 있습니다."""
        raise GraphServiceUnavailableError("statistics endpoint is not implemented", status_code=404)
