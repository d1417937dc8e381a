"""역(station)과 간선(edge) 모델 및 그래프 서비스 응답 스키마."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from station_map.core.geo import geocode


class Station(BaseModel):
    """이름에서 생성된 표시 좌표를 가진 역."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="역 이름 (고유 식별자)")
    lat: float = Field(..., description="표시용 위도")
    lng: float = Field(..., description="표시용 경도")

    @classmethod
    def from_name(cls, name: str) -> Station:
        """이름을 지오코딩하여 역을 생성합니다."""
        coordinate = geocode(name)
        return cls(name=name, lat=coordinate.lat, lng=coordinate.lng)


class GraphEdge(BaseModel):
    """두 역 이름을 잇는 무방향 가중치 간선.

    `(a, b, cost)`와 `(b, a, cost)`는 같은 연결을 뜻합니다.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: str = Field(..., alias="from", description="출발 역 이름")
    target: str = Field(..., alias="to", description="도착 역 이름")
    cost: float = Field(..., ge=0, description="간선 비용")


class StationListResponse(BaseModel):
    """`GET` 역 목록 응답. `null` 목록은 빈 목록으로 봅니다."""

    stations: list[str] = Field(default_factory=list, description="역 이름 목록")

    @field_validator("stations", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class EdgeListResponse(BaseModel):
    """`GET` 간선 목록 응답.

    개별 간선은 클라이언트에서 하나씩 검증하므로 원본 그대로 받습니다.
    """

    edges: list[dict] = Field(default_factory=list, description="원본 간선 목록")

    @field_validator("edges", mode="before")
    @classmethod
    def _null_as_empty(cls, value: object) -> object:
        return [] if value is None else value
