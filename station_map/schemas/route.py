"""경로 계산 요청/응답 및 렌더링용 경로 모델."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, field_validator

from station_map.schemas.graph import Station


class RouteRequest(BaseModel):
    """경로 계산 서비스에 보내는 요청 본문."""

    start: str = Field(..., description="출발 역 이름")
    end: str = Field(..., description="도착 역 이름")


class RouteResponse(BaseModel):
    """경로 계산 서비스의 성공 응답.

    `path`가 `null`이면 빈 경로로, `cost`가 없거나 `null`이면 0으로 취급합니다.
    비용은 숫자만 받습니다.
    """

    path: list[str] = Field(default_factory=list, description="출발부터 도착까지의 역 이름 순서")
    cost: StrictFloat | StrictInt | None = Field(default=None, description="경로 총비용")

    @field_validator("path", mode="before")
    @classmethod
    def _null_path_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class RoutePath(BaseModel):
    """성공한 경로 계산 결과. 첫 역은 출발지, 마지막 역은 도착지입니다."""

    model_config = ConfigDict(frozen=True)

    stations: list[Station] = Field(..., min_length=1, description="순서가 있는 경로상의 역")
    cost: float = Field(..., description="경로 총비용")

    @property
    def start(self) -> Station:
        return self.stations[0]

    @property
    def end(self) -> Station:
        return self.stations[-1]


class StopRole(str, Enum):
    """경로상 정류장의 역할."""

    START = "start"
    WAYPOINT = "waypoint"
    END = "end"


class RouteStop(BaseModel):
    """지도와 사이드바가 그대로 그릴 수 있는 경로 정류장."""

    index: int = Field(..., ge=0, description="경로 내 0부터 시작하는 순번")
    name: str = Field(..., description="역 이름")
    lat: float = Field(..., description="표시용 위도")
    lng: float = Field(..., description="표시용 경도")
    role: StopRole = Field(..., description="출발/경유/도착 구분")
    badge: str = Field(..., description="정류장 배지 (S, F 또는 순번)")
    has_next: bool = Field(..., description="다음 정류장 존재 여부")
