"""애플리케이션 전역 설정을 관리하는 모듈."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """환경 변수 기반 설정 모델."""

    GRAPH_API_BASE_URL: str = "http://127.0.0.1:5000"
    GRAPH_STATIONS_PATH: str = "/api/stations"
    GRAPH_EDGES_PATH: str = "/api/edges"
    GRAPH_ROUTE_PATH: str = "/api/route/dijkstra"
    GRAPH_STATISTICS_PATH: str = "/api/statistics"
    GRAPH_STATISTICS_ENABLED: bool = False
    REQUEST_TIMEOUT_SECONDS: int = 60
    EXTERNAL_API_TIMEOUT_SECONDS: int = 15
    GRAPH_API_TIMEOUT_SECONDS: int = 10
    ROUTE_TIMEOUT_SECONDS: int = 30
    SHOW_FULL_GRAPH: bool = True
    LOAD_GRAPH_ON_STARTUP: bool = True
    SERVICE_SECRET: str | None = None
    APP_ENV: str = "development"
    DOCS_MODE: str = "disabled"
    EXPOSE_INTERNAL_ERRORS: bool = False
    CORS_ALLOW_ORIGINS: str = ""
    CORS_ALLOW_METHODS: str = "GET,POST,PUT,OPTIONS"
    CORS_ALLOW_HEADERS: str = "Content-Type,x-service-secret"
    CORS_ALLOW_CREDENTIALS: bool = False
    SECURITY_HEADERS_ENABLED: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("GRAPH_API_BASE_URL", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: object) -> str:
        text = str(value or "").strip()
        return text.rstrip("/") or "http://127.0.0.1:5000"

    @field_validator(
        "GRAPH_STATIONS_PATH",
        "GRAPH_EDGES_PATH",
        "GRAPH_ROUTE_PATH",
        "GRAPH_STATISTICS_PATH",
        mode="before",
    )
    @classmethod
    def _ensure_leading_slash(cls, value: object) -> str:
        text = str(value or "").strip()
        return text if text.startswith("/") else f"/{text}"


@lru_cache
def get_settings() -> Settings:
    """Settings 인스턴스를 반환한다. 최초 호출 시에만 생성되고 이후 캐싱된다."""
    return Settings()
