"""애플리케이션 준비성(readiness) 체크 유틸."""

from __future__ import annotations

import asyncio
import socket
from urllib.parse import urlparse

from station_map.core.config import Settings, get_settings
from station_map.core.timeout_policy import TimeoutPolicy, get_timeout_policy

ReadinessCheck = dict[str, str | bool]


def _ok(detail: str, *, required: bool = True) -> ReadinessCheck:
    return {"status": "ok", "ok": True, "required": required, "detail": detail}


def _fail(detail: str, *, required: bool = True) -> ReadinessCheck:
    return {"status": "fail", "ok": False, "required": required, "detail": detail}


def _resolve_host_port(base_url: str) -> tuple[str, int] | None:
    parsed = urlparse(base_url)
    host = parsed.hostname
    if not host:
        return None

    default_ports = {"http": 80, "https": 443}
    try:
        port = parsed.port or default_ports.get(parsed.scheme.lower(), 80)
    except ValueError:
        return None
    return host, int(port)


async def _check_tcp_connectivity(host: str, port: int, timeout_seconds: int, label: str) -> ReadinessCheck:
    def _connect() -> None:
        with socket.create_connection((host, port), timeout=timeout_seconds):
            return None

    try:
        await asyncio.to_thread(_connect)
        return _ok(f"{label} 연결 가능 ({host}:{port})")
    except OSError as exc:
        return _fail(f"{label} 연결 실패 ({host}:{port}): {exc}")


async def _check_graph_service_readiness(settings: Settings, timeout_policy: TimeoutPolicy) -> ReadinessCheck:
    host_port = _resolve_host_port(settings.GRAPH_API_BASE_URL)
    if host_port is None:
        return _fail("GRAPH_API_BASE_URL에서 호스트를 파싱할 수 없습니다.")

    host, port = host_port
    return await _check_tcp_connectivity(
        host=host,
        port=port,
        timeout_seconds=timeout_policy.graph_api_timeout_seconds,
        label="그래프 서비스",
    )


async def collect_readiness_status() -> dict[str, object]:
    """그래프 서비스 의존성 준비 상태를 점검합니다."""
    settings = get_settings()
    timeout_policy = get_timeout_policy(settings)

    checks: dict[str, ReadinessCheck] = {
        "graph_service": await _check_graph_service_readiness(settings, timeout_policy),
    }
    required_checks_ok = all(bool(check["ok"]) for check in checks.values() if bool(check.get("required", True)))

    return {
        "status": "ready" if required_checks_ok else "not_ready",
        "checks": checks,
    }
