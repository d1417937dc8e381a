"""이름 기반 표시 좌표 생성을 위한 지리 유틸리티.

`geocode`는 실제 지오코딩이 아닙니다. 이름만 있는 역(station)을 지도에
일관되게 배치하기 위해 이름에서 결정적으로 유사 좌표를 만들어 냅니다.
브라우저 클라이언트와 같은 좌표를 내야 하므로 해시 연산은 JavaScript의
정수 변환 규칙을 그대로 따릅니다.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

BASE_LAT = -10.0464
BASE_LNG = -73.0228
SPREAD_DEGREES = 0.15

_SIN_SCALE = 10000.0


def _to_int32(value: int) -> int:
    """정수를 부호 있는 32비트 정수로 감쌉니다."""
    value &= 0xFFFFFFFF
    return value - 0x1_0000_0000 if value & 0x8000_0000 else value


def _utf16_code_units(text: str) -> Iterable[int]:
    data = text.encode("utf-16-le", "surrogatepass")
    return (low | (high << 8) for low, high in zip(data[0::2], data[1::2]))


def name_hash(name: str) -> int:
    """이름의 UTF-16 코드 유닛에 대한 롤링 해시를 계산합니다.

    `hash = unit + ((hash << 5) - hash)`에서 시프트의 피연산자와 결과만
    32비트로 감싸고 뺄셈과 덧셈은 감싸지 않습니다.
    """
    value = 0
    for unit in _utf16_code_units(name):
        value = unit + (_to_int32(_to_int32(value) << 5) - value)
    return value


def pseudo_random(seed: float) -> float:
    """사인 기반으로 `[0, 1)` 범위의 유사 난수를 만듭니다."""
    scaled = math.sin(seed) * _SIN_SCALE
    return scaled - math.floor(scaled)


@dataclass(frozen=True, slots=True)
class Coordinate:
    """위경도 좌표."""

    lat: float
    lng: float


def geocode(name: str) -> Coordinate:
    """이름에서 결정적인 표시 좌표를 생성합니다.

    같은 이름은 호출 순서나 이전 상태와 무관하게 항상 같은 좌표를 반환합니다.
    빈 문자열도 해시 0으로 정의된 좌표를 가집니다.
    """
    seed = name_hash(name)
    lat_offset = (pseudo_random(seed) - 0.5) * SPREAD_DEGREES
    lng_offset = (pseudo_random(seed + 1) - 0.5) * SPREAD_DEGREES
    return Coordinate(lat=BASE_LAT + lat_offset, lng=BASE_LNG + lng_offset)
