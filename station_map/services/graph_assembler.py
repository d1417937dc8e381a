"""원본 간선 목록을 표시 가능한 무방향 그래프로 정리하는 모듈.

간선 서비스는 같은 연결을 양방향으로 한 번씩 내려주고, 현재 표시 중인
역보다 훨씬 많은 역을 참조할 수 있습니다. 여기서는 보이는 역 사이의
간선만 남기고 무방향 쌍마다 하나의 간선만 유지합니다.
"""

from __future__ import annotations

from collections.abc import Iterable, Set

from station_map.core.logger import get_logger
from station_map.schemas.graph import GraphEdge

logger = get_logger(__name__)

EDGE_KEY_SEPARATOR = "|"


def _canonical_pair(source: str, target: str) -> tuple[str, str]:
    return (source, target) if source <= target else (target, source)


def canonical_edge_key(source: str, target: str) -> str:
    """무방향 간선의 정규 키를 반환합니다. `("B", "A")` -> `"A|B"`."""
    return EDGE_KEY_SEPARATOR.join(_canonical_pair(source, target))


def filter_visible_edges(edges: Iterable[GraphEdge], visible_names: Set[str]) -> list[GraphEdge]:
    """양 끝 역이 모두 보이는 간선만 남깁니다."""
    return [edge for edge in edges if edge.source in visible_names and edge.target in visible_names]


def assemble_edges(edges: Iterable[GraphEdge], visible_names: Set[str]) -> list[GraphEdge]:
    """보이는 역으로 제한하고 무방향 중복을 제거한 간선 목록을 만듭니다.

    같은 쌍이 여러 번 나오면 입력 순서상 처음 나온 간선을 유지하고,
    출력은 각 쌍이 처음 등장한 순서를 따릅니다. 중복 간선의 비용이
    서로 다르면 경고를 남깁니다.

    Args:
        edges: 서비스가 내려준 원본 간선
        visible_names: 현재 표시 중인 역 이름 집합

    Returns:
        정규화된 간선 목록
    """
    assembled: dict[tuple[str, str], GraphEdge] = {}
    conflicts = 0

    for edge in filter_visible_edges(edges, visible_names):
        pair = _canonical_pair(edge.source, edge.target)
        kept = assembled.get(pair)
        if kept is None:
            assembled[pair] = edge
        elif kept.cost != edge.cost:
            conflicts += 1
            logger.warning(
                "Conflicting costs for edge %s: kept=%s dropped=%s",
                canonical_edge_key(*pair),
                kept.cost,
                edge.cost,
            )

    if conflicts:
        logger.warning("Edge cost conflicts resolved by first occurrence: count=%d", conflicts)
    return list(assembled.values())
