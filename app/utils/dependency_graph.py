"""의존성 그래프 순환 검사 유틸리티.

Dependency graph cycle checker.
Edges are ``(dependent, prerequisite)`` pairs. The check is pure: no I/O,
deterministic, O(V + E).
"""

from collections.abc import Hashable, Iterable, Iterator
from typing import TypeVar

NodeT = TypeVar("NodeT", bound=Hashable)

_EXHAUSTED = object()


def would_create_cycle(
    edges: Iterable[tuple[NodeT, NodeT]],
    proposed: tuple[NodeT, NodeT],
) -> bool:
    """제안된 간선을 추가하면 순환이 생기는지 검사합니다.

    Return True when adding ``proposed`` to ``edges`` would close a cycle.

    Builds an adjacency map (dependent → prerequisites) including the
    proposed edge, then walks depth-first from the proposed dependent with
    an explicit stack, tracking the nodes on the current path. Revisiting a
    node on the path is a back edge. A self-edge is reported as a cycle.

    Args:
        edges: 기존 간선 (Existing (dependent, prerequisite) edges of one service)
        proposed: 제안 간선 (Proposed (dependent, prerequisite) edge)

    Returns:
        bool: 순환 여부 (Whether a cycle would be created)
    """
    start, prerequisite = proposed
    if start == prerequisite:
        return True

    adjacency: dict[NodeT, list[NodeT]] = {}
    for dependent, prereq in edges:
        adjacency.setdefault(dependent, []).append(prereq)
    adjacency.setdefault(start, []).append(prerequisite)

    visited: set[NodeT] = {start}
    on_path: set[NodeT] = {start}
    stack: list[tuple[NodeT, Iterator[NodeT]]] = [(start, iter(adjacency[start]))]

    while stack:
        node, neighbours = stack[-1]
        nxt = next(neighbours, _EXHAUSTED)
        if nxt is _EXHAUSTED:
            stack.pop()
            on_path.discard(node)
            continue
        if nxt in on_path:
            return True
        if nxt in visited:
            continue
        visited.add(nxt)
        on_path.add(nxt)
        stack.append((nxt, iter(adjacency.get(nxt, ()))))

    return False
