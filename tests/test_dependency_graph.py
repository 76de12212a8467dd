"""의존성 그래프 순환 검사 단위 테스트.

Unit tests for the dependency cycle check on plain node labels.
"""

from app.utils.dependency_graph import would_create_cycle


class TestWouldCreateCycle:
    """순환 판정 테스트."""

    def test_empty_graph_accepts_edge(self):
        assert would_create_cycle([], ("b", "a")) is False

    def test_self_edge_is_cycle(self):
        assert would_create_cycle([], ("a", "a")) is True

    def test_direct_back_edge(self):
        """B → A 가 있을 때 A → B 는 순환."""
        assert would_create_cycle([("b", "a")], ("a", "b")) is True

    def test_transitive_back_edge(self):
        """C → B → A 가 있을 때 A → C 는 순환."""
        edges = [("c", "b"), ("b", "a")]
        assert would_create_cycle(edges, ("a", "c")) is True

    def test_diamond_is_not_cycle(self):
        """다이아몬드 모양은 DAG."""
        edges = [("d", "b"), ("d", "c"), ("b", "a")]
        assert would_create_cycle(edges, ("c", "a")) is False

    def test_unrelated_component(self):
        edges = [("b", "a"), ("y", "x")]
        assert would_create_cycle(edges, ("x", "b")) is False

    def test_long_chain_does_not_recurse(self):
        """긴 체인도 명시적 스택으로 처리."""
        edges = [(i + 1, i) for i in range(5000)]
        assert would_create_cycle(edges, (0, 5000)) is True
        assert would_create_cycle(edges, (5001, 0)) is False
