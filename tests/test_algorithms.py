"""Tests for reverse, subgraph, acyclicity and topological sorting."""

import random

import pytest

from mapgraph import (
    MapDigraph,
    UnmodifiableDigraph,
    is_acyclic,
    is_equivalent,
    reverse,
    subgraph,
    topological_sort,
)


def _graph(*edges: tuple[str, str]) -> MapDigraph[str, int]:
    g: MapDigraph[str, int] = MapDigraph()
    for weight, (source, target) in enumerate(edges):
        g.put(source, target, weight)
    return g


def _random_graph(seed: int, vertices: int = 10, edges: int = 30) -> MapDigraph[int, float]:
    rng = random.Random(seed)
    g: MapDigraph[int, float] = MapDigraph()
    for v in range(vertices):
        g.add(v)
    for _ in range(edges):
        g.put(rng.randrange(vertices), rng.randrange(vertices), rng.random())
    return g


class TestReverse:
    def test_flips_every_edge(self) -> None:
        g = _graph(("a", "b"), ("b", "c"))
        r = reverse(g, MapDigraph)
        assert r.contains_edge("b", "a")
        assert r.contains_edge("c", "b")
        assert not r.contains_edge("a", "b")
        assert r.get("b", "a") == 0
        assert r.get("c", "b") == 1
        assert r.edge_count() == 2

    def test_keeps_isolated_vertices(self) -> None:
        g = _graph(("a", "b"))
        g.add("lonely")
        r = reverse(g, MapDigraph)
        assert r.contains("lonely")
        assert r.vertex_count() == 3

    def test_self_loop_stays(self) -> None:
        g = _graph(("a", "a"))
        r = reverse(g, MapDigraph)
        assert r.contains_edge("a", "a")

    def test_empty(self) -> None:
        r = reverse(MapDigraph(), MapDigraph)
        assert r.vertex_count() == 0

    @pytest.mark.parametrize("seed", range(5))
    def test_double_reverse_is_identity(self, seed: int) -> None:
        g = _random_graph(seed)
        assert is_equivalent(reverse(reverse(g, MapDigraph), MapDigraph), g)

    def test_source_is_not_modified(self) -> None:
        g = _graph(("a", "b"))
        reverse(g, MapDigraph)
        assert list(g.edges()) == [("a", "b", 0)]

    def test_reads_through_read_only_adapter(self) -> None:
        g = _graph(("a", "b"))
        r = reverse(UnmodifiableDigraph(g), MapDigraph)
        assert r.contains_edge("b", "a")


class TestSubgraph:
    def test_keeps_edges_inside_the_set(self) -> None:
        g = _graph(("a", "b"), ("b", "c"), ("c", "a"), ("a", "c"))
        sub = subgraph(g, {"a", "c"}, MapDigraph)
        assert set(sub.vertices()) == {"a", "c"}
        assert sub.contains_edge("c", "a")
        assert sub.contains_edge("a", "c")
        assert sub.edge_count() == 2
        assert sub.get("a", "c") == 3

    def test_ignores_unknown_vertices(self) -> None:
        g = _graph(("a", "b"))
        sub = subgraph(g, {"a", "zz"}, MapDigraph)
        assert list(sub.vertices()) == ["a"]
        assert sub.edge_count() == 0

    def test_all_vertices_gives_equal_graph(self) -> None:
        g = _random_graph(3)
        g.add(99)
        assert is_equivalent(subgraph(g, set(g.vertices()), MapDigraph), g)

    def test_empty_set_gives_empty_graph(self) -> None:
        g = _random_graph(3)
        sub = subgraph(g, set(), MapDigraph)
        assert sub.vertex_count() == 0
        assert sub.edge_count() == 0

    def test_follows_source_order(self) -> None:
        g = _graph(("c", "b"), ("b", "a"))
        sub = subgraph(g, {"a", "b", "c"}, MapDigraph)
        assert list(sub.vertices()) == ["c", "b", "a"]


class TestIsAcyclic:
    def test_empty_graph(self) -> None:
        assert is_acyclic(MapDigraph())

    def test_isolated_vertices(self) -> None:
        g = MapDigraph()
        g.add("a")
        g.add("b")
        assert is_acyclic(g)

    def test_chain(self) -> None:
        assert is_acyclic(_graph(("a", "b"), ("b", "c")))

    def test_self_loop(self) -> None:
        assert not is_acyclic(_graph(("a", "a")))

    def test_two_cycle(self) -> None:
        assert not is_acyclic(_graph(("a", "b"), ("b", "a")))

    def test_longer_cycle(self) -> None:
        assert not is_acyclic(_graph(("a", "b"), ("b", "c"), ("c", "a")))

    def test_diamond_is_acyclic(self) -> None:
        # Reaching d twice through finished branches is not a cycle
        assert is_acyclic(_graph(("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")))

    def test_cycle_reachable_from_later_root(self) -> None:
        assert not is_acyclic(_graph(("a", "b"), ("x", "y"), ("y", "z"), ("z", "y")))

    def test_method_matches_function(self) -> None:
        g = _graph(("a", "b"), ("b", "a"))
        assert g.is_acyclic() is False
        g.remove_edge("b", "a")
        assert g.is_acyclic() is True

    def test_verdict_independent_of_ordering(self) -> None:
        edges = [("d", "c", 0), ("c", "b", 1), ("b", "a", 2), ("a", "c", 3)]
        assert not MapDigraph().update(edges).is_acyclic()
        assert not MapDigraph.sorted_by().update(edges).is_acyclic()

    def test_deep_chain_does_not_recurse(self) -> None:
        g = MapDigraph()
        for i in range(5000):
            g.put(i, i + 1, None)
        assert is_acyclic(g)
        g.put(5000, 0, None)
        assert not is_acyclic(g)

    def test_unhashable_vertices_in_sorted_digraph(self) -> None:
        g = MapDigraph.sorted_by()
        g.put([1], [2], "x")
        g.put([2], [3], "y")
        assert g.is_acyclic()
        assert is_acyclic(UnmodifiableDigraph(g))
        g.put([3], [1], "z")
        assert not g.is_acyclic()

    def test_unhashable_vertices_with_sort_key(self) -> None:
        g = MapDigraph.sorted_by(key=lambda vertex: vertex["id"])
        g.put({"id": 2}, {"id": 1}, None)
        assert g.is_acyclic()
        g.put({"id": 1}, {"id": 1}, None)
        assert not g.is_acyclic()


class TestTopologicalSort:
    def test_empty_graph(self) -> None:
        assert topological_sort(MapDigraph()) == []

    def test_single_vertex(self) -> None:
        g = MapDigraph()
        g.add("a")
        assert topological_sort(g) == ["a"]

    def test_linear_chain(self) -> None:
        assert topological_sort(_graph(("a", "b"), ("b", "c"))) == ["a", "b", "c"]

    def test_diamond(self) -> None:
        result = topological_sort(_graph(("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")))
        assert result[0] == "a"
        assert result[-1] == "d"
        assert result.index("b") < result.index("d")
        assert result.index("c") < result.index("d")

    def test_ties_follow_iteration_order(self) -> None:
        g = MapDigraph.sorted_by()
        g.update([("b", "c", None), ("a", "c", None)])
        assert topological_sort(g) == ["a", "b", "c"]

    def test_cycle_detection(self) -> None:
        with pytest.raises(ValueError, match="Cycle"):
            topological_sort(_graph(("a", "b"), ("b", "a")))

    def test_self_loop_detection(self) -> None:
        with pytest.raises(ValueError, match="Cycle"):
            topological_sort(_graph(("a", "a")))

    def test_works_with_tuples(self) -> None:
        g = MapDigraph()
        g.put(("a", 1), ("b", 2), None)
        assert topological_sort(g) == [("a", 1), ("b", 2)]

    def test_unhashable_vertices_in_sorted_digraph(self) -> None:
        g = MapDigraph.sorted_by()
        g.update([([2], [3], None), ([1], [3], None), ([3], [4], None)])
        assert topological_sort(g) == [[1], [2], [3], [4]]
        g.put([4], [1], None)
        with pytest.raises(ValueError, match="Cycle"):
            topological_sort(g)


class TestIsEquivalent:
    def test_ignores_ordering(self) -> None:
        edges = [("b", "a", 1), ("a", "c", 2)]
        assert is_equivalent(MapDigraph().update(edges), MapDigraph.sorted_by().update(edges))

    def test_different_payloads(self) -> None:
        first = _graph(("a", "b"))
        second = MapDigraph().update([("a", "b", 42)])
        assert not is_equivalent(first, second)
        assert is_equivalent(first, second, compare_edges=False)

    def test_different_vertices(self) -> None:
        first = _graph(("a", "b"))
        second = _graph(("a", "b"))
        second.add("c")
        assert not is_equivalent(first, second)

    def test_different_edges_same_counts(self) -> None:
        assert not is_equivalent(_graph(("a", "b"), ("b", "a")), _graph(("a", "b"), ("a", "a")))

    def test_same_instance(self) -> None:
        g = _graph(("a", "b"))
        assert is_equivalent(g, g)
