"""Tests for the vertex/graph model and GraphBuilder."""

import numpy as np
import pytest

from rwtester.errors import VertexError, VertexNotFoundError
from rwtester.graph.builder import GraphBuilder
from rwtester.graph.types import INFINITY, Graph, TraversalState, Vertex


def _make_path(directed: bool = False) -> Graph:
    builder = GraphBuilder(directed=directed)
    builder.add_edge("a", "b")
    builder.add_edge("b", "c")
    return builder.build()


class TestTraversalState:
    """Tests for the per-vertex scratch record."""

    def test_defaults_are_unvisited(self) -> None:
        state = TraversalState()
        assert state.visit_count == 0
        assert state.first_visit_time == INFINITY
        assert state.bfs_distance == INFINITY
        assert state.parent is None
        assert not state.discovered
        assert not state.reached

    def test_reset_walk_keeps_bfs_distance(self) -> None:
        state = TraversalState(visit_count=3, first_visit_time=2, bfs_distance=1, parent="x")
        state.reset_walk()
        assert state.visit_count == 0
        assert state.first_visit_time == INFINITY
        assert state.parent is None
        assert state.bfs_distance == 1

    def test_reset_bfs(self) -> None:
        state = TraversalState(visit_count=3, bfs_distance=4, parent="x")
        state.reset_bfs()
        assert state.bfs_distance == INFINITY
        assert state.parent is None
        assert state.visit_count == 3


class TestVertex:
    """Tests for adjacency updates on a single vertex."""

    def test_equality_by_name(self) -> None:
        assert Vertex("a") == Vertex("a")
        assert Vertex("a") != Vertex("b")
        assert len({Vertex("a"), Vertex("a")}) == 1

    def test_duplicate_neighbour_ignored(self) -> None:
        a, b = Vertex("a"), Vertex("b")
        assert a.add_neighbour(b)
        assert not a.add_neighbour(b)
        assert a.degree == 1
        assert a.has_neighbour(b)

    def test_weights_parallel_to_neighbours(self) -> None:
        a = Vertex("a")
        a.add_neighbour(Vertex("b"), 5)
        a.add_neighbour(Vertex("c"), 7)
        assert a.weights == [5, 7]

    def test_unweighted_has_no_weights(self) -> None:
        a = Vertex("a")
        a.add_neighbour(Vertex("b"))
        assert a.weights is None

    def test_mixing_weighted_after_unweighted_raises(self) -> None:
        a = Vertex("a")
        a.add_neighbour(Vertex("b"))
        with pytest.raises(VertexError):
            a.add_neighbour(Vertex("c"), 3)

    def test_mixing_unweighted_after_weighted_raises(self) -> None:
        a = Vertex("a")
        a.add_neighbour(Vertex("b"), 3)
        with pytest.raises(VertexError):
            a.add_neighbour(Vertex("c"))

    def test_total_degree(self) -> None:
        a = Vertex("a")
        a.add_neighbour(Vertex("b"))
        a.in_degree = 2
        assert a.total_degree(directed=True) == 3
        assert a.total_degree(directed=False) == 1


class TestGraphBuilder:
    """Tests for incremental graph construction."""

    def test_undirected_edges_stored_both_ways(self) -> None:
        graph = _make_path()
        b = graph.vertex("b")
        assert [n.name for n in b.neighbours] == ["a", "c"]
        assert graph.vertex("a").has_neighbour(b)
        assert graph.edge_count == 2
        assert graph.vertex_count == 3

    def test_directed_edges_bump_in_degree_once(self) -> None:
        builder = GraphBuilder(directed=True)
        assert builder.add_edge("a", "b")
        assert not builder.add_edge("a", "b")
        graph = builder.build()
        assert graph.vertex("b").in_degree == 1
        assert graph.vertex("a").in_degree == 0
        assert graph.vertex("b").degree == 0
        assert graph.edge_count == 1

    def test_unweighted_builder_drops_weight(self) -> None:
        builder = GraphBuilder(weighted=False)
        builder.add_edge("a", "b", 9)
        assert builder.build().vertex("a").weights is None

    def test_weighted_builder_defaults_weight(self) -> None:
        builder = GraphBuilder(weighted=True)
        builder.add_edge("a", "b")
        assert builder.build().vertex("a").weights == [1]

    def test_add_vertex_after_build_raises(self) -> None:
        builder = GraphBuilder()
        builder.add_vertex("a")
        builder.build()
        with pytest.raises(RuntimeError):
            builder.add_vertex("b")

    def test_add_vertex_is_idempotent(self) -> None:
        builder = GraphBuilder()
        first = builder.add_vertex("a")
        assert builder.add_vertex("a") is first
        assert "a" in builder


class TestGraph:
    """Tests for graph lookups, iteration and copies."""

    def test_lookup_missing_vertex(self) -> None:
        graph = _make_path()
        with pytest.raises(VertexNotFoundError, match="No such vertex"):
            graph.vertex("zzz")

    def test_missing_vertex_is_key_error(self) -> None:
        with pytest.raises(KeyError):
            _make_path().vertex("zzz")

    def test_insertion_order(self) -> None:
        graph = _make_path()
        assert graph.names() == ["a", "b", "c"]
        assert [v.name for v in graph] == ["a", "b", "c"]
        assert len(graph) == 3
        assert "a" in graph and "z" not in graph

    def test_undirected_edges_reported_once(self) -> None:
        edges = list(_make_path().edges())
        assert edges == [("a", "b", None), ("b", "c", None)]

    def test_directed_edges(self) -> None:
        edges = list(_make_path(directed=True).edges())
        assert edges == [("a", "b", None), ("b", "c", None)]

    def test_copy_resets_walk_state_and_keeps_distance(self) -> None:
        graph = _make_path()
        v = graph.vertex("b")
        v.state.visit_count = 4
        v.state.first_visit_time = 2
        v.state.bfs_distance = 1
        clone = graph.copy()
        c = clone.vertex("b")
        assert c is not v
        assert c.state.visit_count == 0
        assert c.state.first_visit_time == INFINITY
        assert c.state.bfs_distance == 1
        assert [n.name for n in c.neighbours] == ["a", "c"]
        assert clone.edge_count == graph.edge_count

    def test_copy_neighbours_point_into_copy(self) -> None:
        clone = _make_path().copy()
        assert clone.vertex("a").neighbours[0] is clone.vertex("b")

    def test_reset_walk_state(self) -> None:
        graph = _make_path()
        graph.vertex("a").state.visit_count = 5
        graph.reset_walk_state()
        assert all(v.state.visit_count == 0 for v in graph)

    def test_adjacency_matrix(self) -> None:
        builder = GraphBuilder(directed=True, weighted=True)
        builder.add_edge("a", "b", 4)
        builder.add_edge("b", "c", 2)
        adjacency, names = builder.build().to_adjacency_matrix()
        assert names == ["a", "b", "c"]
        dense = adjacency.toarray()
        expected = np.array([[0, 4, 0], [0, 0, 2], [0, 0, 0]])
        np.testing.assert_array_equal(dense, expected)
