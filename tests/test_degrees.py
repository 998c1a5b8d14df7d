"""Tests for degree accessors and the graph analysis report."""

from rwtester.graph.degrees import (
    DegreeKind,
    degree_distribution,
    degree_kinds,
    degree_range,
    graph_info,
    max_bfs_distance,
    save_graph_analysis,
    vertex_degree,
)
from rwtester.graph.bfs import run_bfs
from rwtester.graph.generators import tree_graph
from rwtester.graph.loader import parse_graph


def _make_directed():
    return parse_graph(["[a] -> [b]", "[a] -> [c]", "[b] -> [c]"])


class TestDegrees:
    def test_undirected_kinds_collapse(self) -> None:
        graph = tree_graph(1, 3)
        root = graph.vertex("0")
        for kind in DegreeKind:
            assert vertex_degree(root, False, kind) == 3
        assert degree_kinds(False) == (DegreeKind.TOTAL,)

    def test_directed_kinds(self) -> None:
        graph = _make_directed()
        c = graph.vertex("c")
        assert vertex_degree(c, True, DegreeKind.IN) == 2
        assert vertex_degree(c, True, DegreeKind.OUT) == 0
        assert vertex_degree(c, True, DegreeKind.TOTAL) == 2
        assert len(degree_kinds(True)) == 3

    def test_degree_range(self) -> None:
        graph = _make_directed()
        assert degree_range(graph, DegreeKind.OUT) == (0, 2)
        assert degree_range(graph, DegreeKind.TOTAL) == (2, 2)

    def test_degree_distribution(self) -> None:
        assert degree_distribution(tree_graph(2, 2)) == {1: 4, 2: 1, 3: 2}

    def test_max_bfs_distance(self) -> None:
        graph = tree_graph(3, 2)
        run_bfs(graph, "0")
        assert max_bfs_distance(graph) == 3


class TestGraphAnalysis:
    def test_graph_info(self) -> None:
        info = graph_info(_make_directed())
        assert info.startswith("GRAPH INFO FILE\n")
        assert "Directed: true" in info
        assert "Vertices: 3" in info
        assert "Edges: 3" in info
        assert "In degree (min/max): 0/2" in info

    def test_save_directed(self, tmp_path) -> None:
        written = save_graph_analysis(_make_directed(), tmp_path / "g")
        names = sorted(p.name for p in written)
        assert names == ["g_deg.txt", "g_in.txt", "g_info.txt", "g_out.txt"]
        assert (tmp_path / "g_in.txt").read_text() == "0 1\n1 1\n2 1\n"

    def test_save_undirected(self, tmp_path) -> None:
        written = save_graph_analysis(tree_graph(1, 2), tmp_path / "t")
        assert sorted(p.name for p in written) == ["t_deg.txt", "t_info.txt"]
        assert (tmp_path / "t_deg.txt").read_text() == "1 2\n2 1\n"
