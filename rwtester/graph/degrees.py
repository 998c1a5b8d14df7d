"""Degree accessors and degree-distribution reports for a graph."""

import logging
from collections import Counter
from enum import Enum
from pathlib import Path

from rwtester.graph.types import Graph, Vertex

log = logging.getLogger(__name__)


class DegreeKind(Enum):
    """Which degree a statistic is bucketed by.

    On undirected graphs all three kinds collapse to the plain degree.
    """

    TOTAL = "degree"
    IN = "in_degree"
    OUT = "out_degree"


def vertex_degree(vertex: Vertex, directed: bool, kind: DegreeKind) -> int:
    if not directed:
        return vertex.degree
    if kind is DegreeKind.IN:
        return vertex.in_degree
    if kind is DegreeKind.OUT:
        return vertex.degree
    return vertex.degree + vertex.in_degree


def degree_kinds(directed: bool) -> tuple[DegreeKind, ...]:
    """Kinds that carry distinct information for this orientation."""
    if directed:
        return (DegreeKind.TOTAL, DegreeKind.IN, DegreeKind.OUT)
    return (DegreeKind.TOTAL,)


def degree_range(graph: Graph, kind: DegreeKind = DegreeKind.TOTAL) -> tuple[int, int]:
    """(min, max) degree over all vertices, (0, 0) for an empty graph."""
    directed = graph.is_directed()
    values = [vertex_degree(v, directed, kind) for v in graph]
    if not values:
        return 0, 0
    return min(values), max(values)


def max_bfs_distance(graph: Graph) -> int:
    """Largest BFS distance currently recorded on the graph, 0 if none."""
    return max((v.state.bfs_distance for v in graph), default=0)


def degree_distribution(graph: Graph, kind: DegreeKind = DegreeKind.TOTAL) -> dict[int, int]:
    """Map degree -> number of vertices with that degree, sorted by degree."""
    directed = graph.is_directed()
    counts = Counter(vertex_degree(v, directed, kind) for v in graph)
    return dict(sorted(counts.items()))


def graph_info(graph: Graph) -> str:
    """Human-readable summary of the graph's size and degree extremes."""
    lines = [
        "GRAPH INFO FILE",
        "",
        f"Directed: {str(graph.is_directed()).lower()}",
        f"Weighted: {str(graph.is_weighted()).lower()}",
        "",
        f"Vertices: {graph.vertex_count}",
        f"Edges: {graph.edge_count}",
        "",
    ]
    if graph.vertex_count:
        ratio = graph.edge_count / graph.vertex_count
        lines.append(
            f"Edges / Vertices ratio = {ratio} (i.e. average 1 vertex = {ratio} edge[s])"
        )
        lines.append("")
    labels = {
        DegreeKind.TOTAL: "Degree",
        DegreeKind.IN: "In degree",
        DegreeKind.OUT: "Out degree",
    }
    for kind in degree_kinds(graph.is_directed()):
        lo, hi = degree_range(graph, kind)
        lines.append(f"{labels[kind]} (min/max): {lo}/{hi}")
    return "\n".join(lines) + "\n"


def save_graph_analysis(graph: Graph, template: str | Path) -> list[Path]:
    """Write degree distributions and the info summary next to template.

    Files: <template>_deg.txt, plus _in.txt and _out.txt for directed graphs,
    and <template>_info.txt.

    Returns:
        Paths of the files written.
    """
    template = str(template)
    suffixes = {DegreeKind.TOTAL: "_deg", DegreeKind.IN: "_in", DegreeKind.OUT: "_out"}
    written: list[Path] = []
    for kind in degree_kinds(graph.is_directed()):
        path = Path(template + suffixes[kind] + ".txt")
        rows = degree_distribution(graph, kind)
        path.write_text("".join(f"{k} {v}\n" for k, v in rows.items()))
        written.append(path)
    info_path = Path(template + "_info.txt")
    info_path.write_text(graph_info(graph))
    written.append(info_path)
    log.info("Graph analysis written to %s_*.txt", template)
    return written
