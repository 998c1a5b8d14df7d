"""Graph model, text format, generators, writers and BFS reachability."""

from rwtester.graph.bfs import ReachabilityReport, run_bfs
from rwtester.graph.builder import GraphBuilder
from rwtester.graph.degrees import (
    DegreeKind,
    degree_distribution,
    degree_range,
    graph_info,
    max_bfs_distance,
    save_graph_analysis,
    vertex_degree,
)
from rwtester.graph.generators import (
    complete_graph,
    generate_from_spec,
    random_graph,
    scale_free_graph,
    tree_graph,
)
from rwtester.graph.loader import load_graph, parse_graph, parse_line
from rwtester.graph.types import INFINITY, Graph, TraversalState, Vertex
from rwtester.graph.writers import (
    format_gml,
    format_text,
    read_npz,
    write_gml,
    write_npz,
    write_text,
)

__all__ = [
    "INFINITY",
    "DegreeKind",
    "Graph",
    "GraphBuilder",
    "ReachabilityReport",
    "TraversalState",
    "Vertex",
    "complete_graph",
    "degree_distribution",
    "degree_range",
    "format_gml",
    "format_text",
    "generate_from_spec",
    "graph_info",
    "load_graph",
    "max_bfs_distance",
    "parse_graph",
    "parse_line",
    "random_graph",
    "read_npz",
    "run_bfs",
    "save_graph_analysis",
    "scale_free_graph",
    "tree_graph",
    "vertex_degree",
    "write_gml",
    "write_npz",
    "write_text",
]
