"""Graph serialization: the text format, GML, and scipy sparse npz.

The text writer is the inverse of rwtester.graph.loader. GML output can be
shaded by the averaged walk counters (visit count or first-visit time) so a
session's average graph can be inspected in a graph viewer.
"""

import json
import logging
from pathlib import Path

import numpy as np
import scipy.sparse

from rwtester.errors import InvalidConfigurationError
from rwtester.graph.builder import GraphBuilder
from rwtester.graph.types import Graph, Vertex

log = logging.getLogger(__name__)

SHADES = ("visits", "time")


def _flag(value: bool) -> str:
    return "true" if value else "false"


def format_text(graph: Graph) -> str:
    """Render graph in the line-oriented text format.

    Vertices without outgoing edges are written as lone declarations, then
    every edge once, sorted.
    """
    header = (
        f"# Directed: {_flag(graph.is_directed())}\n"
        f"# Weighted: {_flag(graph.is_weighted())}\n"
        f"# Vertices: {graph.vertex_count}\n"
        f"# Edges: {graph.edge_count}\n\n"
    )
    lone = [f"[{v.name}]\n" for v in graph if v.degree == 0]
    op = "->" if graph.is_directed() else "--"
    lines = set()
    for source, target, weight in graph.edges():
        suffix = f" {weight}" if weight is not None else ""
        lines.add(f"[{source}] {op} [{target}]{suffix}\n")
    return header + "".join(lone) + "".join(sorted(lines))


def write_text(graph: Graph, path: str | Path) -> Path:
    path = Path(path)
    path.write_text(format_text(graph), encoding="utf-8")
    log.info("Wrote %s", path)
    return path


def _value(vertex: Vertex, shade: str) -> int:
    if shade == "visits":
        return vertex.state.visit_count
    return vertex.state.first_visit_time


def _grey(value: int, lo: int, hi: int) -> str:
    """Hex grey from white (lo) to black (hi)."""
    level = 0 if hi == lo else int(255 / (hi - lo) * (value - lo))
    channel = f"{255 - level:02x}"
    return channel * 3


def format_gml(graph: Graph, shade: str | None = None) -> str:
    """Render graph as GML.

    Args:
        graph: Graph to render.
        shade: None for plain output, "visits" to shade nodes by visit count,
            or "time" to shade by first-visit time.

    Raises:
        InvalidConfigurationError: If shade is not recognized.
    """
    if shade is not None and shade not in SHADES:
        raise InvalidConfigurationError(f"Unknown GML shade {shade!r}, expected one of {SHADES}")

    out = ["graph [\n"]
    if graph.is_directed():
        out.append("    directed 1\n")

    if shade is not None:
        values = [_value(v, shade) for v in graph]
        lo, hi = (min(values), max(values)) if values else (0, 0)

    for v in graph:
        out.append("\n    node [\n")
        out.append(f'        name "{v.name}"\n')
        if shade is None:
            out.append(f'        label "{v.name}"\n')
        else:
            value = _value(v, shade)
            out.append(f'        label "{v.name} ({value})"\n')
            out.append("        graphics [\n")
            out.append('            type "ellipse"\n')
            out.append('            outline "#000000"\n')
            out.append(f'            fill "#{_grey(value, lo, hi)}"\n')
            out.append("        ]\n")
            out.append('        LabelGraphics [\n            color "#ff0000"\n        ]\n')
        out.append("    ]\n")

    for source, target, weight in graph.edges():
        out.append("\n    edge [\n")
        out.append(f'        source "{source}"\n')
        out.append(f'        target "{target}"\n')
        if weight is not None:
            out.append(f'        label "{weight}"\n')
        if graph.is_directed():
            out.append('        graphics [\n            arrow "last"\n        ]\n')
        out.append("    ]\n")

    out.append("]\n")
    return "".join(out)


def write_gml(graph: Graph, path: str | Path, shade: str | None = None) -> Path:
    path = Path(path)
    path.write_text(format_gml(graph, shade), encoding="utf-8")
    log.info("Wrote %s", path)
    return path


def write_npz(graph: Graph, path: str | Path) -> Path:
    """Save the adjacency matrix as npz with a JSON sidecar.

    The sidecar (same stem, .json) stores vertex names in row order and the
    directed/weighted flags.

    Returns:
        Path to the npz file.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    adjacency, names = graph.to_adjacency_matrix()
    scipy.sparse.save_npz(str(path), adjacency)
    metadata = {
        "directed": graph.is_directed(),
        "weighted": graph.is_weighted(),
        "names": names,
    }
    with open(path.with_suffix(".json"), "w") as f:
        json.dump(metadata, f, indent=2)
    log.info("Wrote %s (%d vertices, %d nonzeros)", path, len(names), adjacency.nnz)
    return path


def read_npz(path: str | Path) -> Graph:
    """Inverse of write_npz."""
    path = Path(path)
    adjacency = scipy.sparse.load_npz(str(path)).tocoo()
    with open(path.with_suffix(".json")) as f:
        metadata = json.load(f)
    names = metadata["names"]
    builder = GraphBuilder(directed=metadata["directed"], weighted=metadata["weighted"])
    for name in names:
        builder.add_vertex(name)
    order = np.lexsort((adjacency.col, adjacency.row))
    for i in order:
        weight = int(adjacency.data[i]) if metadata["weighted"] else None
        builder.add_edge(names[adjacency.row[i]], names[adjacency.col[i]], weight)
    return builder.build()
