"""Statistical reduction of walk runs into degree and distance tables.

Each completed walk leaves per-vertex counters on the graph. analyze_walk
buckets those counters by vertex degree (total, and for directed graphs
also in- and out-degree) and by BFS distance from the start vertex, then
averages each bucket. Vertices a run never reached are left out of the
buckets rather than counted as zero. average_results then combines the
per-run tables of a session into one result.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, fields

import numpy as np

from rwtester.errors import InvalidConfigurationError
from rwtester.graph.degrees import (
    DegreeKind,
    degree_kinds,
    degree_range,
    max_bfs_distance,
    vertex_degree,
)
from rwtester.graph.types import INFINITY, Graph, Vertex

log = logging.getLogger(__name__)

Table = dict[int, int]

METRICS = ("visited", "time", "time_length")


@dataclass(frozen=True)
class RandomWalkResult:
    """Averaged statistics of one walk run or of a whole session.

    Degree tables map degree -> average metric; the in/out variants are None
    for undirected graphs. Length tables map BFS distance -> average metric.
    percentage_cover[p] is the time at which p percent of the vertices had
    been discovered.
    """

    directed: bool
    degree_visited: Table
    degree_time: Table
    degree_time_length: Table
    length_visited: Table
    length_time: Table
    percentage_cover: np.ndarray  # int64, length 101
    in_degree_visited: Table | None = None
    in_degree_time: Table | None = None
    in_degree_time_length: Table | None = None
    out_degree_visited: Table | None = None
    out_degree_time: Table | None = None
    out_degree_time_length: Table | None = None

    def table(self, metric: str, kind: DegreeKind = DegreeKind.TOTAL) -> Table | None:
        """Degree table for metric ("visited", "time" or "time_length")."""
        if metric not in METRICS:
            raise ValueError(f"Unknown metric {metric!r}, expected one of {METRICS}")
        return getattr(self, f"{kind.value}_{metric}")

    def tables(self) -> dict[str, Table]:
        """Every populated table by field name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name not in ("directed", "percentage_cover")
            and getattr(self, f.name) is not None
        }


def _bucket_average(
    vertices: list[Vertex],
    key: Callable[[Vertex], int],
    lo: int,
    hi: int,
    contribution: Callable[[Vertex], tuple[int, int] | None],
) -> Table:
    """Average contributions per key over the integer range lo..hi.

    contribution returns (numerator, denominator) for a vertex, or None to
    exclude it. Buckets whose denominator is 0 are dropped.
    """
    sums = {k: [0, 0] for k in range(lo, hi + 1)}
    for v in vertices:
        c = contribution(v)
        if c is None:
            continue
        bucket = sums.get(key(v))
        if bucket is None:
            continue
        bucket[0] += c[0]
        bucket[1] += c[1]
    return {k: int(num / den) for k, (num, den) in sums.items() if den != 0}


def _visited(v: Vertex) -> tuple[int, int] | None:
    if v.state.visit_count == 0:
        return None
    return v.state.visit_count, 1


def _time(v: Vertex) -> tuple[int, int] | None:
    if v.state.first_visit_time == INFINITY:
        return None
    return v.state.first_visit_time, 1


def _time_length(v: Vertex) -> tuple[int, int] | None:
    if v.state.first_visit_time == INFINITY or v.state.bfs_distance == INFINITY:
        return None
    return v.state.first_visit_time, v.state.bfs_distance


_CONTRIBUTIONS = {"visited": _visited, "time": _time, "time_length": _time_length}


def analyze_walk(graph: Graph, percentage_cover: np.ndarray) -> RandomWalkResult:
    """Reduce the counters of the walk that just ran on graph.

    Expects BFS distances from the walk's start vertex to be present on the
    vertices (run_bfs before walking).

    Args:
        graph: Graph carrying the run's TraversalState counters.
        percentage_cover: The run's 101-slot cover curve.

    Returns:
        RandomWalkResult for this single run.
    """
    directed = graph.is_directed()
    vertices = graph.vertices()
    values: dict[str, Table] = {}

    for kind in degree_kinds(directed):
        lo, hi = degree_range(graph, kind)

        def degree_of(v: Vertex, kind: DegreeKind = kind) -> int:
            return vertex_degree(v, directed, kind)

        for metric, contribution in _CONTRIBUTIONS.items():
            values[f"{kind.value}_{metric}"] = _bucket_average(
                vertices, degree_of, lo, hi, contribution
            )

    max_length = max_bfs_distance(graph)

    def distance_of(v: Vertex) -> int:
        return v.state.bfs_distance

    values["length_visited"] = _bucket_average(vertices, distance_of, 0, max_length, _visited)
    values["length_time"] = _bucket_average(vertices, distance_of, 0, max_length, _time)

    return RandomWalkResult(
        directed=directed,
        percentage_cover=np.asarray(percentage_cover, dtype=np.int64).copy(),
        **values,
    )


def _average_tables(tables: Sequence[Table]) -> Table:
    """Average tables key by key, adding value / N as each table is seen."""
    n = len(tables)
    running: dict[int, float] = {}
    for table in tables:
        for k, v in table.items():
            running[k] = running.get(k, 0.0) + v / n
    return {k: int(running[k]) for k in sorted(running)}


def average_results(results: Sequence[RandomWalkResult]) -> RandomWalkResult:
    """Combine per-run results into one.

    Keys missing from some runs still appear, averaged over all N runs. The
    cover curve is averaged index by index.

    Raises:
        InvalidConfigurationError: If results is empty or mixes orientations.
    """
    if not results:
        raise InvalidConfigurationError("Cannot average an empty list of results")
    directed = results[0].directed
    if any(r.directed != directed for r in results):
        raise InvalidConfigurationError("Cannot average results of directed and undirected walks")

    n = len(results)
    averaged: dict[str, Table | None] = {}
    for f in fields(RandomWalkResult):
        if f.name in ("directed", "percentage_cover"):
            continue
        tables = [getattr(r, f.name) for r in results]
        averaged[f.name] = None if tables[0] is None else _average_tables(tables)

    cover = np.zeros(len(results[0].percentage_cover), dtype=np.float64)
    for r in results:
        cover += r.percentage_cover / n

    log.debug("Averaged %d run results", n)
    return RandomWalkResult(
        directed=directed,
        percentage_cover=cover.astype(np.int64),
        **averaged,
    )


def full_range(table: Table, max_key: int | None = None) -> list[tuple[int, int]]:
    """Rows 0..max_key with keys missing from table reported as 0.

    max_key defaults to the largest key in table.
    """
    if max_key is None:
        max_key = max(table, default=-1)
    return [(k, table.get(k, 0)) for k in range(max_key + 1)]
