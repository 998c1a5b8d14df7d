"""Breadth-first reachability check run before every walk session.

BFS labels each vertex with its hop distance from the start vertex and
records the BFS tree in the parent field. The resulting coverage tells the
walk manager whether a requested coverage or target is achievable at all.
"""

import logging
from collections import deque
from dataclasses import dataclass

from rwtester.graph.types import Graph

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReachabilityReport:
    """Outcome of a BFS from one start vertex.

    Distances stay on the graph's vertices (state.bfs_distance); the report
    only keeps the counts and the set of reached names.
    """

    start: str
    reached: int  # vertices discovered, including start
    total: int  # vertices in the graph
    max_distance: int
    reached_names: frozenset[str]

    @property
    def coverage(self) -> int:
        """Percentage of vertices reachable from start, truncated."""
        return int(self.reached / self.total * 100)

    @property
    def is_connected(self) -> bool:
        """True if every vertex is reachable from start."""
        return self.reached == self.total

    def is_reachable(self, name: str) -> bool:
        return name in self.reached_names


def run_bfs(graph: Graph, start: str) -> ReachabilityReport:
    """Label vertices with their BFS distance from start.

    Resets bfs_distance and parent on every vertex, then explores outgoing
    adjacency. Undirected graphs store both directions, so this also covers
    them.

    Args:
        graph: Graph to explore. Vertex state is mutated in place.
        start: Name of the origin vertex.

    Returns:
        ReachabilityReport for start.

    Raises:
        VertexNotFoundError: If start is not in the graph.
    """
    origin = graph.vertex(start)
    graph.reset_bfs_state()

    origin.state.bfs_distance = 0
    reached = {origin.name}
    max_distance = 0
    queue = deque([origin])
    while queue:
        v = queue.popleft()
        distance = v.state.bfs_distance + 1
        for n in v.neighbours:
            if n.name in reached:
                continue
            n.state.bfs_distance = distance
            n.state.parent = v.name
            reached.add(n.name)
            max_distance = distance
            queue.append(n)

    report = ReachabilityReport(
        start=start,
        reached=len(reached),
        total=graph.vertex_count,
        max_distance=max_distance,
        reached_names=frozenset(reached),
    )
    log.debug(
        "BFS from %r reached %d/%d vertices (%d%%), max distance %d",
        start, report.reached, report.total, report.coverage, max_distance,
    )
    return report
