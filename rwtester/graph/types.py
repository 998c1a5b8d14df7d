"""Graph data structures shared by the loader, generators, BFS and walks.

A Graph owns its Vertex objects. Topology is fixed once the graph is built;
only the per-vertex TraversalState record changes afterwards, and only as a
side effect of BFS or a random walk.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
import scipy.sparse

from rwtester.errors import VertexError, VertexNotFoundError

# Sentinel for "not visited yet" and "not reached by BFS".
INFINITY = -1


@dataclass(slots=True)
class TraversalState:
    """Scratch fields a traversal writes on each vertex.

    parent holds the name of the predecessor vertex, a key into the owning
    graph's vertex table, and is rebound on every traversal.
    """

    visit_count: int = 0
    first_visit_time: int = INFINITY
    bfs_distance: int = INFINITY
    parent: str | None = None

    @property
    def discovered(self) -> bool:
        return self.first_visit_time != INFINITY

    @property
    def reached(self) -> bool:
        return self.bfs_distance != INFINITY

    def reset_walk(self) -> None:
        self.visit_count = 0
        self.first_visit_time = INFINITY
        self.parent = None

    def reset_bfs(self) -> None:
        self.bfs_distance = INFINITY
        self.parent = None


class Vertex:
    """A named vertex with an ordered adjacency list.

    Equality and hashing use the name only. weights stays None until the
    first weighted edge is added, after which it runs parallel to neighbours.
    """

    __slots__ = ("name", "neighbours", "weights", "in_degree", "state", "_names")

    def __init__(self, name: str) -> None:
        self.name = name
        self.neighbours: list[Vertex] = []
        self.weights: list[int] | None = None
        self.in_degree = 0
        self.state = TraversalState()
        self._names: set[str] = set()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"Vertex({self.name!r}, degree={self.degree})"

    @property
    def degree(self) -> int:
        """Number of outgoing adjacency entries."""
        return len(self.neighbours)

    def total_degree(self, directed: bool) -> int:
        """Out-degree plus in-degree on directed graphs, plain degree otherwise."""
        if directed:
            return self.degree + self.in_degree
        return self.degree

    def has_neighbour(self, vertex: Vertex) -> bool:
        return vertex.name in self._names

    def add_neighbour(self, vertex: Vertex, weight: int | None = None) -> bool:
        """Append an edge to vertex.

        Args:
            vertex: The neighbour to link to.
            weight: Edge weight, or None for an unweighted edge.

        Returns:
            True if the edge was added, False if it was already present.

        Raises:
            VertexError: If the edge mixes weighted and unweighted adjacency.
        """
        if self.neighbours:
            if weight is None and self.weights is not None:
                raise VertexError(
                    f"Vertex {self.name!r} has weighted edges, got an unweighted one"
                )
            if weight is not None and self.weights is None:
                raise VertexError(
                    f"Vertex {self.name!r} has unweighted edges, got a weighted one"
                )
        if vertex.name in self._names:
            return False
        self.neighbours.append(vertex)
        self._names.add(vertex.name)
        if weight is not None:
            if self.weights is None:
                self.weights = []
            self.weights.append(weight)
        return True


class Graph:
    """Directed or undirected graph over uniquely named vertices.

    Undirected edges are stored symmetrically, so edge_count is half the
    sum of adjacency lengths.
    """

    def __init__(
        self, directed: bool, weighted: bool, vertices: dict[str, Vertex]
    ) -> None:
        self._directed = directed
        self._weighted = weighted
        self._vertices = vertices
        self.vertex_count = len(vertices)
        degree_sum = sum(v.degree for v in vertices.values())
        self.edge_count = degree_sum if directed else degree_sum // 2

    def __contains__(self, name: object) -> bool:
        return name in self._vertices

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices.values())

    def __len__(self) -> int:
        return self.vertex_count

    def __repr__(self) -> str:
        kind = "directed" if self._directed else "undirected"
        return (
            f"Graph({kind}, weighted={self._weighted}, "
            f"vertices={self.vertex_count}, edges={self.edge_count})"
        )

    def is_directed(self) -> bool:
        return self._directed

    def is_weighted(self) -> bool:
        return self._weighted

    def vertices(self) -> list[Vertex]:
        """Vertices in insertion order."""
        return list(self._vertices.values())

    def names(self) -> list[str]:
        return list(self._vertices)

    def vertex(self, name: str) -> Vertex:
        """Look up a vertex by name.

        Raises:
            VertexNotFoundError: If no vertex carries that name.
        """
        try:
            return self._vertices[name]
        except KeyError:
            raise VertexNotFoundError(name) from None

    def edges(self) -> Iterator[tuple[str, str, int | None]]:
        """Yield (source, target, weight) once per edge.

        Undirected edges are reported once, from the endpoint inserted first.
        """
        order = {name: i for i, name in enumerate(self._vertices)}
        for v in self._vertices.values():
            for i, n in enumerate(v.neighbours):
                if not self._directed and order[n.name] < order[v.name]:
                    continue
                weight = v.weights[i] if v.weights is not None else None
                yield v.name, n.name, weight

    def reset_walk_state(self) -> None:
        for v in self._vertices.values():
            v.state.reset_walk()

    def reset_bfs_state(self) -> None:
        for v in self._vertices.values():
            v.state.reset_bfs()

    def copy(self) -> Graph:
        """Deep copy with walk fields reset.

        BFS distances are carried over so a copy taken after a reachability
        check can still be bucketed by distance.
        """
        clones = {name: Vertex(name) for name in self._vertices}
        for name, v in self._vertices.items():
            clone = clones[name]
            for i, n in enumerate(v.neighbours):
                weight = v.weights[i] if v.weights is not None else None
                clone.add_neighbour(clones[n.name], weight)
            clone.in_degree = v.in_degree
            clone.state.bfs_distance = v.state.bfs_distance
        return Graph(self._directed, self._weighted, clones)

    def to_adjacency_matrix(self) -> tuple[scipy.sparse.csr_matrix, list[str]]:
        """Sparse adjacency matrix (weights, or 1 for unweighted edges).

        Returns:
            Tuple of (csr matrix of shape (n, n), vertex names in row order).
        """
        names = self.names()
        index = {name: i for i, name in enumerate(names)}
        rows: list[int] = []
        cols: list[int] = []
        data: list[int] = []
        for v in self._vertices.values():
            for i, n in enumerate(v.neighbours):
                rows.append(index[v.name])
                cols.append(index[n.name])
                data.append(v.weights[i] if v.weights is not None else 1)
        n = len(names)
        adjacency = scipy.sparse.csr_matrix(
            (np.asarray(data, dtype=np.int64), (rows, cols)), shape=(n, n)
        )
        return adjacency, names
