"""Incremental graph construction used by the loader and the generators."""

from rwtester.graph.types import Graph, Vertex


class GraphBuilder:
    """Collects vertices and edges, then freezes them into a Graph.

    Directed edges bump the target's in-degree. Undirected edges are stored
    in both endpoints' adjacency lists. Repeated edges are ignored.
    """

    def __init__(self, directed: bool = False, weighted: bool = False) -> None:
        self.directed = directed
        self.weighted = weighted
        self._vertices: dict[str, Vertex] = {}
        self._built = False

    def __contains__(self, name: str) -> bool:
        return name in self._vertices

    def add_vertex(self, name: str) -> Vertex:
        """Return the vertex called name, creating it on first use."""
        if self._built:
            raise RuntimeError("GraphBuilder.build() was already called")
        vertex = self._vertices.get(name)
        if vertex is None:
            vertex = Vertex(name)
            self._vertices[name] = vertex
        return vertex

    def add_edge(self, source: str, target: str, weight: int | None = None) -> bool:
        """Add an edge between two vertices, creating them as needed.

        An unweighted builder drops the weight. A weighted builder defaults a
        missing weight to 1.

        Returns:
            True if the edge was new.
        """
        if not self.weighted:
            weight = None
        elif weight is None:
            weight = 1
        a = self.add_vertex(source)
        b = self.add_vertex(target)
        if self.directed:
            added = a.add_neighbour(b, weight)
            if added:
                b.in_degree += 1
            return added
        added = a.add_neighbour(b, weight)
        b.add_neighbour(a, weight)
        return added

    def build(self) -> Graph:
        self._built = True
        return Graph(self.directed, self.weighted, self._vertices)
