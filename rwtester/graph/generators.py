"""Structural graph generators: complete, tree, random and scale-free.

All generators produce undirected, unweighted graphs whose vertices are
named "0", "1", ... in creation order. Randomized generators take an
explicit numpy Generator so callers control reproducibility.
"""

import logging
import re

import numpy as np

from rwtester.errors import InvalidConfigurationError, PreconditionError
from rwtester.graph.builder import GraphBuilder
from rwtester.graph.types import Graph

log = logging.getLogger(__name__)

# Generator spec strings accepted on the command line.
SPEC_PATTERNS = {
    "scale_free": re.compile(r"SF(\d+)-(\d+)"),
    "tree": re.compile(r"T(\d+)-(\d+)"),
    "complete": re.compile(r"K(\d+)"),
    "random": re.compile(r"R(\d+)-(\d+)"),
}


def _require_non_negative(**params: int) -> None:
    for name, value in params.items():
        if value < 0:
            raise PreconditionError(f"{name} must be >= 0, got {value}")


def complete_graph(n: int) -> Graph:
    """Complete graph K_n."""
    _require_non_negative(n=n)
    builder = GraphBuilder(directed=False, weighted=False)
    for i in range(n):
        builder.add_vertex(str(i))
    for i in range(n):
        for j in range(i + 1, n):
            builder.add_edge(str(i), str(j))
    return builder.build()


def tree_graph(depth: int, arity: int) -> Graph:
    """Full arity-ary tree rooted at "0" with the given depth.

    A depth of 0 yields the root alone; each level multiplies the number of
    vertices by arity.
    """
    _require_non_negative(depth=depth)
    if arity < 1:
        raise PreconditionError(f"arity must be >= 1, got {arity}")
    builder = GraphBuilder(directed=False, weighted=False)
    builder.add_vertex("0")
    level = ["0"]
    counter = 1
    for _ in range(depth):
        next_level = []
        for parent in level:
            for _ in range(arity):
                child = str(counter)
                counter += 1
                builder.add_edge(parent, child)
                next_level.append(child)
        level = next_level
    return builder.build()


def random_graph(n: int, edges: int, rng: np.random.Generator) -> Graph:
    """Random graph with a fixed number of distinct undirected edges.

    The edge count is capped at n(n-1)/2. Edges are drawn uniformly among
    unordered vertex pairs without self-loops.
    """
    _require_non_negative(n=n, edges=edges)
    builder = GraphBuilder(directed=False, weighted=False)
    for i in range(n):
        builder.add_vertex(str(i))
    if n < 2:
        return builder.build()

    max_edges = n * (n - 1) // 2
    if edges > max_edges:
        log.warning("Requested %d edges, capping at %d for %d vertices", edges, max_edges, n)
        edges = max_edges

    pairs: set[tuple[int, int]] = set()
    while len(pairs) < edges:
        a, b = rng.choice(n, size=2, replace=False)
        pairs.add((min(a, b), max(a, b)))
    for a, b in sorted(pairs):
        builder.add_edge(str(a), str(b))
    return builder.build()


def scale_free_graph(n: int, connect: int, rng: np.random.Generator) -> Graph:
    """Scale-free graph grown by preferential attachment.

    Vertex p links to min(connect, p) distinct earlier vertices, each picked
    with probability proportional to its current degree. While all earlier
    vertices still have degree 0 the pick is uniform.
    """
    _require_non_negative(n=n, connect=connect)
    builder = GraphBuilder(directed=False, weighted=False)
    degrees = np.zeros(n, dtype=np.int64)
    for p in range(n):
        builder.add_vertex(str(p))
        k = min(connect, p)
        if k == 0:
            continue
        existing = degrees[:p]
        total = existing.sum()
        if total == 0:
            probs = None
        else:
            probs = existing / total
            # Not enough vertices with nonzero degree to draw k distinct ones.
            if np.count_nonzero(existing) < k:
                probs = (existing + 1) / (total + p)
        targets = rng.choice(p, size=k, replace=False, p=probs)
        for t in targets:
            builder.add_edge(str(p), str(t))
            degrees[t] += 1
        degrees[p] += k
    return builder.build()


def generate_from_spec(spec: str, rng: np.random.Generator) -> Graph:
    """Generate a graph from a spec string.

    Recognized forms: K<n> (complete), T<arity>-<depth> (tree),
    R<vertices>-<edges> (random), SF<connect>-<vertices> (scale-free).

    Raises:
        InvalidConfigurationError: If spec matches none of the forms.
    """
    m = SPEC_PATTERNS["scale_free"].fullmatch(spec)
    if m:
        connect, n = int(m.group(1)), int(m.group(2))
        log.info("Generating scale-free graph (connect=%d, vertices=%d)", connect, n)
        return scale_free_graph(n, connect, rng)
    m = SPEC_PATTERNS["tree"].fullmatch(spec)
    if m:
        arity, depth = int(m.group(1)), int(m.group(2))
        log.info("Generating tree (arity=%d, depth=%d)", arity, depth)
        return tree_graph(depth, arity)
    m = SPEC_PATTERNS["complete"].fullmatch(spec)
    if m:
        n = int(m.group(1))
        log.info("Generating complete graph (vertices=%d)", n)
        return complete_graph(n)
    m = SPEC_PATTERNS["random"].fullmatch(spec)
    if m:
        n, edges = int(m.group(1)), int(m.group(2))
        log.info("Generating random graph (vertices=%d, edges=%d)", n, edges)
        return random_graph(n, edges, rng)
    raise InvalidConfigurationError(f"Unrecognized generator spec: {spec!r}")
