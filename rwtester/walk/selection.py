"""Neighbour-selection strategies shared by directed and undirected walks.

Every strategy takes the current vertex and a numpy Generator and returns
the chosen neighbour, or None when the vertex has no neighbours. Degree
weighted strategies are parameterized by a key function so the out-degree
and in-degree variants share one implementation.
"""

from collections.abc import Callable
from functools import partial

import numpy as np

from rwtester.graph.types import Vertex
from rwtester.walk.types import WalkMode

DegreeKey = Callable[[Vertex], int]
Strategy = Callable[[Vertex, np.random.Generator], Vertex | None]


def out_degree_key(vertex: Vertex) -> int:
    return vertex.degree


def in_degree_key(vertex: Vertex) -> int:
    return vertex.in_degree


def _pick(neighbours: list[Vertex], probabilities: np.ndarray, rnd: float) -> Vertex:
    """Return the first neighbour whose cumulative probability reaches rnd.

    Floating-point rounding can leave the final cumulative sum a hair below
    1.0; draws past it land on the last neighbour.
    """
    cumulative = np.cumsum(probabilities)
    index = int(np.searchsorted(cumulative, rnd, side="left"))
    return neighbours[min(index, len(neighbours) - 1)]


def select_uniform(vertex: Vertex, rng: np.random.Generator) -> Vertex | None:
    """Every neighbour with equal probability."""
    neighbours = vertex.neighbours
    if not neighbours:
        return None
    return neighbours[int(rng.integers(len(neighbours)))]


def select_weighted(
    vertex: Vertex, rng: np.random.Generator, key: DegreeKey
) -> Vertex | None:
    """Neighbour n with probability (key(n) + 1) / sum over all neighbours."""
    neighbours = vertex.neighbours
    if not neighbours:
        return None
    weights = np.array([key(n) + 1 for n in neighbours], dtype=np.float64)
    return _pick(neighbours, weights / weights.sum(), rng.random())


def select_reverse_weighted(
    vertex: Vertex, rng: np.random.Generator, key: DegreeKey
) -> Vertex | None:
    """Neighbour n with probability proportional to S - (key(n) + 1).

    S is the sum of key + 1 over all neighbours. A single neighbour is
    returned directly since its reverse weight would be zero.
    """
    neighbours = vertex.neighbours
    if not neighbours:
        return None
    if len(neighbours) == 1:
        return neighbours[0]
    weights = np.array([key(n) + 1 for n in neighbours], dtype=np.float64)
    reverse = weights.sum() - weights
    return _pick(neighbours, reverse / reverse.sum(), rng.random())


_STRATEGIES: dict[WalkMode, Strategy] = {
    WalkMode.CLASSIC: select_uniform,
    WalkMode.OUT_DEGREE: partial(select_weighted, key=out_degree_key),
    WalkMode.REVERSE_OUT_DEGREE: partial(select_reverse_weighted, key=out_degree_key),
    WalkMode.IN_DEGREE: partial(select_weighted, key=in_degree_key),
    WalkMode.REVERSE_IN_DEGREE: partial(select_reverse_weighted, key=in_degree_key),
}


def strategy_for(mode: WalkMode | str) -> Strategy:
    """Selection function for a walk mode (or its string value)."""
    return _STRATEGIES[WalkMode(mode)]
