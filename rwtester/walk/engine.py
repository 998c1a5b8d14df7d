"""Random walk engine with coverage and path-finding termination.

A walk moves from vertex to neighbour, recording on each vertex how often it
was visited and when it was first discovered. In discover mode the walk also
credits every neighbour of the current vertex as discovered without moving
to it. Directed and undirected walks share one core; the variants only
differ in which selection modes they accept and in their labels.
"""

import logging
from abc import ABC, abstractmethod

import numpy as np

from rwtester.errors import (
    InvalidConfigurationError,
    PreconditionError,
    WalkStalledError,
)
from rwtester.graph.types import INFINITY, Graph, Vertex
from rwtester.walk.selection import strategy_for
from rwtester.walk.types import WalkMode, WalkRun

log = logging.getLogger(__name__)

COVER_SLOTS = 101  # percentages 0..100
DEFAULT_VERBOSE_INTERVAL = 1_000_000
DEFAULT_MAX_STEPS = 50_000_000


def update_percentage_cover(cover: np.ndarray) -> np.ndarray:
    """Forward-fill unset (zero) slots with the latest time seen so far.

    Turns the raw first-reach times into a non-decreasing curve. Modifies
    cover in place and returns it.
    """
    current = 0
    for p in range(len(cover)):
        if cover[p] > current:
            current = cover[p]
        if cover[p] == 0:
            cover[p] = current
    return cover


class RandomWalk(ABC):
    """Base walk driver bound to one graph.

    Args:
        graph: Graph to walk. Vertex traversal state is overwritten by runs.
        mode: Neighbour-selection strategy.
        discover: Also credit the current vertex's neighbours as discovered.
        verbose: Log progress every verbose_interval time steps.
        verbose_interval: Progress logging period in time steps.
        max_steps: Upper bound on visits per run before giving up.
    """

    orientation = ""

    def __init__(
        self,
        graph: Graph,
        mode: WalkMode | str = WalkMode.CLASSIC,
        discover: bool = False,
        verbose: bool = False,
        verbose_interval: int = DEFAULT_VERBOSE_INTERVAL,
        max_steps: int = DEFAULT_MAX_STEPS,
    ) -> None:
        if verbose_interval <= 0:
            raise PreconditionError(f"verbose_interval must be > 0, got {verbose_interval}")
        if max_steps <= 0:
            raise PreconditionError(f"max_steps must be > 0, got {max_steps}")
        self.graph = graph
        self.mode = WalkMode(mode)
        self._check_graph(graph, self.mode)
        self.discover = discover
        self.verbose = verbose
        self.verbose_interval = verbose_interval
        self.max_steps = max_steps

        self._select = strategy_for(self.mode)
        self._rng = np.random.default_rng()
        self._total = graph.vertex_count
        self.time = 0
        self.visited_vertices = 0
        self.percentage_cover = np.zeros(COVER_SLOTS, dtype=np.int64)
        self.label = ""
        self._seed: int | None = None
        # Coverage percent that stops the active run.
        self._coverage = 100

    @abstractmethod
    def _check_graph(self, graph: Graph, mode: WalkMode) -> None:
        """Reject a graph orientation or mode this variant cannot walk."""

    def run_cover(self, start: str, coverage: int, seed: int | None = None) -> WalkRun:
        """Walk from start until coverage percent of the vertices are discovered.

        Also stops once every vertex is discovered.

        Args:
            start: Name of the start vertex.
            coverage: Percentage (0..100) of vertices to discover.
            seed: Seed for this run's random source; OS entropy if None.

        Raises:
            VertexNotFoundError: If start is not in the graph.
            WalkStalledError: On a dead end or when max_steps is exceeded.
        """
        if not 0 <= coverage <= 100:
            raise PreconditionError(f"coverage must be in 0..100, got {coverage}")
        v = self.graph.vertex(start)
        self._reset(seed)
        self.label = f"{self.orientation}-CO"
        self._coverage = coverage
        while True:
            if self._visit(v):
                break
            v = self._step(v)
        update_percentage_cover(self.percentage_cover)
        return self._finish()

    def run_find_path(self, start: str, target: str, seed: int | None = None) -> WalkRun:
        """Walk from start until the walk stands on target.

        The current vertex is visited before the target check, so a walk with
        start == target makes exactly one visit. Discover mode credits target
        when it is seen as a neighbour but does not end the walk.

        Raises:
            VertexNotFoundError: If start or target is not in the graph.
            WalkStalledError: On a dead end or when max_steps is exceeded.
        """
        v = self.graph.vertex(start)
        goal = self.graph.vertex(target)
        self._reset(seed)
        self.label = f"{self.orientation}-FP"
        self._coverage = COVER_SLOTS  # never reached; only the target stops
        while True:
            self._visit(v)
            if v is goal:
                break
            v = self._step(v)
        update_percentage_cover(self.percentage_cover)
        return self._finish()

    def _reset(self, seed: int | None) -> None:
        self.graph.reset_walk_state()
        self._rng = np.random.default_rng(seed)
        self._seed = seed
        self.time = 0
        self.visited_vertices = 0
        self.percentage_cover = np.zeros(COVER_SLOTS, dtype=np.int64)

    def _finish(self) -> WalkRun:
        log.debug(
            "%s finished at time %d with %d/%d vertices discovered",
            self.label, self.time, self.visited_vertices, self._total,
        )
        return WalkRun(
            label=self.label,
            time=self.time,
            visited_vertices=self.visited_vertices,
            percentage_cover=self.percentage_cover.copy(),
            seed=self._seed,
        )

    def _credit(self, v: Vertex) -> None:
        """Visit bookkeeping: first discovery time and visit count."""
        if v.state.first_visit_time == INFINITY:
            v.state.first_visit_time = self.time
            self.visited_vertices += 1
        v.state.visit_count += 1

    def _percent(self) -> int:
        return int(self.visited_vertices / self._total * 100)

    def _record_cover(self) -> bool:
        """Note the time the current percentage was first reached.

        Returns:
            True if the cover stop condition is satisfied.
        """
        percent = self._percent()
        if self.percentage_cover[percent] == 0:
            self.percentage_cover[percent] = self.time
        return percent >= self._coverage or self.visited_vertices == self._total

    def _visit(self, v: Vertex) -> bool:
        """Process the current vertex and advance time.

        Returns:
            True if the cover stop condition is satisfied.
        """
        self._credit(v)
        stop = False
        if self.discover:
            for n in v.neighbours:
                self._credit(n)
            stop = self._record_cover()
        self.time += 1
        if self.verbose and self.time % self.verbose_interval == 0:
            log.info(
                "%s time: %d vertices: %d / %d coverage: %d%%",
                self.label, self.time, self.visited_vertices, self._total, self._percent(),
            )
        return self._record_cover() or stop

    def _step(self, v: Vertex) -> Vertex:
        if self.time >= self.max_steps:
            raise WalkStalledError(
                f"{self.label} walk exceeded {self.max_steps} steps with "
                f"{self.visited_vertices}/{self._total} vertices discovered",
                self.time,
            )
        nxt = self._select(v, self._rng)
        if nxt is None:
            raise WalkStalledError(
                f"{self.label} walk reached dead end {v.name!r} at time {self.time}",
                self.time,
            )
        nxt.state.parent = v.name
        return nxt


class DirectedRandomWalk(RandomWalk):
    """Walk along outgoing edges of a directed graph. Accepts every mode."""

    orientation = "D"

    def _check_graph(self, graph: Graph, mode: WalkMode) -> None:
        if not graph.is_directed():
            raise InvalidConfigurationError("DirectedRandomWalk requires a directed graph")


class UndirectedRandomWalk(RandomWalk):
    """Walk over an undirected graph. In-degree modes are rejected."""

    orientation = "U"

    def _check_graph(self, graph: Graph, mode: WalkMode) -> None:
        if graph.is_directed():
            raise InvalidConfigurationError("UndirectedRandomWalk requires an undirected graph")
        if mode.requires_directed:
            raise InvalidConfigurationError(
                f"Walk mode {mode.value!r} is only valid for directed graphs"
            )


def create_random_walk(
    graph: Graph, mode: WalkMode | str = WalkMode.CLASSIC, **kwargs
) -> RandomWalk:
    """Walk variant matching the graph's orientation."""
    if graph.is_directed():
        return DirectedRandomWalk(graph, mode, **kwargs)
    return UndirectedRandomWalk(graph, mode, **kwargs)
