"""Multi-run walk sessions with BFS precheck and result averaging.

A session runs the same walk configuration N times on one graph. Before
any walk starts, BFS from the start vertex verifies that the requested
coverage or target is reachable. Each run is reduced to a RandomWalkResult,
and the runs are averaged into one. Alongside, an "average graph" copy of
the input accumulates per-vertex visit counts and first-visit times for
visualization.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from rwtester.analysis.aggregation import RandomWalkResult, analyze_walk, average_results
from rwtester.errors import (
    PreconditionError,
    UnreachableCoverageError,
    UnreachableTargetError,
)
from rwtester.graph.bfs import ReachabilityReport, run_bfs
from rwtester.graph.types import Graph
from rwtester.reproducibility.seed import fresh_seed, spawn_run_seeds
from rwtester.walk.engine import (
    DEFAULT_MAX_STEPS,
    DEFAULT_VERBOSE_INTERVAL,
    RandomWalk,
    create_random_walk,
)
from rwtester.walk.types import WalkMode, WalkRun, WalkTask

log = logging.getLogger(__name__)


@dataclass
class WalkSession:
    """Everything a finished session produced."""

    task: WalkTask
    result: RandomWalkResult  # averaged over all runs
    run_results: list[RandomWalkResult]
    runs: list[WalkRun]
    average_graph: Graph
    reachability: ReachabilityReport
    master_seed: int
    run_times: list[float] = field(default_factory=list)  # wall seconds per run


def _truncating_div(value: int, n: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(value) // n
    return q if value >= 0 else -q


class WalkManager:
    """Runs repeated walks of one configuration against one graph.

    The walk variant is chosen from the graph's orientation; an in-degree
    mode on an undirected graph fails here, before any work is done.

    Args:
        graph: Graph to walk. Its traversal state is overwritten.
        mode: Neighbour-selection strategy.
        discover: Enable discover mode.
        seed: Master seed for the per-run seeds; OS entropy if None.
        verbose: Log walk progress.
        verbose_interval: Progress logging period in time steps.
        max_steps: Per-run visit limit.
    """

    def __init__(
        self,
        graph: Graph,
        mode: WalkMode | str = WalkMode.CLASSIC,
        discover: bool = False,
        seed: int | None = None,
        verbose: bool = False,
        verbose_interval: int = DEFAULT_VERBOSE_INTERVAL,
        max_steps: int = DEFAULT_MAX_STEPS,
    ) -> None:
        self.graph = graph
        self.walk: RandomWalk = create_random_walk(
            graph,
            mode,
            discover=discover,
            verbose=verbose,
            verbose_interval=verbose_interval,
            max_steps=max_steps,
        )
        self.seed = seed

    @property
    def mode(self) -> WalkMode:
        return self.walk.mode

    def run_cover(self, runs: int, start: str, coverage: int) -> WalkSession:
        """Run runs coverage walks from start.

        Raises:
            PreconditionError: If runs < 1 or coverage is outside 0..100.
            VertexNotFoundError: If start is not in the graph.
            UnreachableCoverageError: If BFS shows coverage is unattainable.
            WalkStalledError: If a run cannot make progress.
        """
        self._check_runs(runs)
        if not 0 <= coverage <= 100:
            raise PreconditionError(f"coverage must be in 0..100, got {coverage}")

        log.info("Checking reachable vertices from %r", start)
        report = run_bfs(self.graph, start)
        log.info(
            "Reachable/total vertices: %d/%d, required/possible coverage: %d%%/%d%%",
            report.reached, report.total, coverage, report.coverage,
        )
        if coverage > report.coverage:
            raise UnreachableCoverageError(coverage, report.coverage, start)

        return self._run_session(
            WalkTask.COVER, runs, report,
            lambda seed: self.walk.run_cover(start, coverage, seed=seed),
        )

    def run_find_path(self, runs: int, start: str, target: str) -> WalkSession:
        """Run runs path walks from start to target.

        Raises:
            PreconditionError: If runs < 1.
            VertexNotFoundError: If start or target is not in the graph.
            UnreachableTargetError: If BFS cannot reach target from start.
            WalkStalledError: If a run cannot make progress.
        """
        self._check_runs(runs)
        self.graph.vertex(target)

        log.info("Checking that %r is reachable from %r", target, start)
        report = run_bfs(self.graph, start)
        if not report.is_reachable(target):
            raise UnreachableTargetError(start, target)

        return self._run_session(
            WalkTask.PATH, runs, report,
            lambda seed: self.walk.run_find_path(start, target, seed=seed),
        )

    @staticmethod
    def _check_runs(runs: int) -> None:
        if runs < 1:
            raise PreconditionError(f"runs must be >= 1, got {runs}")

    def _run_session(
        self,
        task: WalkTask,
        runs: int,
        report: ReachabilityReport,
        run_once: Callable[[int], WalkRun],
    ) -> WalkSession:
        master_seed = self.seed if self.seed is not None else fresh_seed()
        seeds = spawn_run_seeds(master_seed, runs)
        log.info(
            "%s walk, mode %s, discover %s, %d runs, master seed %d",
            "Directed" if self.graph.is_directed() else "Undirected",
            self.mode.value, "on" if self.walk.discover else "off", runs, master_seed,
        )

        average_graph = self.graph.copy()
        # Sums start at 0, so a run that never discovers a vertex adds INFINITY (-1).
        for v in average_graph:
            v.state.first_visit_time = 0

        run_results: list[RandomWalkResult] = []
        walk_runs: list[WalkRun] = []
        run_times: list[float] = []
        for i, seed in enumerate(seeds, start=1):
            t0 = time.monotonic()
            walk_run = run_once(seed)
            run_results.append(analyze_walk(self.graph, walk_run.percentage_cover))
            self._accumulate(average_graph)
            elapsed = time.monotonic() - t0
            walk_runs.append(walk_run)
            run_times.append(elapsed)
            log.info(
                "Run %d/%d: time %d, %d vertices discovered (%.2fs)",
                i, runs, walk_run.time, walk_run.visited_vertices, elapsed,
            )

        for v in average_graph:
            v.state.visit_count = _truncating_div(v.state.visit_count, runs)
            v.state.first_visit_time = _truncating_div(v.state.first_visit_time, runs)

        return WalkSession(
            task=task,
            result=average_results(run_results),
            run_results=run_results,
            runs=walk_runs,
            average_graph=average_graph,
            reachability=report,
            master_seed=master_seed,
            run_times=run_times,
        )

    def _accumulate(self, average_graph: Graph) -> None:
        """Add the last run's counters into average_graph; keep its parents."""
        for v in self.graph:
            acc = average_graph.vertex(v.name).state
            acc.visit_count += v.state.visit_count
            acc.first_visit_time += v.state.first_visit_time
            acc.parent = v.state.parent
