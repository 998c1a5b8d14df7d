"""Walk modes and per-run records."""

from dataclasses import dataclass
from enum import Enum

import numpy as np


class WalkMode(str, Enum):
    """Neighbour-selection strategy of a random walk.

    Weighted modes favour neighbours by degree + 1; reverse modes favour
    low-degree neighbours instead.
    """

    CLASSIC = "classic"
    OUT_DEGREE = "outdegree"
    REVERSE_OUT_DEGREE = "routdegree"
    IN_DEGREE = "indegree"
    REVERSE_IN_DEGREE = "rindegree"

    @property
    def requires_directed(self) -> bool:
        """In-degree modes only make sense on directed graphs."""
        return self in (WalkMode.IN_DEGREE, WalkMode.REVERSE_IN_DEGREE)


class WalkTask(str, Enum):
    """Termination policy of a walk."""

    COVER = "cover"
    PATH = "path"


@dataclass(frozen=True)
class WalkRun:
    """Counters left by one completed walk.

    Per-vertex counters stay on the graph's TraversalState records. Uses
    frozen=True without slots since it holds a numpy array.
    """

    label: str  # e.g. "U-CO" for an undirected cover walk
    time: int  # number of visits made
    visited_vertices: int  # distinct vertices discovered
    percentage_cover: np.ndarray  # int64 array of length 101
    seed: int | None  # seed the random source was built from
