"""Random walk engine: selection strategies, walk variants and multi-run sessions."""

from rwtester.walk.engine import (
    DirectedRandomWalk,
    RandomWalk,
    UndirectedRandomWalk,
    create_random_walk,
    update_percentage_cover,
)
from rwtester.walk.manager import WalkManager, WalkSession
from rwtester.walk.selection import (
    in_degree_key,
    out_degree_key,
    select_reverse_weighted,
    select_uniform,
    select_weighted,
    strategy_for,
)
from rwtester.walk.types import WalkMode, WalkRun, WalkTask

__all__ = [
    "DirectedRandomWalk",
    "RandomWalk",
    "UndirectedRandomWalk",
    "WalkManager",
    "WalkMode",
    "WalkRun",
    "WalkSession",
    "WalkTask",
    "create_random_walk",
    "in_degree_key",
    "out_degree_key",
    "select_reverse_weighted",
    "select_uniform",
    "select_weighted",
    "strategy_for",
    "update_percentage_cover",
]
