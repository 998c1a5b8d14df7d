"""Per-run statistics and cross-run averaging of walk results."""

from rwtester.analysis.aggregation import (
    METRICS,
    RandomWalkResult,
    analyze_walk,
    average_results,
    full_range,
)

__all__ = [
    "METRICS",
    "RandomWalkResult",
    "analyze_walk",
    "average_results",
    "full_range",
]
