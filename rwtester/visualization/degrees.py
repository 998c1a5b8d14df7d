"""Degree-bucketed walk statistics plots."""

import matplotlib.pyplot as plt

from rwtester.analysis.aggregation import METRICS, RandomWalkResult
from rwtester.graph.degrees import degree_kinds
from rwtester.visualization.style import KIND_COLORS, PALETTE

METRIC_LABELS = {
    "visited": "Average visit count",
    "time": "Average first-visit time",
    "time_length": "First-visit time / BFS distance",
}


def plot_degree_table(
    result: RandomWalkResult,
    metric: str,
    log_scale: bool = False,
) -> plt.Figure:
    """Plot one metric against degree, one series per degree kind.

    Args:
        result: Walk result to plot.
        metric: One of "visited", "time", "time_length".
        log_scale: Use log-log axes, useful for scale-free graphs.

    Returns:
        The matplotlib Figure.
    """
    if metric not in METRICS:
        raise ValueError(f"Unknown metric {metric!r}, expected one of {METRICS}")
    fig, ax = plt.subplots()
    for kind in degree_kinds(result.directed):
        table = result.table(metric, kind)
        if not table:
            continue
        degrees = list(table)
        values = [table[d] for d in degrees]
        ax.plot(degrees, values, marker="o", markersize=3, linewidth=1.2,
                color=KIND_COLORS[kind.value], label=kind.value.replace("_", " "))
    if log_scale:
        ax.set_xscale("log")
        ax.set_yscale("log")
    ax.set_xlabel("Degree")
    ax.set_ylabel(METRIC_LABELS[metric])
    ax.set_title(f"{METRIC_LABELS[metric]} by degree")
    ax.legend()
    return fig


def plot_length_tables(result: RandomWalkResult) -> plt.Figure:
    """Visit count and first-visit time against BFS distance, side by side."""
    fig, (ax_visited, ax_time) = plt.subplots(1, 2, figsize=(12, 4.5))
    for ax, table, label, color in (
        (ax_visited, result.length_visited, METRIC_LABELS["visited"], PALETTE[0]),
        (ax_time, result.length_time, METRIC_LABELS["time"], PALETTE[3]),
    ):
        distances = list(table)
        ax.bar(distances, [table[d] for d in distances], color=color)
        ax.set_xlabel("BFS distance from start")
        ax.set_ylabel(label)
    fig.suptitle("Walk statistics by distance")
    fig.tight_layout()
    return fig

