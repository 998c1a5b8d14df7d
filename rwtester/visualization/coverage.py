"""Percentage-cover curve: time needed to discover each share of the graph."""

import matplotlib.pyplot as plt
import numpy as np

from rwtester.analysis.aggregation import RandomWalkResult
from rwtester.visualization.style import PALETTE, REFERENCE_COLOR


def plot_percentage_cover(
    result: RandomWalkResult,
    run_results: list[RandomWalkResult] | None = None,
    title: str = "Percentage cover",
) -> plt.Figure:
    """Plot discovered percentage against walk time.

    Args:
        result: Averaged result; drawn as the main curve.
        run_results: Optional per-run results drawn as faint background curves.
        title: Axes title.

    Returns:
        The matplotlib Figure.
    """
    fig, ax = plt.subplots()
    percents = np.arange(len(result.percentage_cover))

    for r in run_results or []:
        ax.step(r.percentage_cover, percents, where="post",
                color=REFERENCE_COLOR, linewidth=0.5, alpha=0.4)

    ax.step(result.percentage_cover, percents, where="post",
            color=PALETTE[0], linewidth=2, label="Average")
    ax.set_xlabel("Time (visits)")
    ax.set_ylabel("Vertices discovered (%)")
    ax.set_ylim(0, 100)
    ax.set_xlim(left=0)
    ax.set_title(title)
    if run_results:
        ax.legend()
    return fig
