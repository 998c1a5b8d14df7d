"""Render every figure for a finished walk session.

Each plot is attempted independently so one failing figure does not block
the others; failures are logged and skipped.
"""

import logging
from pathlib import Path

from rwtester.analysis.aggregation import METRICS
from rwtester.visualization.coverage import plot_percentage_cover
from rwtester.visualization.degrees import plot_degree_table, plot_length_tables
from rwtester.visualization.style import apply_style, save_figure
from rwtester.walk.manager import WalkSession

log = logging.getLogger(__name__)


def render_session(
    session: WalkSession,
    figures_dir: str | Path,
    prefix: str = "",
    log_scale: bool = False,
) -> list[Path]:
    """Write cover, degree and distance figures as PNG + SVG.

    Args:
        session: Finished walk session.
        figures_dir: Output directory, created if absent.
        prefix: Prepended to every figure name.
        log_scale: Draw degree plots on log-log axes.

    Returns:
        Paths of all files written.
    """
    apply_style()
    figures_dir = Path(figures_dir)
    generated: list[Path] = []

    def attempt(name: str, build) -> None:
        try:
            fig = build()
            generated.extend(save_figure(fig, figures_dir, prefix + name))
            log.info("Generated: %s", name)
        except Exception as e:
            log.warning("Failed to generate %s: %s", name, e)

    attempt("coverage", lambda: plot_percentage_cover(session.result, session.run_results))
    for metric in METRICS:
        attempt(
            f"degree_{metric}",
            lambda metric=metric: plot_degree_table(session.result, metric, log_scale),
        )
    attempt("length", lambda: plot_length_tables(session.result))
    return generated
