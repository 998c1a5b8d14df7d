"""Static figures for walk sessions: cover curves and degree statistics."""

from rwtester.visualization.coverage import plot_percentage_cover
from rwtester.visualization.degrees import plot_degree_table, plot_length_tables
from rwtester.visualization.render import render_session
from rwtester.visualization.style import apply_style, save_figure

__all__ = [
    "apply_style",
    "plot_degree_table",
    "plot_length_tables",
    "plot_percentage_cover",
    "render_session",
    "save_figure",
]
