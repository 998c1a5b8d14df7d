"""Tests for the visualization module.

Tests cover: style application, dual-format save, cover curves, degree
plots and the session render orchestrator.
"""

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from rwtester.graph.generators import complete_graph, tree_graph
from rwtester.graph.loader import parse_graph
from rwtester.walk import WalkManager


def _make_session(directed: bool = False):
    if directed:
        graph = parse_graph(["[a] -> [b]", "[b] -> [c]", "[c] -> [a]", "[a] -> [c]"])
        return WalkManager(graph, seed=1).run_cover(2, "a", 100)
    return WalkManager(tree_graph(2, 2), seed=1).run_cover(2, "0", 100)


# ── Style and Save Tests ──────────────────────────────────────────────


def test_apply_style_sets_whitegrid():
    """apply_style() sets seaborn whitegrid and publication rcParams."""
    from rwtester.visualization.style import apply_style

    apply_style()
    assert plt.rcParams["savefig.dpi"] == 300
    assert plt.rcParams["axes.grid"] is True


def test_save_figure_creates_png_and_svg(tmp_path):
    """save_figure creates both PNG and SVG, closes figure."""
    from rwtester.visualization.style import save_figure

    fig, ax = plt.subplots()
    ax.plot([1, 2, 3], [1, 2, 3])
    fig_num = fig.number

    png_path, svg_path = save_figure(fig, tmp_path / "sub", "test_plot")

    assert png_path.exists()
    assert svg_path.exists()
    assert png_path.stat().st_size > 0
    assert fig_num not in plt.get_fignums()


# ── Plot Tests ────────────────────────────────────────────────────────


def test_percentage_cover_plot():
    """Cover curve has one background line per run plus the average."""
    from rwtester.visualization.coverage import plot_percentage_cover

    session = _make_session()
    fig = plot_percentage_cover(session.result, session.run_results)
    ax = fig.axes[0]
    assert len(ax.lines) == len(session.run_results) + 1
    assert ax.get_ylim() == (0, 100)
    plt.close(fig)


@pytest.mark.parametrize("metric", ["visited", "time", "time_length"])
def test_degree_plot_undirected(metric):
    from rwtester.visualization.degrees import plot_degree_table

    fig = plot_degree_table(_make_session().result, metric)
    assert len(fig.axes[0].lines) == 1
    plt.close(fig)


def test_degree_plot_directed_has_three_series():
    from rwtester.visualization.degrees import plot_degree_table

    fig = plot_degree_table(_make_session(directed=True).result, "visited", log_scale=True)
    ax = fig.axes[0]
    assert len(ax.lines) == 3
    assert ax.get_xscale() == "log"
    plt.close(fig)


def test_degree_plot_unknown_metric():
    from rwtester.visualization.degrees import plot_degree_table

    with pytest.raises(ValueError):
        plot_degree_table(_make_session().result, "speed")


def test_length_plot():
    from rwtester.visualization.degrees import plot_length_tables

    fig = plot_length_tables(_make_session().result)
    assert len(fig.axes) == 2
    plt.close(fig)


# ── Render Orchestrator ───────────────────────────────────────────────


def test_render_session_writes_all_figures(tmp_path):
    from rwtester.visualization import render_session

    files = render_session(_make_session(), tmp_path / "figures", prefix="t_")
    names = {p.name for p in files}
    assert "t_coverage.png" in names
    assert "t_degree_time_length.svg" in names
    assert "t_length.png" in names
    assert len(files) == 10
    assert not plt.get_fignums()


def test_render_session_survives_failing_plot(tmp_path, monkeypatch, caplog):
    """A failing plot is logged and skipped, the rest still render."""
    from rwtester.visualization import render as render_mod

    def broken(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(render_mod, "plot_length_tables", broken)
    with caplog.at_level("WARNING", logger="rwtester.visualization.render"):
        files = render_mod.render_session(_make_session(), tmp_path)
    assert len(files) == 8
    assert any("Failed to generate length" in r.getMessage() for r in caplog.records)
