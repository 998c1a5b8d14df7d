"""Shared figure style for walk plots.

Seaborn whitegrid theme with a colorblind-safe palette, and a save_figure()
helper that writes every figure as both PNG and SVG.
"""

import matplotlib
matplotlib.use("Agg")  # headless rendering

import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path

PALETTE = sns.color_palette("colorblind", n_colors=8)
# One color per degree kind, in DegreeKind order.
KIND_COLORS = {
    "degree": PALETTE[0],
    "in_degree": PALETTE[1],
    "out_degree": PALETTE[2],
}
REFERENCE_COLOR = (0.5, 0.5, 0.5)


def apply_style() -> None:
    """Apply the project matplotlib/seaborn style. Idempotent."""
    sns.set_theme(style="whitegrid")
    plt.rcParams.update({
        "figure.dpi": 150,
        "savefig.dpi": 300,
        "font.size": 10,
        "axes.titlesize": 12,
        "axes.labelsize": 11,
        "legend.fontsize": 9,
        "figure.figsize": (8, 5),
        "svg.fonttype": "none",
    })


def save_figure(fig: plt.Figure, output_dir: Path, name: str) -> tuple[Path, Path]:
    """Save fig as <name>.png and <name>.svg under output_dir, then close it.

    Returns:
        Tuple of (png_path, svg_path).
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    png_path = output_dir / f"{name}.png"
    svg_path = output_dir / f"{name}.svg"
    fig.savefig(png_path, bbox_inches="tight")
    fig.savefig(svg_path, bbox_inches="tight")
    plt.close(fig)
    return png_path, svg_path
