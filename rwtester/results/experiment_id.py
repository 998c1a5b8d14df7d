"""Experiment ID generation with a scannable parameter slug."""

import re
from datetime import datetime, timezone

from rwtester.config.experiment import ExperimentConfig

_UNSAFE = re.compile(r"[^A-Za-z0-9.-]+")


def graph_label(config: ExperimentConfig) -> str:
    """Short name of the graph source: the generator spec or the file stem."""
    if config.graph.generate:
        return config.graph.generate
    name = config.graph.input_path or "graph"
    name = name.replace("\\", "/").rsplit("/", 1)[-1]
    return name.removesuffix(".graph")


def generate_experiment_id(config: ExperimentConfig) -> str:
    """Experiment ID encoding graph, task, mode, runs and time.

    Format: {graph}_{task}_{mode}[_disc]_x{runs}_{YYYYMMDD}_{HHMMSS}
    Example: K10_cover_classic_x10_20261019_143012
    """
    ts = datetime.now(timezone.utc)
    parts = [
        _UNSAFE.sub("-", graph_label(config)),
        config.walk.task,
        config.walk.mode,
    ]
    if config.walk.discover:
        parts.append("disc")
    parts.append(f"x{config.walk.runs}")
    parts.append(ts.strftime("%Y%m%d_%H%M%S"))
    return "_".join(parts)
