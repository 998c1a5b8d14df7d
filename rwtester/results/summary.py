"""JSON run summary with schema validation.

Uses a plain validation function (not jsonschema) that returns a list of
error strings, checked before anything is written.
"""

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rwtester.analysis.aggregation import RandomWalkResult
from rwtester.config.experiment import ExperimentConfig
from rwtester.config.hashing import config_hash, walk_config_hash
from rwtester.reproducibility.git_hash import get_git_hash
from rwtester.results.experiment_id import generate_experiment_id
from rwtester.walk.manager import WalkSession

SCHEMA_VERSION = "1.0"

REQUIRED_TOP_FIELDS = {
    "schema_version",
    "experiment_id",
    "timestamp",
    "description",
    "tags",
    "config",
    "reachability",
    "runs",
    "result",
}

REQUIRED_REACHABILITY_FIELDS = {"start", "reached", "total", "coverage"}
REQUIRED_RUN_FIELDS = {"seed", "time", "visited_vertices", "elapsed_s"}


def _table_to_json(table: dict[int, int]) -> dict[str, int]:
    return {str(k): int(v) for k, v in table.items()}


def result_to_dict(result: RandomWalkResult) -> dict[str, Any]:
    """JSON-friendly view of a result; table keys become strings."""
    return {
        "directed": result.directed,
        "tables": {name: _table_to_json(t) for name, t in result.tables().items()},
        "percentage_cover": [int(t) for t in result.percentage_cover],
    }


def build_summary(session: WalkSession, config: ExperimentConfig) -> dict[str, Any]:
    """Assemble the summary dict for a finished session."""
    report = session.reachability
    return {
        "schema_version": SCHEMA_VERSION,
        "experiment_id": generate_experiment_id(config),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "description": config.description,
        "tags": list(config.tags),
        "config": asdict(config),
        "reachability": {
            "start": report.start,
            "reached": report.reached,
            "total": report.total,
            "coverage": report.coverage,
            "max_distance": report.max_distance,
        },
        "runs": [
            {
                "label": run.label,
                "seed": run.seed,
                "time": run.time,
                "visited_vertices": run.visited_vertices,
                "elapsed_s": round(elapsed, 6),
            }
            for run, elapsed in zip(session.runs, session.run_times)
        ],
        "master_seed": session.master_seed,
        "result": result_to_dict(session.result),
        "metadata": {
            "code_hash": get_git_hash(),
            "config_hash": config_hash(config),
            "walk_config_hash": walk_config_hash(config),
        },
    }


def validate_summary(summary: dict[str, Any]) -> list[str]:
    """Check a summary dict against the schema.

    Returns:
        Error strings; an empty list means the summary is valid.
    """
    errors: list[str] = []

    missing = REQUIRED_TOP_FIELDS - set(summary.keys())
    if missing:
        errors.append(f"Missing required top-level fields: {sorted(missing)}")

    if "schema_version" in summary and not isinstance(summary["schema_version"], str):
        errors.append("schema_version must be a string")
    if "tags" in summary and not isinstance(summary["tags"], list):
        errors.append("tags must be a list")
    if "config" in summary and not isinstance(summary["config"], dict):
        errors.append("config must be a dict")

    if "timestamp" in summary:
        ts = summary["timestamp"]
        if not isinstance(ts, str):
            errors.append("timestamp must be a string")
        else:
            try:
                datetime.fromisoformat(ts)
            except ValueError:
                errors.append("timestamp must be in ISO 8601 format")

    reach = summary.get("reachability")
    if reach is not None:
        if not isinstance(reach, dict):
            errors.append("reachability must be a dict")
        else:
            for name in sorted(REQUIRED_REACHABILITY_FIELDS - set(reach)):
                errors.append(f"reachability missing field: {name}")

    runs = summary.get("runs")
    if runs is not None:
        if not isinstance(runs, list) or not runs:
            errors.append("runs must be a non-empty list")
        else:
            for i, run in enumerate(runs):
                for name in sorted(REQUIRED_RUN_FIELDS - set(run)):
                    errors.append(f"runs[{i}] missing field: {name}")

    result = summary.get("result")
    if result is not None:
        if not isinstance(result, dict):
            errors.append("result must be a dict")
        else:
            cover = result.get("percentage_cover")
            if not isinstance(cover, list) or len(cover) != 101:
                errors.append("result.percentage_cover must be a list of 101 values")
            elif any(b < a for a, b in zip(cover, cover[1:])):
                errors.append("result.percentage_cover must be non-decreasing")
            if not isinstance(result.get("tables"), dict):
                errors.append("result.tables must be a dict")

    return errors


def write_summary(summary: dict[str, Any], path: str | Path) -> Path:
    """Validate and write a summary as JSON.

    Raises:
        ValueError: If the summary fails validation.
    """
    errors = validate_summary(summary)
    if errors:
        raise ValueError(
            "Summary validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(summary, f, indent=2)
    return path


def load_summary(path: str | Path) -> dict[str, Any]:
    """Load and validate a summary file.

    Raises:
        ValueError: If the loaded summary fails validation.
    """
    path = Path(path)
    with open(path) as f:
        summary = json.load(f)
    errors = validate_summary(summary)
    if errors:
        raise ValueError(
            f"Summary validation failed for {path}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )
    return summary
