"""JSON round-trip for experiment configs."""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from dacite import Config as DaciteConfig
from dacite import from_dict

from rwtester.config.experiment import ExperimentConfig

# strict rejects unknown keys; cast turns JSON arrays back into tuples.
_DACITE = DaciteConfig(cast=[tuple], check_types=True, strict=True)


def config_to_dict(config: ExperimentConfig) -> dict[str, Any]:
    return asdict(config)


def config_from_dict(d: dict[str, Any]) -> ExperimentConfig:
    """Build an ExperimentConfig from a plain dict, rejecting unknown keys."""
    return from_dict(data_class=ExperimentConfig, data=d, config=_DACITE)


def config_to_json(config: ExperimentConfig) -> str:
    """Sorted keys, 2-space indent, so saved configs diff cleanly."""
    return json.dumps(asdict(config), indent=2, sort_keys=True)


def config_from_json(json_str: str) -> ExperimentConfig:
    return config_from_dict(json.loads(json_str))


def load_config(path: str | Path) -> ExperimentConfig:
    """Read an ExperimentConfig from a JSON file."""
    return config_from_json(Path(path).read_text())
