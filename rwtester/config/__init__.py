"""Experiment configuration: frozen dataclasses, JSON serialization, hashing."""

from rwtester.config.defaults import DEFAULT_CONFIG
from rwtester.config.experiment import (
    CONVERT_FORMATS,
    TASKS,
    WALK_MODES,
    ExperimentConfig,
    GraphSourceConfig,
    OutputConfig,
    WalkConfig,
)
from rwtester.config.hashing import config_hash, walk_config_hash
from rwtester.config.serialization import (
    config_from_dict,
    config_from_json,
    config_to_dict,
    config_to_json,
    load_config,
)

__all__ = [
    "CONVERT_FORMATS",
    "DEFAULT_CONFIG",
    "TASKS",
    "WALK_MODES",
    "ExperimentConfig",
    "GraphSourceConfig",
    "OutputConfig",
    "WalkConfig",
    "config_from_dict",
    "config_from_json",
    "config_hash",
    "config_to_dict",
    "config_to_json",
    "load_config",
    "walk_config_hash",
]
