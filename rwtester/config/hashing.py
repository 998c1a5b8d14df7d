"""Deterministic config hashing, SHA-256 over canonical JSON."""

import hashlib
import json
from dataclasses import asdict
from typing import Any

from rwtester.config.experiment import ExperimentConfig

# Fields that only affect presentation, not the walks themselves.
PRESENTATION_FIELDS = ("description", "tags", "output")


def config_hash(config: Any, exclude: tuple[str, ...] = ()) -> str:
    """First 16 hex characters of the SHA-256 of a dataclass.

    Args:
        config: Any dataclass instance.
        exclude: Top-level field names left out of the hash.
    """
    d = {k: v for k, v in asdict(config).items() if k not in exclude}
    serialized = json.dumps(d, sort_keys=True, ensure_ascii=True, separators=(",", ":"))
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:16]


def walk_config_hash(config: ExperimentConfig) -> str:
    """Hash of everything that determines the walk statistics.

    Two configs differing only in output settings or labels hash equal.
    """
    return config_hash(config, exclude=PRESENTATION_FIELDS)
