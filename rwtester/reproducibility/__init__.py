"""Reproducibility infrastructure: run seeds and code provenance tracking."""

from rwtester.reproducibility.git_hash import get_git_hash
from rwtester.reproducibility.seed import fresh_seed, spawn_run_seeds

__all__ = [
    "fresh_seed",
    "get_git_hash",
    "spawn_run_seeds",
]
