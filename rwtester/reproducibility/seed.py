"""Seed management for walk sessions.

A session draws one seed per run from a master generator. Passing the same
master seed reproduces every run; passing None draws the master from OS
entropy, so independent sessions stay uncorrelated.
"""

import numpy as np

SEED_BOUND = 2**63


def spawn_run_seeds(master_seed: int | None, runs: int) -> list[int]:
    """Per-run seeds derived from master_seed.

    Args:
        master_seed: Master seed, or None for OS entropy.
        runs: Number of seeds to draw.

    Returns:
        List of runs non-negative int seeds.
    """
    if runs < 0:
        raise ValueError(f"runs must be >= 0, got {runs}")
    master_rng = np.random.default_rng(master_seed)
    return [int(s) for s in master_rng.integers(0, SEED_BOUND, size=runs)]


def fresh_seed() -> int:
    """A master seed drawn from OS entropy, for recording in results."""
    return int(np.random.SeedSequence().entropy % SEED_BOUND)

