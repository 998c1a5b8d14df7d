"""Code provenance for run summaries.

The short git SHA is stored with every summary so a set of walk tables can
be traced back to the code that produced it.
"""

import subprocess
from pathlib import Path

UNKNOWN = "unknown"


def get_git_hash(cwd: str | Path | None = None) -> str:
    """git describe name of HEAD, suffixed with "-dirty" for uncommitted changes.

    Without tags in the repository this is the short SHA.

    Args:
        cwd: Directory inside the repository; defaults to the process cwd.

    Returns:
        e.g. "a3f9c1d" or "a3f9c1d-dirty", or "unknown" outside a git
        checkout or without git installed.
    """
    try:
        out = subprocess.check_output(
            ["git", "describe", "--always", "--dirty", "--abbrev=7"],
            cwd=cwd,
            stderr=subprocess.DEVNULL,
        )
    except (subprocess.CalledProcessError, FileNotFoundError, NotADirectoryError):
        return UNKNOWN
    return out.decode().strip() or UNKNOWN
