# pul_arena/paths.py
from __future__ import annotations

import os
from pathlib import Path

# Generated CSVs and transcripts go here unless PUL_RESULTS_DIR points elsewhere.
DEFAULT_RESULTS_DIR = Path.cwd() / "results"


def results_dir() -> Path:
    override = os.environ.get("PUL_RESULTS_DIR")
    return Path(override) if override else DEFAULT_RESULTS_DIR


def ensure_results_dir() -> Path:
    """Create the results directory if it does not exist and return it."""
    path = results_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def resolve_results_path(path_like: str | Path) -> Path:
    """
    Resolve a user-specified path into the results directory.

    Absolute paths are returned unchanged. Relative paths are anchored inside
    the results directory so runs consistently write outputs in one place.
    """
    path = Path(path_like)
    if path.is_absolute():
        return path
    return ensure_results_dir() / path
