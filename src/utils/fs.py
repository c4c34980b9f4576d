"""Filesystem helpers for safe file writes and YAML loading.

Provides:
    - Atomic writes: tmp file → fsync → rename (no partially written textures)
    - YAML load with safe_load
    - Directory creation with exist_ok semantics

An existing target is replaced in one rename, so re-running the generator
overwrites the previous texture instead of appending to it or failing.

All paths use pathlib.Path for cross-platform compatibility.

Usage:
    from src.utils import fs
    fs.atomic_write_bytes("arc-distance-field.tga", encoded)
    data = fs.load_yaml("configs/arc_distance_field.v1.yaml")

Note: Module named `fs.py` to avoid shadowing stdlib `io`.
"""

import os
from pathlib import Path
from typing import Any, Dict, Union

import yaml


def ensure_dir(p: Union[str, Path]) -> Path:
    """Create directory if it doesn't exist, return Path object.

    Parameters
    ----------
    p : Union[str, Path]
        Directory path

    Returns
    -------
    Path
        Path object (guaranteed to exist)
    """
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def atomic_write_bytes(
    path: Union[str, Path],
    data: bytes,
    tmp_suffix: str = ".tmp"
) -> Path:
    """Write bytes to file atomically (tmp → fsync → rename).

    Parameters
    ----------
    path : Union[str, Path]
        Target file path; an existing file is replaced
    data : bytes
        Data to write
    tmp_suffix : str
        Temporary file suffix, default ".tmp"

    Returns
    -------
    Path
        The written path

    Raises
    ------
    OSError
        Propagated unchanged (permission denied, disk full, bad path).
        The temporary file is removed before re-raising.

    Notes
    -----
    Uses same directory for tmp file to ensure atomic rename on same filesystem.
    The file handle is closed on every exit path by the ``with`` block.
    """
    path = Path(path)
    ensure_dir(path.parent)

    tmp_path = path.with_name(path.name + tmp_suffix)

    try:
        with open(tmp_path, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

        # Atomic rename (overwrites existing file)
        tmp_path.replace(path)
    except BaseException:
        if tmp_path.exists():
            tmp_path.unlink()
        raise

    return path


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Load YAML file safely.

    Parameters
    ----------
    path : Union[str, Path]
        YAML file path

    Returns
    -------
    Dict[str, Any]
        Parsed YAML content (None for an empty file)

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    yaml.YAMLError
        If YAML parsing fails

    Notes
    -----
    Uses safe_load to prevent arbitrary code execution.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e

