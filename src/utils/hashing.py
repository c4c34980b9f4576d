"""SHA-256 hashing for output provenance.

Provides:
    - sha256_file(): Hash file contents (generated textures)
    - sha256_bytes(): Hash an in-memory byte buffer
    - sha256_array(): Hash array values (intensity buffers)

Used for reproducibility checks:
    - The generator logs the digest of every file it writes, and of the
      raw and remapped buffers at DEBUG
    - Two runs with identical parameters must produce identical digests

Deterministic hashing:
    - Arrays converted to bytes via np.ascontiguousarray(a).tobytes()
    - Files read in chunks (1 MB default) for memory efficiency
    - Results are hex strings (64 chars)

Usage:
    from src.utils import hashing
    digest = hashing.sha256_file("arc-distance-field.tga")

Note: Module named `hashing.py` to avoid shadowing builtin `hash()`.
"""

import hashlib
from pathlib import Path
from typing import Union

import numpy as np


def sha256_file(path: Union[str, Path], chunk_size: int = 1 << 20) -> str:
    """Compute SHA-256 hash of file contents.

    Parameters
    ----------
    path : Union[str, Path]
        File path
    chunk_size : int
        Read chunk size in bytes, default 1 MB

    Returns
    -------
    str
        SHA-256 hex digest (64 characters)

    Raises
    ------
    FileNotFoundError
        If file doesn't exist

    Examples
    --------
    >>> digest = sha256_file("arc-distance-field.tga")
    >>> len(digest)
    64
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    sha256 = hashlib.sha256()

    with open(path, 'rb') as f:
        while True:
            chunk = f.read(chunk_size)
            if not chunk:
                break
            sha256.update(chunk)

    return sha256.hexdigest()


def sha256_bytes(data: bytes) -> str:
    """Compute SHA-256 hash of a byte buffer.

    Parameters
    ----------
    data : bytes
        Buffer to hash (bytes, bytearray or memoryview)

    Returns
    -------
    str
        SHA-256 hex digest (64 characters)
    """
    return hashlib.sha256(data).hexdigest()


def sha256_array(a: np.ndarray) -> str:
    """Compute SHA-256 hash of array values.

    Parameters
    ----------
    a : np.ndarray
        Array to hash (any shape, dtype)

    Returns
    -------
    str
        SHA-256 hex digest (64 characters)

    Notes
    -----
    Deterministic: same values → same hash.
    Hash is invariant to memory layout but NOT to dtype/shape
    interpretation (a (2, 4) and (4, 2) view of the same bytes collide).
    """
    return sha256_bytes(np.ascontiguousarray(a).tobytes())


def verify_file_hash(path: Union[str, Path], expected_hash: str) -> bool:
    """Verify file matches expected hash.

    Parameters
    ----------
    path : Union[str, Path]
        File path
    expected_hash : str
        Expected SHA-256 hex digest

    Returns
    -------
    bool
        True if hash matches, False otherwise
    """
    return sha256_file(path) == expected_hash
