"""Shared hashing utilities for sanity-export-diff.

This module provides file content digests used to compare asset
files.

Design goals:
- Deterministic: same input always produces same hash
- Files are read in chunks; large assets never sit in memory whole
"""

from __future__ import annotations

import hashlib
from pathlib import Path

CHUNK_SIZE = 64 * 1024


def file_digest(path: str | Path, algorithm: str = "md5") -> str:
    """
    Compute the hex digest of a file's full byte content.

    Args:
        path: File to hash.
        algorithm: Any name accepted by hashlib.new (default md5).

    Returns:
        Hexadecimal digest.

    Raises:
        OSError: If the file cannot be opened or read.

    Example:
        >>> file_digest("images/logo.png")  # doctest: +SKIP
        '9e107d9d372bb6826bd81d3542a419d6'
    """
    h = hashlib.new(algorithm)
    with Path(path).open("rb") as f:
        for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()

