"""Base cache protocol for sanity-export-diff."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class HashCacheProtocol(Protocol):
    """Protocol for content hash caches.

    Caches map an absolute file path to the digest of its content for the
    duration of one comparison run.
    """

    def hash_of(self, path: str | Path) -> str:
        """Get the content hash of a file, computing it on first use.

        Args:
            path: Path of the file.

        Returns:
            Hex digest of the file content.

        Raises:
            AssetUnreadableError: If the file is missing or unreadable.
        """
        ...

    def stats(self) -> CacheStats:
        """Get cache statistics.

        Returns:
            CacheStats with hit/miss counts.
        """
        ...


class CacheStats:
    """Cache statistics."""

    def __init__(self) -> None:
        self.hits = 0
        self.misses = 0
        self.size = 0

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate."""
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total

    def __repr__(self) -> str:
        return f"CacheStats(hits={self.hits}, misses={self.misses}, size={self.size}, hit_rate={self.hit_rate:.2%})"
