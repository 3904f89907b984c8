"""In-memory asset hash cache."""

from __future__ import annotations

import logging
from pathlib import Path

from sanity_export_diff.cache.base import CacheStats
from sanity_export_diff.core.exceptions import AssetUnreadableError
from sanity_export_diff.core.hashing import file_digest

logger = logging.getLogger(__name__)


class AssetHashCache:
    """Memoizes content hashes of asset files for one comparison run.

    Files are assumed not to change while a run is in progress, so entries
    are never invalidated. Failed reads are not cached.

    Example:
        >>> cache = AssetHashCache()
        >>> cache.hash_of("/exports/prod/images/a.png") == cache.hash_of("/exports/staging/images/b.png")
        True
        >>> print(cache.stats())
        CacheStats(hits=0, misses=2, size=2, hit_rate=0.00%)
    """

    def __init__(self, algorithm: str = "md5") -> None:
        """Initialize the asset hash cache.

        Args:
            algorithm: hashlib algorithm name used for digests.
        """
        self._hashes: dict[Path, str] = {}
        self._algorithm = algorithm
        self._stats = CacheStats()

    @property
    def algorithm(self) -> str:
        """Digest algorithm in use."""
        return self._algorithm

    def hash_of(self, path: str | Path) -> str:
        """Get the content hash of a file, computing it on first request."""
        key = Path(path).absolute()
        cached = self._hashes.get(key)
        if cached is not None:
            self._stats.hits += 1
            return cached

        self._stats.misses += 1
        try:
            digest = file_digest(key, self._algorithm)
        except FileNotFoundError as e:
            raise AssetUnreadableError(key, "file not found") from e
        except OSError as e:
            raise AssetUnreadableError(key, e.strerror or str(e)) from e

        logger.debug(f"Hashed asset {key}: {digest}")
        self._hashes[key] = digest
        self._stats.size = len(self._hashes)
        return digest

    def stats(self) -> CacheStats:
        """Get cache statistics."""
        return self._stats

    def __len__(self) -> int:
        """Return the number of cached entries."""
        return len(self._hashes)
