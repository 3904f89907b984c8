"""Cache module for sanity-export-diff.

This module provides caching of asset content hashes so that a file
referenced by many records is read only once per run.
"""

from __future__ import annotations

from sanity_export_diff.cache.assets import AssetHashCache
from sanity_export_diff.cache.base import CacheStats, HashCacheProtocol

__all__ = [
    "AssetHashCache",
    "CacheStats",
    "HashCacheProtocol",
]
