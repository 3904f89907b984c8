"""Core module for sanity-export-diff.

This module contains the fundamental types, exceptions, hashing
helpers and configuration used throughout the library.
"""

from __future__ import annotations

from sanity_export_diff.core.config import (
    DEFAULT_ASSET_FIELD,
    DEFAULT_IGNORED_FIELDS,
    Settings,
    load_settings,
)
from sanity_export_diff.core.exceptions import (
    AssetUnreadableError,
    ConfigurationError,
    DatasetNotFoundError,
    ExportDiffError,
    MalformedRecordError,
)
from sanity_export_diff.core.types import Dataset, Record

__all__ = [
    "DEFAULT_ASSET_FIELD",
    "DEFAULT_IGNORED_FIELDS",
    "AssetUnreadableError",
    "ConfigurationError",
    "Dataset",
    "DatasetNotFoundError",
    "ExportDiffError",
    "MalformedRecordError",
    "Record",
    "Settings",
    "load_settings",
]
