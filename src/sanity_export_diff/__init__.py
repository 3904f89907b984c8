"""sanity-export-diff: Compare two Sanity dataset exports, type by type."""

from __future__ import annotations

from sanity_export_diff.cache.assets import AssetHashCache
from sanity_export_diff.core.exceptions import (
    AssetUnreadableError,
    DatasetNotFoundError,
    ExportDiffError,
    MalformedRecordError,
)
from sanity_export_diff.core.types import Dataset
from sanity_export_diff.dataset.diff import compare_datasets, compare_paths
from sanity_export_diff.dataset.io import load_dataset
from sanity_export_diff.dataset.models import ChangeEntry, Report, TypeReport
from sanity_export_diff.diff.models import DeltaKind, FieldDelta

__version__ = "1.0.0"
__all__ = [
    # Comparison
    "compare_datasets",
    "compare_paths",
    "load_dataset",
    # Models
    "AssetHashCache",
    "ChangeEntry",
    "Dataset",
    "DeltaKind",
    "FieldDelta",
    "Report",
    "TypeReport",
    # Errors
    "AssetUnreadableError",
    "DatasetNotFoundError",
    "ExportDiffError",
    "MalformedRecordError",
    # Version
    "__version__",
]
