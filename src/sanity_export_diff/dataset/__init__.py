"""Dataset management module for sanity-export-diff.

This module provides tools for loading dataset exports and comparing
two of them record by record.
"""

from __future__ import annotations

from sanity_export_diff.dataset.diff import (
    Classification,
    asset_path,
    build_index,
    classify,
    compare_datasets,
    compare_paths,
    diff_records,
)
from sanity_export_diff.dataset.io import (
    extract_archive,
    load_dataset,
    load_records,
    resolve_data_file,
)
from sanity_export_diff.dataset.models import (
    ChangeEntry,
    ComparisonWarning,
    Report,
    ReportBuilder,
    TypeReport,
    WarningKind,
)

__all__ = [
    "ChangeEntry",
    "Classification",
    "ComparisonWarning",
    "Report",
    "ReportBuilder",
    "TypeReport",
    "WarningKind",
    "asset_path",
    "build_index",
    "classify",
    "compare_datasets",
    "compare_paths",
    "diff_records",
    "extract_archive",
    "load_dataset",
    "load_records",
    "resolve_data_file",
]
