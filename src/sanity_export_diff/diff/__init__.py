"""Structural diff module for sanity-export-diff.

This module provides tools for computing field-level differences
between two records.

Example:
    >>> from sanity_export_diff.diff import diff_values
    >>> deltas = diff_values({"title": "X"}, {"title": "Y"})
    >>> deltas[0].dotted_path
    'title'
"""

from __future__ import annotations

from sanity_export_diff.diff.generator import diff_values, strip_ignored
from sanity_export_diff.diff.models import DeltaKind, FieldDelta, PathSegment

__all__ = [
    "DeltaKind",
    "FieldDelta",
    "PathSegment",
    "diff_values",
    "strip_ignored",
]
