"""Dataset diff operations.

This module provides functions for comparing two dataset exports and
identifying additions, removals and field-level changes per record type.

Asset references get special treatment: an edited asset field whose two
references point at files with identical content is not a change, since
exports rename asset files freely.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from sanity_export_diff.cache.assets import AssetHashCache
from sanity_export_diff.core.config import DEFAULT_ASSET_FIELD, DEFAULT_IGNORED_FIELDS
from sanity_export_diff.core.exceptions import AssetUnreadableError
from sanity_export_diff.dataset.io import load_dataset
from sanity_export_diff.dataset.models import (
    ChangeEntry,
    ComparisonWarning,
    Report,
    ReportBuilder,
    WarningKind,
)
from sanity_export_diff.diff.generator import diff_values, strip_ignored
from sanity_export_diff.diff.models import DeltaKind, FieldDelta

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from sanity_export_diff.cache.base import HashCacheProtocol
    from sanity_export_diff.core.types import Dataset, Record

logger = logging.getLogger(__name__)

# e.g. "image@file://./images/3f2a-800x600.png"
_ASSET_REFERENCE = re.compile(r"^(?:[\w-]+@)?file://\./")


@dataclass(frozen=True)
class Classification:
    """Identifiers of two indexed datasets split into three disjoint groups.

    Attributes:
        removed: Records only in the first dataset, in its order.
        added: Records only in the second dataset, in its order.
        candidates: (left, right) pairs sharing an id, in the first dataset's order.
    """

    removed: tuple[Record, ...]
    added: tuple[Record, ...]
    candidates: tuple[tuple[Record, Record], ...]


def build_index(
    records: Iterable[Record],
    side: str = "dataset",
) -> tuple[dict[str, Record], list[ComparisonWarning]]:
    """Build an id-to-record index for one side of a comparison.

    When an _id occurs more than once the first occurrence wins; each
    later duplicate is skipped and reported as a warning.

    Args:
        records: Records in dataset order.
        side: Name used in warning messages.

    Returns:
        Tuple of (index in first-occurrence order, duplicate warnings).
    """
    index: dict[str, Record] = {}
    warnings: list[ComparisonWarning] = []

    for record in records:
        record_id = record["_id"]
        if record_id in index:
            message = f"Duplicate _id {record_id!r} in {side}; keeping the first occurrence"
            logger.warning(message)
            warnings.append(
                ComparisonWarning(kind=WarningKind.DUPLICATE_IDENTIFIER, message=message, record_id=record_id)
            )
        else:
            index[record_id] = record

    return index, warnings


def classify(index_a: dict[str, Record], index_b: dict[str, Record]) -> Classification:
    """Split the ids of two indexes into removed, added and diff candidates.

    Args:
        index_a: Index of the first (baseline) dataset.
        index_b: Index of the second dataset.

    Returns:
        Classification preserving each dataset's order.
    """
    removed = tuple(record for record_id, record in index_a.items() if record_id not in index_b)
    added = tuple(record for record_id, record in index_b.items() if record_id not in index_a)
    candidates = tuple(
        (record, index_b[record_id]) for record_id, record in index_a.items() if record_id in index_b
    )
    return Classification(removed=removed, added=added, candidates=candidates)


def asset_path(reference: str, root: str | Path) -> Path | None:
    """Resolve an asset reference against a dataset root.

    Args:
        reference: Value such as "image@file://./images/a.png".
        root: Directory of the dataset the reference came from.

    Returns:
        Absolute path of the asset, or None if the value is not a file
        reference or points outside root.
    """
    match = _ASSET_REFERENCE.match(reference)
    if match is None:
        return None

    base = Path(root).resolve()
    path = (base / reference[match.end() :]).resolve()
    if not path.is_relative_to(base):
        logger.warning(f"Asset reference {reference!r} points outside {base}")
        return None
    return path


def _same_asset(
    delta: FieldDelta,
    left_root: Path,
    right_root: Path,
    cache: HashCacheProtocol,
    record_id: str | None,
    warnings: list[ComparisonWarning],
) -> bool:
    """True if both sides of an edited asset reference hold identical content."""
    if not isinstance(delta.left, str) or not isinstance(delta.right, str):
        return False

    left_path = asset_path(delta.left, left_root)
    right_path = asset_path(delta.right, right_root)
    if left_path is None or right_path is None:
        return False

    try:
        return cache.hash_of(left_path) == cache.hash_of(right_path)
    except AssetUnreadableError as e:
        logger.warning(f"{e}; treating asset of {record_id!r} as changed")
        warnings.append(
            ComparisonWarning(
                kind=WarningKind.ASSET_UNREADABLE,
                message=str(e),
                record_id=record_id,
                path=str(e.path),
            )
        )
        return False


def diff_records(
    left: Record,
    right: Record,
    *,
    left_root: str | Path,
    right_root: str | Path,
    cache: HashCacheProtocol,
    ignored_fields: Collection[str] = DEFAULT_IGNORED_FIELDS,
    asset_field: str = DEFAULT_ASSET_FIELD,
    warnings: list[ComparisonWarning] | None = None,
) -> list[FieldDelta]:
    """Compute the field-level diff of two matched records.

    Ignored fields are stripped at every depth before diffing. Edited
    deltas on the asset field are dropped when both references resolve to
    files with the same content hash; Added and Deleted deltas on it are
    always kept.

    Args:
        left: Record from the first dataset.
        right: Record from the second dataset.
        left_root: Directory left asset references resolve against.
        right_root: Directory right asset references resolve against.
        cache: Asset hash cache for this run.
        ignored_fields: Field names excluded from comparison.
        asset_field: Field name holding asset references.
        warnings: List that receives unreadable-asset warnings.

    Returns:
        Surviving deltas in discovery order. Empty if the records match.
    """
    if warnings is None:
        warnings = []

    record_id = left.get("_id")
    deltas = diff_values(strip_ignored(left, ignored_fields), strip_ignored(right, ignored_fields))

    kept: list[FieldDelta] = []
    for delta in deltas:
        if (
            delta.kind is DeltaKind.EDITED
            and delta.leaf == asset_field
            and _same_asset(delta, Path(left_root), Path(right_root), cache, record_id, warnings)
        ):
            logger.debug(f"Asset of {record_id!r} renamed with identical content: {delta.left} -> {delta.right}")
            continue
        kept.append(delta)

    return kept


def compare_datasets(
    a: Dataset,
    b: Dataset,
    *,
    ignored_fields: Collection[str] = DEFAULT_IGNORED_FIELDS,
    asset_field: str = DEFAULT_ASSET_FIELD,
    cache: HashCacheProtocol | None = None,
    hash_algorithm: str = "md5",
) -> Report:
    """Compare two datasets and produce a report grouped by record type.

    Args:
        a: First (baseline) dataset.
        b: Second dataset.
        ignored_fields: Field names excluded from comparison at every depth.
        asset_field: Field name holding asset references.
        cache: Asset hash cache. A fresh AssetHashCache is used if omitted.
        hash_algorithm: Digest for the fresh cache.

    Returns:
        Report with added, removed and changed ids per type, plus warnings.
    """
    cache = cache if cache is not None else AssetHashCache(hash_algorithm)
    ignored = frozenset(ignored_fields)
    builder = ReportBuilder(left_name=a.name, right_name=b.name)

    index_a, warnings_a = build_index(a.records, a.name)
    index_b, warnings_b = build_index(b.records, b.name)
    builder.extend_warnings(warnings_a)
    builder.extend_warnings(warnings_b)

    for record in (*index_a.values(), *index_b.values()):
        builder.register_type(record["_type"])

    classification = classify(index_a, index_b)

    for record in classification.removed:
        builder.add_removed(record["_type"], record["_id"])

    for record in classification.added:
        builder.add_added(record["_type"], record["_id"])

    warnings: list[ComparisonWarning] = []
    for left, right in classification.candidates:
        record_id = left["_id"]
        if left["_type"] != right["_type"]:
            message = f"Record {record_id!r} changed type from {left['_type']!r} to {right['_type']!r}"
            logger.warning(message)
            warnings.append(ComparisonWarning(kind=WarningKind.TYPE_MISMATCH, message=message, record_id=record_id))

        diff = diff_records(
            left,
            right,
            left_root=a.root,
            right_root=b.root,
            cache=cache,
            ignored_fields=ignored,
            asset_field=asset_field,
            warnings=warnings,
        )
        if diff:
            builder.add_changed(left["_type"], ChangeEntry(id=record_id, diff=tuple(diff)))

    builder.extend_warnings(warnings)
    report = builder.build()

    totals = report.totals()
    logger.info(
        f"Compared {len(index_a)} vs {len(index_b)} records: "
        f"{totals['added']} added, {totals['removed']} removed, {totals['changed']} changed"
    )
    return report


def compare_paths(
    path_a: str | Path,
    path_b: str | Path,
    *,
    workdir: str | Path | None = None,
    ignored_fields: Collection[str] = DEFAULT_IGNORED_FIELDS,
    asset_field: str = DEFAULT_ASSET_FIELD,
    hash_algorithm: str = "md5",
) -> Report:
    """Load two dataset exports and compare them.

    Both datasets are fully loaded before comparison starts, so a
    malformed export aborts the run without producing a report.

    Args:
        path_a: First export (directory, archive or NDJSON file).
        path_b: Second export.
        workdir: Where archives are extracted.
        ignored_fields: Field names excluded from comparison.
        asset_field: Field name holding asset references.
        hash_algorithm: Digest used for asset content.

    Returns:
        Comparison report.

    Raises:
        DatasetNotFoundError: If an input cannot be located.
        MalformedRecordError: If a record line is invalid.
    """
    a = load_dataset(path_a, workdir)
    b = load_dataset(path_b, workdir)
    return compare_datasets(
        a,
        b,
        ignored_fields=ignored_fields,
        asset_field=asset_field,
        hash_algorithm=hash_algorithm,
    )
