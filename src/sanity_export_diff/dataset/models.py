"""Data models for dataset comparison results.

This module defines the schema for comparison reports: per record type,
the ids added and removed and the field-level changes of matched
records, plus the warnings absorbed during the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from sanity_export_diff.diff.models import FieldDelta


class WarningKind(str, Enum):
    """Non-fatal conditions recorded during a comparison."""

    DUPLICATE_IDENTIFIER = "duplicate_identifier"
    ASSET_UNREADABLE = "asset_unreadable"
    TYPE_MISMATCH = "type_mismatch"


@dataclass(frozen=True)
class ComparisonWarning:
    """A non-fatal problem absorbed into the comparison result.

    Attributes:
        kind: Category of the problem.
        message: Human readable description.
        record_id: Record concerned, if any.
        path: File concerned, if any.
    """

    kind: WarningKind
    message: str
    record_id: str | None = None
    path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Export to JSON-serializable dict."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "record_id": self.record_id,
            "path": self.path,
        }


@dataclass(frozen=True)
class ChangeEntry:
    """A matched record with at least one field-level difference.

    Attributes:
        id: The record's _id.
        diff: Deltas in discovery order.
    """

    id: str
    diff: tuple[FieldDelta, ...]

    @property
    def paths_changed(self) -> list[str]:
        """Dotted paths of the changed locations."""
        return [d.dotted_path for d in self.diff]

    def to_dict(self) -> dict[str, Any]:
        """Export to JSON-serializable dict."""
        return {"id": self.id, "diff": [d.to_dict() for d in self.diff]}


@dataclass(frozen=True)
class TypeReport:
    """Comparison result for one record type.

    Attributes:
        added: Ids only present in the second dataset, in its order.
        removed: Ids only present in the first dataset, in its order.
        changed: Matched records that differ, in processing order.
    """

    added: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()
    changed: tuple[ChangeEntry, ...] = ()

    @property
    def changed_ids(self) -> list[str]:
        """Ids of the changed records."""
        return [c.id for c in self.changed]

    @property
    def has_changes(self) -> bool:
        """True if there are any differences."""
        return bool(self.added or self.removed or self.changed)

    def summary(self) -> dict[str, int]:
        """Summary statistics."""
        return {
            "added": len(self.added),
            "removed": len(self.removed),
            "changed": len(self.changed),
        }

    def to_dict(self) -> dict[str, Any]:
        """Export to JSON-serializable dict."""
        return {
            "added": list(self.added),
            "removed": list(self.removed),
            "changed": [c.to_dict() for c in self.changed],
        }


@dataclass(frozen=True)
class Report:
    """Result of comparing two datasets, grouped by record type.

    Built once by ReportBuilder and read-only afterwards.

    Attributes:
        types: Record type to TypeReport, in first-seen order.
        warnings: Non-fatal conditions met during the run.
        left_name: Display name of the first dataset.
        right_name: Display name of the second dataset.
    """

    types: Mapping[str, TypeReport] = field(default_factory=lambda: MappingProxyType({}))
    warnings: tuple[ComparisonWarning, ...] = ()
    left_name: str = ""
    right_name: str = ""

    def __getitem__(self, record_type: str) -> TypeReport:
        return self.types[record_type]

    def __contains__(self, record_type: object) -> bool:
        return record_type in self.types

    def __iter__(self) -> Iterator[str]:
        return iter(self.types)

    def __len__(self) -> int:
        return len(self.types)

    def get(self, record_type: str) -> TypeReport:
        """TypeReport for a type, empty if the type has no differences."""
        return self.types.get(record_type, TypeReport())

    @property
    def has_changes(self) -> bool:
        """True if any type has differences."""
        return any(t.has_changes for t in self.types.values())

    def summary(self) -> dict[str, dict[str, int]]:
        """Per-type summary statistics."""
        return {name: t.summary() for name, t in self.types.items()}

    def totals(self) -> dict[str, int]:
        """Summary statistics across all types."""
        totals = {"added": 0, "removed": 0, "changed": 0}
        for t in self.types.values():
            for key, count in t.summary().items():
                totals[key] += count
        return totals

    def to_dict(self) -> dict[str, Any]:
        """Export the type mapping to a JSON-serializable dict."""
        return {name: t.to_dict() for name, t in self.types.items()}


@dataclass
class _TypeBucket:
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    changed: list[ChangeEntry] = field(default_factory=list)


class ReportBuilder:
    """Collects classification results and groups them by record type.

    Types appear in the order they are registered or first used. A
    registered type with no results still gets an empty TypeReport.
    Within a type the insertion order is kept; nothing is sorted.

    Example:
        >>> builder = ReportBuilder()
        >>> builder.add_added("post", "2")
        >>> builder.build()["post"].added
        ('2',)
    """

    def __init__(self, left_name: str = "", right_name: str = "") -> None:
        self._buckets: dict[str, _TypeBucket] = {}
        self._warnings: list[ComparisonWarning] = []
        self._left_name = left_name
        self._right_name = right_name

    def _bucket(self, record_type: str) -> _TypeBucket:
        if record_type not in self._buckets:
            self._buckets[record_type] = _TypeBucket()
        return self._buckets[record_type]

    def register_type(self, record_type: str) -> None:
        """Make sure a type is reported even if nothing is filed under it."""
        self._bucket(record_type)

    def add_removed(self, record_type: str, record_id: str) -> None:
        """File an id present only in the first dataset."""
        self._bucket(record_type).removed.append(record_id)

    def add_added(self, record_type: str, record_id: str) -> None:
        """File an id present only in the second dataset."""
        self._bucket(record_type).added.append(record_id)

    def add_changed(self, record_type: str, entry: ChangeEntry) -> None:
        """File a matched record that differs."""
        self._bucket(record_type).changed.append(entry)

    def extend_warnings(self, warnings: list[ComparisonWarning]) -> None:
        """Record several non-fatal conditions."""
        self._warnings.extend(warnings)

    def build(self) -> Report:
        """Freeze the collected results into a Report."""
        types = {
            name: TypeReport(
                added=tuple(bucket.added),
                removed=tuple(bucket.removed),
                changed=tuple(bucket.changed),
            )
            for name, bucket in self._buckets.items()
        }
        return Report(
            types=MappingProxyType(types),
            warnings=tuple(self._warnings),
            left_name=self._left_name,
            right_name=self._right_name,
        )
