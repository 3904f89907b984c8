"""Data models for structural diffs.

This module provides the dataclasses describing one difference
between two JSON-like values.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

PathSegment = Union[str, int]


class DeltaKind(str, Enum):
    """Kind of a field-level difference.

    The values are the one-letter codes used in serialized reports.
    """

    ADDED = "N"
    DELETED = "D"
    EDITED = "E"
    ARRAY_CHANGED = "A"


@dataclass(frozen=True)
class FieldDelta:
    """A single difference located by a path of keys and list indexes.

    Attributes:
        path: Segments from the record root to the differing location.
        kind: What happened at that location.
        left: Value on the left side (Deleted, Edited).
        right: Value on the right side (Added, Edited).
        index: Position in the list (ArrayChanged only).
        item: Nested Added/Deleted delta for the element (ArrayChanged only).
    """

    path: tuple[PathSegment, ...]
    kind: DeltaKind
    left: Any = None
    right: Any = None
    index: int | None = None
    item: FieldDelta | None = None

    @property
    def leaf(self) -> PathSegment | None:
        """Final path segment, or None for a root-level delta."""
        return self.path[-1] if self.path else None

    @property
    def dotted_path(self) -> str:
        """Human readable path, e.g. ``body[2].children[0].text``."""
        out = ""
        for segment in self.path:
            if isinstance(segment, int):
                out += f"[{segment}]"
            else:
                out += f".{segment}" if out else segment
        return out

    def mirrored(self) -> FieldDelta:
        """The same delta seen from the other side of the comparison."""
        kind = self.kind
        if kind is DeltaKind.ADDED:
            kind = DeltaKind.DELETED
        elif kind is DeltaKind.DELETED:
            kind = DeltaKind.ADDED
        return FieldDelta(
            path=self.path,
            kind=kind,
            left=self.right,
            right=self.left,
            index=self.index,
            item=self.item.mirrored() if self.item is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Export to JSON-serializable dict.

        Keys follow the viewer format: ``kind``, ``path``, ``lhs``/``rhs``
        where present, ``index``/``item`` for array changes. Array items
        carry no path of their own.
        """
        data: dict[str, Any] = {"kind": self.kind.value}
        if self.path:
            data["path"] = list(self.path)
        if self.kind in (DeltaKind.DELETED, DeltaKind.EDITED):
            data["lhs"] = self.left
        if self.kind in (DeltaKind.ADDED, DeltaKind.EDITED):
            data["rhs"] = self.right
        if self.kind is DeltaKind.ARRAY_CHANGED:
            data["index"] = self.index
            data["item"] = self.item.to_dict() if self.item is not None else None
        return data
