"""Structural diff generation for JSON-like values.

This module provides strip_ignored for removing metadata fields from a
record tree and diff_values for computing field-level deltas between
two trees.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from typing import Any

from sanity_export_diff.diff.models import DeltaKind, FieldDelta, PathSegment


def _json_kind(value: Any) -> str:
    """Classify a value the way JSON does.

    bool is checked before int since bool subclasses int.
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def strip_ignored(value: Any, ignored: Collection[str]) -> Any:
    """Return a copy of value without any key in ignored, at every depth.

    Mappings and lists are rebuilt; the input is never mutated, so the
    original record stays available to the caller.

    Args:
        value: A record or any nested value of one.
        ignored: Field names to drop.

    Returns:
        New tree with the same shape minus the ignored keys.

    Example:
        >>> strip_ignored({"_rev": "x", "body": [{"_key": "k", "text": "hi"}]}, {"_rev", "_key"})
        {'body': [{'text': 'hi'}]}
    """
    if isinstance(value, Mapping):
        return {k: strip_ignored(v, ignored) for k, v in value.items() if k not in ignored}
    if isinstance(value, (list, tuple)):
        return [strip_ignored(v, ignored) for v in value]
    return value


def _walk(
    left: Any,
    right: Any,
    path: tuple[PathSegment, ...],
    changes: list[FieldDelta],
) -> None:
    left_kind = _json_kind(left)
    right_kind = _json_kind(right)

    if left_kind == right_kind == "object":
        for key, value in left.items():
            if key in right:
                _walk(value, right[key], (*path, key), changes)
            else:
                changes.append(FieldDelta(path=(*path, key), kind=DeltaKind.DELETED, left=value))
        for key, value in right.items():
            if key not in left:
                changes.append(FieldDelta(path=(*path, key), kind=DeltaKind.ADDED, right=value))
        return

    if left_kind == right_kind == "array":
        common = min(len(left), len(right))
        for i in range(common):
            _walk(left[i], right[i], (*path, i), changes)
        for i in range(common, len(left)):
            item = FieldDelta(path=(), kind=DeltaKind.DELETED, left=left[i])
            changes.append(FieldDelta(path=path, kind=DeltaKind.ARRAY_CHANGED, index=i, item=item))
        for i in range(common, len(right)):
            item = FieldDelta(path=(), kind=DeltaKind.ADDED, right=right[i])
            changes.append(FieldDelta(path=path, kind=DeltaKind.ARRAY_CHANGED, index=i, item=item))
        return

    if left_kind != right_kind or left != right:
        changes.append(FieldDelta(path=path, kind=DeltaKind.EDITED, left=left, right=right))


def diff_values(left: Any, right: Any) -> list[FieldDelta]:
    """Compute the structural diff between two JSON-like values.

    Mappings are compared key by key (left keys in order, then keys only
    present on the right). Lists are compared element by element over
    their common length; surplus elements become ArrayChanged deltas.
    Anything else is compared by JSON kind and value.

    Args:
        left: Value from the first dataset.
        right: Value from the second dataset.

    Returns:
        Deltas in discovery order. Empty if the values are equal.

    Example:
        >>> [d.kind for d in diff_values({"title": "X"}, {"title": "Y"})]
        [<DeltaKind.EDITED: 'E'>]
    """
    changes: list[FieldDelta] = []
    _walk(left, right, (), changes)
    return changes
