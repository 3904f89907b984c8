"""Core type definitions for sanity-export-diff.

This module defines the fundamental data structures shared by the
loader and the comparison engine.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from collections.abc import Iterator

# A single exported document: "_id", "_type" and schemaless fields
Record = dict[str, Any]


class Dataset(BaseModel):
    """One side of a comparison: the records of an export and where it lives.

    Attributes:
        name: Display name (usually the input path).
        root: Directory that relative asset references resolve against.
            This is the directory holding data.ndjson.
        records: Records in export order.

    Example:
        >>> dataset = Dataset(
        ...     name="production",
        ...     root=Path("exports/production"),
        ...     records=[{"_id": "a1", "_type": "post", "title": "Hello"}],
        ... )
        >>> len(dataset)
        1
    """

    model_config = {"frozen": True}

    name: str = Field(default="dataset", description="Display name of the dataset")
    root: Path = Field(default_factory=Path.cwd, description="Directory asset references resolve against")
    records: list[Record] = Field(default_factory=list, description="Records in export order")

    def __len__(self) -> int:
        """Return the number of records."""
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:  # type: ignore[override]
        """Iterate over records in export order."""
        return iter(self.records)

