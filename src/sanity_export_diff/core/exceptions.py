"""Custom exceptions for sanity-export-diff.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from ExportDiffError for easy catching.
"""

from __future__ import annotations

from pathlib import Path


class ExportDiffError(Exception):
    """Base exception for all sanity-export-diff errors.

    Example:
        >>> try:
        ...     report = compare_paths("prod.tar.gz", "staging.tar.gz")
        ... except ExportDiffError as e:
        ...     print(f"comparison aborted: {e}")
    """


class MalformedRecordError(ExportDiffError):
    """Raised when a line of a dataset export cannot be parsed as a record.

    Fatal: the run is aborted before any report is produced.

    Attributes:
        path: File the line was read from.
        line: 1-based line number.
        reason: What was wrong with the line.

    Example:
        >>> raise MalformedRecordError("data.ndjson", 12, "missing '_id'")
    """

    def __init__(self, path: str | Path, line: int, reason: str) -> None:
        self.path = Path(path)
        self.line = line
        self.reason = reason
        super().__init__(f"{self.path}:{line}: {reason}")


class DatasetNotFoundError(ExportDiffError):
    """Raised when a dataset input or its data.ndjson cannot be located.

    Example:
        >>> raise DatasetNotFoundError("No data.ndjson in archive: prod.tar.gz")
    """


class AssetUnreadableError(ExportDiffError):
    """Raised when a referenced asset file cannot be read for hashing.

    Not fatal to a comparison: the differ treats it as a content change.

    Attributes:
        path: Absolute path of the asset.
    """

    def __init__(self, path: str | Path, reason: str = "") -> None:
        self.path = Path(path)
        self.reason = reason
        message = f"Cannot read asset {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ConfigurationError(ExportDiffError):
    """Raised when configuration is invalid or missing.

    Example:
        >>> raise ConfigurationError("Unsupported hash algorithm: crc32")
    """
