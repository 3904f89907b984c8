"""Dataset I/O operations.

This module provides functions for locating and loading dataset exports.
An export is either a directory holding data.ndjson (plus the asset
folders it references) or a tar archive of such a directory.
"""

from __future__ import annotations

import json
import logging
import tarfile
from pathlib import Path

from sanity_export_diff.core.exceptions import DatasetNotFoundError, MalformedRecordError
from sanity_export_diff.core.types import Dataset, Record

logger = logging.getLogger(__name__)

DATA_FILE_NAME = "data.ndjson"

_ARCHIVE_SUFFIXES = (".tar.gz", ".tgz", ".tar")


def load_records(path: str | Path) -> list[Record]:
    """Load records from an NDJSON file (one JSON object per line).

    Blank lines are skipped. Any other line that is not a JSON object
    with string "_id" and "_type" fields aborts the load.

    Args:
        path: Path to the NDJSON file.

    Returns:
        Records in file order.

    Raises:
        DatasetNotFoundError: If the file doesn't exist.
        MalformedRecordError: If a line is not a valid record.
    """
    path = Path(path)

    if not path.is_file():
        raise DatasetNotFoundError(f"Dataset file not found: {path}")

    records: list[Record] = []
    with path.open(encoding="utf-8") as f:
        for i, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue

            try:
                item = json.loads(line, parse_constant=_reject_constant)
            except json.JSONDecodeError as e:
                raise MalformedRecordError(path, i, f"invalid JSON: {e.msg}") from e
            except ValueError as e:
                raise MalformedRecordError(path, i, str(e)) from e

            records.append(_check_record(item, path, i))

    logger.info(f"Loaded {len(records)} records from {path}")
    return records


def _reject_constant(name: str) -> float:
    # NaN, Infinity and -Infinity are Python extensions, not JSON
    raise ValueError(f"invalid JSON constant {name}")


def _check_record(item: object, path: Path, line: int) -> Record:
    """Validate the required fields of a parsed line."""
    if not isinstance(item, dict):
        raise MalformedRecordError(path, line, f"expected object, got {type(item).__name__}")
    for required in ("_id", "_type"):
        if not isinstance(item.get(required), str):
            raise MalformedRecordError(path, line, f"missing or non-string '{required}'")
    return item


def is_archive(path: str | Path) -> bool:
    """Check if a path names a tar archive export."""
    path = Path(path)
    return path.is_file() and path.name.lower().endswith(_ARCHIVE_SUFFIXES)


def _archive_stem(path: Path) -> str:
    name = path.name
    for suffix in _ARCHIVE_SUFFIXES:
        if name.lower().endswith(suffix):
            return name[: -len(suffix)]
    return path.stem


def extract_archive(archive: str | Path, destination: str | Path) -> Path:
    """Extract an export archive and locate its data file.

    Each archive is unpacked into its own subdirectory of destination,
    named after the archive, so two exports with the same internal
    layout do not overwrite each other.

    Args:
        archive: Path to the .tar.gz, .tgz or .tar export.
        destination: Directory to extract under.

    Returns:
        Path to the extracted data.ndjson.

    Raises:
        DatasetNotFoundError: If the archive is unreadable or has no data.ndjson.
    """
    archive = Path(archive)
    target = Path(destination) / _archive_stem(archive)
    target.mkdir(parents=True, exist_ok=True)

    logger.info(f"Decompressing {archive} into {target}")
    try:
        with tarfile.open(archive) as tar:
            names = tar.getnames()
            tar.extractall(target, filter="data")
    except (tarfile.TarError, OSError) as e:
        raise DatasetNotFoundError(f"Cannot extract archive {archive}: {e}") from e

    data_name = next((n for n in names if n == DATA_FILE_NAME or n.endswith(f"/{DATA_FILE_NAME}")), None)
    if data_name is None:
        raise DatasetNotFoundError(f"No {DATA_FILE_NAME} in archive: {archive}")
    return target / data_name


def resolve_data_file(path: str | Path, workdir: str | Path | None = None) -> Path:
    """Find the data.ndjson for a dataset input.

    Supports:
    - a directory containing data.ndjson
    - a tar archive (extracted under workdir, default the current directory)
    - an .ndjson file given directly

    Args:
        path: Dataset input given by the caller.
        workdir: Where archives are extracted.

    Returns:
        Path to the NDJSON file.

    Raises:
        DatasetNotFoundError: If the input doesn't exist or holds no data file.
    """
    path = Path(path)

    if not path.exists():
        raise DatasetNotFoundError(f"No such file or directory: {path}")

    if path.is_dir():
        data_file = path / DATA_FILE_NAME
        if not data_file.is_file():
            raise DatasetNotFoundError(f"No {DATA_FILE_NAME} in directory: {path}")
        return data_file

    if is_archive(path):
        return extract_archive(path, Path(workdir) if workdir is not None else Path.cwd())

    if path.suffix == ".ndjson":
        return path

    raise DatasetNotFoundError(f"Unsupported dataset input (expected directory, archive or .ndjson): {path}")


def load_dataset(
    path: str | Path,
    workdir: str | Path | None = None,
    name: str | None = None,
) -> Dataset:
    """Resolve and load a dataset export.

    Args:
        path: Directory, archive or NDJSON file.
        workdir: Where archives are extracted.
        name: Display name. Defaults to the input path.

    Returns:
        Dataset whose root is the directory holding the data file.

    Raises:
        DatasetNotFoundError: If the input cannot be located.
        MalformedRecordError: If a record line is invalid.
    """
    data_file = resolve_data_file(path, workdir)
    records = load_records(data_file)
    return Dataset(
        name=name or str(path),
        root=data_file.parent.absolute(),
        records=records,
    )
