"""Tests for configuration, hashing helpers and core types."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from sanity_export_diff.core import (
    DEFAULT_IGNORED_FIELDS,
    ConfigurationError,
    Dataset,
    ExportDiffError,
    MalformedRecordError,
    Settings,
    load_settings,
)
from sanity_export_diff.core.hashing import file_digest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Isolate tests from the caller's environment and .env file."""
    for name in ("IGNORED_FIELDS", "ASSET_FIELD", "HASH_ALGORITHM", "OUTPUT_PATH", "LOG_LEVEL"):
        monkeypatch.delenv(f"SANITY_DIFF_{name}", raising=False)
    monkeypatch.chdir(tmp_path)


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self) -> None:
        """Defaults match the export metadata fields and md5."""
        settings = Settings()

        assert settings.ignored_fields == list(DEFAULT_IGNORED_FIELDS)
        assert settings.asset_field == "_sanityAsset"
        assert settings.hash_algorithm == "md5"
        assert settings.output_path == "web/data.json"
        assert settings.log_level == "WARNING"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Environment variables with the prefix override defaults."""
        monkeypatch.setenv("SANITY_DIFF_HASH_ALGORITHM", "SHA256")
        monkeypatch.setenv("SANITY_DIFF_IGNORED_FIELDS", '["_rev", "_seo"]')
        monkeypatch.setenv("SANITY_DIFF_LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.hash_algorithm == "sha256"
        assert settings.ignored_fields == ["_rev", "_seo"]
        assert settings.log_level == "DEBUG"

    def test_load_settings_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Explicit values win over the environment; None falls through."""
        monkeypatch.setenv("SANITY_DIFF_OUTPUT_PATH", "env.json")

        settings = load_settings(output_path="cli.json", asset_field=None)

        assert settings.output_path == "cli.json"
        assert settings.asset_field == "_sanityAsset"

    def test_invalid_algorithm(self) -> None:
        """Unknown digests are a configuration error."""
        with pytest.raises(ConfigurationError, match="Unsupported hash algorithm"):
            load_settings(hash_algorithm="crc32")

    def test_invalid_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Unknown log levels are a configuration error."""
        monkeypatch.setenv("SANITY_DIFF_LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError, match="Invalid log level"):
            load_settings()


class TestHashing:
    """Tests for hashing helpers."""

    def test_file_digest(self, tmp_path: Path) -> None:
        """file_digest matches hashlib over the whole file."""
        data = b"x" * 200_000
        path = tmp_path / "big.bin"
        path.write_bytes(data)

        assert file_digest(path) == hashlib.md5(data).hexdigest()
        assert file_digest(path, "sha1") == hashlib.sha1(data).hexdigest()

    def test_file_digest_missing(self, tmp_path: Path) -> None:
        """Missing files raise OSError."""
        with pytest.raises(FileNotFoundError):
            file_digest(tmp_path / "missing")


class TestDataset:
    """Tests for the Dataset model."""

    def test_iteration(self) -> None:
        """Datasets iterate records in export order."""
        dataset = Dataset(
            name="prod",
            root=Path("/exports/prod"),
            records=[
                {"_id": "1", "_type": "post"},
                {"_id": "2", "_type": "author"},
                {"_id": "3", "_type": "post"},
            ],
        )

        assert [r["_id"] for r in dataset] == ["1", "2", "3"]
        assert len(dataset) == 3

    def test_frozen(self) -> None:
        """Datasets are read-only after loading."""
        dataset = Dataset(name="prod")

        with pytest.raises(ValueError):
            dataset.name = "staging"  # type: ignore[misc]


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_malformed_record_message(self) -> None:
        """The message names file and line."""
        error = MalformedRecordError("exports/data.ndjson", 7, "invalid JSON")

        assert isinstance(error, ExportDiffError)
        assert str(error) == f"{Path('exports/data.ndjson')}:7: invalid JSON"
