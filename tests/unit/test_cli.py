"""Tests for CLI commands."""

from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING, Any

import pytest
from typer.testing import CliRunner

from sanity_export_diff import __version__
from sanity_export_diff.cli.main import app

if TYPE_CHECKING:
    from pathlib import Path

# Disable rich/typer color output to avoid ANSI escape codes in test assertions
os.environ["NO_COLOR"] = "1"
os.environ["TERM"] = "dumb"

runner = CliRunner()


def _export(root: Path, records: list[dict[str, Any]], assets: dict[str, bytes] | None = None) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "data.ndjson").write_text("".join(json.dumps(r) + "\n" for r in records), encoding="utf-8")
    for rel, data in (assets or {}).items():
        (root / rel).parent.mkdir(parents=True, exist_ok=True)
        (root / rel).write_bytes(data)
    return root


def _asset(name: str) -> dict[str, str]:
    return {"_sanityAsset": f"image@file://./images/{name}"}


@pytest.fixture
def exports(tmp_path: Path) -> tuple[Path, Path]:
    """Two exports: one post edited, one added, one renamed asset."""
    a = _export(
        tmp_path / "prod",
        [
            {"_id": "1", "_type": "post", "_rev": "a", "title": "X", "image": _asset("a.png")},
        ],
        {"images/a.png": b"pixels"},
    )
    b = _export(
        tmp_path / "staging",
        [
            {"_id": "1", "_type": "post", "_rev": "b", "title": "Y", "image": _asset("b.png")},
            {"_id": "2", "_type": "post", "title": "Z"},
        ],
        {"images/b.png": b"pixels"},
    )
    return a, b


class TestVersionCommand:
    """Tests for version command."""

    def test_version_command(self) -> None:
        """Version command shows version."""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_version_flag(self) -> None:
        """--version flag shows version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestCompareCommand:
    """Tests for compare command."""

    def test_compare_help(self) -> None:
        """compare --help shows usage."""
        result = runner.invoke(app, ["compare", "--help"])

        assert result.exit_code == 0
        assert "Compare two dataset exports" in result.stdout
        assert "--output" in result.stdout
        assert "--ignore" in result.stdout

    def test_compare_writes_report(self, exports: tuple[Path, Path], tmp_path: Path) -> None:
        """The report file holds the type mapping."""
        a, b = exports
        out = tmp_path / "web" / "data.json"

        result = runner.invoke(app, ["--no-color", "compare", str(a), str(b), "-o", str(out)])

        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data == {
            "post": {
                "added": ["2"],
                "removed": [],
                "changed": [{"id": "1", "diff": [{"kind": "E", "path": ["title"], "lhs": "X", "rhs": "Y"}]}],
            }
        }
        assert "│ post" in result.stdout
        assert "1: title" in result.stdout

    def test_compare_json_output(self, exports: tuple[Path, Path], tmp_path: Path) -> None:
        """--json prints the annotated report to stdout."""
        a, b = exports

        result = runner.invoke(app, ["--json", "compare", str(a), str(b), "-o", str(tmp_path / "out.json")])

        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["summary"]["totals"] == {"added": 1, "removed": 0, "changed": 1}
        assert data["warnings"] == []

    def test_compare_extra_ignore(self, exports: tuple[Path, Path], tmp_path: Path) -> None:
        """--ignore adds fields to the ignored set."""
        a, b = exports
        out = tmp_path / "out.json"

        result = runner.invoke(app, ["compare", str(a), str(b), "-o", str(out), "--ignore", "title"])

        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text(encoding="utf-8"))["post"]["changed"] == []

    def test_fail_on_changes(self, exports: tuple[Path, Path], tmp_path: Path) -> None:
        """--fail-on-changes exits 1 when the datasets differ."""
        a, b = exports
        out = tmp_path / "out.json"

        result = runner.invoke(app, ["compare", str(a), str(b), "-o", str(out), "--fail-on-changes"])

        assert result.exit_code == 1
        assert out.exists()

    def test_identical_exports(self, exports: tuple[Path, Path], tmp_path: Path) -> None:
        """Comparing an export with itself finds nothing and exits 0."""
        a, _ = exports
        out = tmp_path / "out.json"

        result = runner.invoke(app, ["compare", str(a), str(a), "-o", str(out), "--fail-on-changes"])

        assert result.exit_code == 0
        assert "No differences found." in result.stdout
        assert json.loads(out.read_text(encoding="utf-8")) == {"post": {"added": [], "removed": [], "changed": []}}

    def test_missing_dataset(self, exports: tuple[Path, Path], tmp_path: Path) -> None:
        """A missing input aborts with a clear message and no report."""
        a, _ = exports
        out = tmp_path / "out.json"

        result = runner.invoke(app, ["compare", str(a), str(tmp_path / "nope"), "-o", str(out)])

        assert result.exit_code == 1
        assert "No such file or directory" in result.output
        assert not out.exists()

    def test_malformed_record(self, exports: tuple[Path, Path], tmp_path: Path) -> None:
        """A malformed line aborts with file and line number."""
        a, b = exports
        with (b / "data.ndjson").open("a", encoding="utf-8") as f:
            f.write("{broken\n")
        out = tmp_path / "out.json"

        result = runner.invoke(app, ["compare", str(a), str(b), "-o", str(out)])

        assert result.exit_code == 1
        assert "data.ndjson:3" in result.output
        assert not out.exists()

    def test_invalid_hash(self, exports: tuple[Path, Path], tmp_path: Path) -> None:
        """An unknown digest is rejected before comparing."""
        a, b = exports

        result = runner.invoke(app, ["compare", str(a), str(b), "-o", str(tmp_path / "o.json"), "--hash", "nope"])

        assert result.exit_code == 1
        assert "Unsupported hash algorithm" in result.output
