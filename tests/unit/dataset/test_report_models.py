"""Unit tests for comparison report models."""

from __future__ import annotations

import json

import pytest

from sanity_export_diff.dataset.models import (
    ChangeEntry,
    ComparisonWarning,
    Report,
    ReportBuilder,
    TypeReport,
    WarningKind,
)
from sanity_export_diff.diff.models import DeltaKind, FieldDelta


@pytest.fixture
def entry() -> ChangeEntry:
    """A changed record with one edited title."""
    return ChangeEntry(
        id="1",
        diff=(FieldDelta(path=("title",), kind=DeltaKind.EDITED, left="X", right="Y"),),
    )


@pytest.fixture
def report(entry: ChangeEntry) -> Report:
    """Report with one post added, one author removed and one post changed."""
    builder = ReportBuilder(left_name="prod", right_name="staging")
    builder.add_removed("author", "au1")
    builder.add_added("post", "2")
    builder.add_changed("post", entry)
    builder.extend_warnings(
        [ComparisonWarning(kind=WarningKind.TYPE_MISMATCH, message="changed type", record_id="9")]
    )
    return builder.build()


class TestReportBuilder:
    """Tests for ReportBuilder."""

    def test_groups_by_type(self, report: Report) -> None:
        """Results are grouped under their record type."""
        assert list(report) == ["author", "post"]
        assert report["author"].removed == ("au1",)
        assert report["post"].added == ("2",)
        assert report["post"].changed_ids == ["1"]

    def test_empty_builder(self) -> None:
        """No results means no types."""
        report = ReportBuilder().build()

        assert len(report) == 0
        assert not report.has_changes
        assert report.to_dict() == {}

    def test_registered_type_without_results(self) -> None:
        """A registered type is reported empty, in registration order."""
        builder = ReportBuilder()
        builder.register_type("author")
        builder.add_added("post", "1")
        builder.register_type("post")

        report = builder.build()

        assert list(report) == ["author", "post"]
        assert report["author"] == TypeReport()
        assert report["post"].added == ("1",)

    def test_build_is_a_snapshot(self) -> None:
        """Results added after build do not leak into the report."""
        builder = ReportBuilder()
        builder.add_added("post", "1")
        report = builder.build()

        builder.add_added("post", "2")

        assert report["post"].added == ("1",)

    def test_keeps_insertion_order(self) -> None:
        """Ids are not sorted."""
        builder = ReportBuilder()
        for record_id in ("b", "c", "a"):
            builder.add_removed("post", record_id)

        assert builder.build()["post"].removed == ("b", "c", "a")


class TestReport:
    """Tests for Report."""

    def test_is_read_only(self, report: Report) -> None:
        """The type mapping cannot be modified."""
        with pytest.raises(TypeError):
            report.types["page"] = TypeReport()  # type: ignore[index]

    def test_get_missing_type(self, report: Report) -> None:
        """get returns an empty TypeReport for unseen types."""
        assert report.get("page") == TypeReport()
        assert "page" not in report

    def test_summary_and_totals(self, report: Report) -> None:
        """Counts per type and overall."""
        assert report.summary() == {
            "author": {"added": 0, "removed": 1, "changed": 0},
            "post": {"added": 1, "removed": 0, "changed": 1},
        }
        assert report.totals() == {"added": 1, "removed": 1, "changed": 1}
        assert report.has_changes

    def test_to_dict(self, report: Report) -> None:
        """Serialized form is the type mapping in viewer format."""
        data = report.to_dict()

        assert data == {
            "author": {"added": [], "removed": ["au1"], "changed": []},
            "post": {
                "added": ["2"],
                "removed": [],
                "changed": [{"id": "1", "diff": [{"kind": "E", "path": ["title"], "lhs": "X", "rhs": "Y"}]}],
            },
        }
        json.dumps(data)

    def test_warnings(self, report: Report) -> None:
        """Warnings are kept alongside the results."""
        assert len(report.warnings) == 1
        assert report.warnings[0].to_dict() == {
            "kind": "type_mismatch",
            "message": "changed type",
            "record_id": "9",
            "path": None,
        }


class TestChangeEntry:
    """Tests for ChangeEntry and TypeReport helpers."""

    def test_paths_changed(self) -> None:
        """paths_changed lists dotted paths."""
        entry = ChangeEntry(
            id="1",
            diff=(
                FieldDelta(path=("body", 0, "text"), kind=DeltaKind.EDITED, left="a", right="b"),
                FieldDelta(path=("slug",), kind=DeltaKind.ADDED, right={"current": "x"}),
            ),
        )

        assert entry.paths_changed == ["body[0].text", "slug"]

    def test_type_report_has_changes(self, entry: ChangeEntry) -> None:
        """A TypeReport with any list filled has changes."""
        assert not TypeReport().has_changes
        assert TypeReport(changed=(entry,)).has_changes
