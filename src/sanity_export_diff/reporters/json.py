"""JSON reporter for sanity-export-diff.

This module provides JSON output for comparison reports: the plain
type mapping read by the web viewer, and an annotated form with
summary and warnings for CI pipelines.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sanity_export_diff.dataset.models import Report


class JSONReporter:
    """Reporter that outputs comparison reports as JSON.

    Attributes:
        indent: JSON indentation level (None for compact).

    Example:
        >>> reporter = JSONReporter()
        >>> print(reporter.report(report))
        {
          "post": {
            "added": ["2"],
            "removed": [],
            "changed": [{"id": "1", "diff": [...]}]
          }
        }
    """

    def __init__(self, indent: int | None = 2) -> None:
        """Initialize JSONReporter.

        Args:
            indent: JSON indentation level. Defaults to 2. Use None for compact output.
        """
        self.indent = indent

    def _get_timestamp(self) -> str:
        """Get current timestamp in ISO 8601 format."""
        return datetime.now(timezone.utc).isoformat(timespec="seconds")

    def _dumps(self, data: Any) -> str:
        return json.dumps(data, indent=self.indent, ensure_ascii=False)

    def report(self, report: Report) -> str:
        """Serialize the type mapping of a report.

        Args:
            report: The comparison report.

        Returns:
            JSON string keyed by record type.
        """
        return self._dumps(report.to_dict())

    def report_to_file(self, report: Report, path: Path | str) -> Path:
        """Write the type mapping of a report to a file.

        Parent directories are created as needed.

        Args:
            report: The comparison report.
            path: Path to the output file.

        Returns:
            The path written.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.report(report), encoding="utf-8")
        return path

    def report_summary(self, report: Report) -> str:
        """Serialize a report with run metadata, totals and warnings.

        Args:
            report: The comparison report.

        Returns:
            JSON string with "timestamp", "datasets", "summary",
            "warnings" and "types" keys.
        """
        data = {
            "timestamp": self._get_timestamp(),
            "datasets": {"left": report.left_name, "right": report.right_name},
            "summary": {
                "totals": report.totals(),
                "types": report.summary(),
            },
            "warnings": [w.to_dict() for w in report.warnings],
            "types": report.to_dict(),
        }
        return self._dumps(data)
