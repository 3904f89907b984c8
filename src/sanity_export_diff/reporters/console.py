"""Console reporter for sanity-export-diff.

This module provides terminal output for comparison reports,
with a per-type table and the warnings of the run.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from sanity_export_diff.dataset.models import Report


# ANSI color codes
class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"
    CYAN = "\033[36m"


class ConsoleReporter:
    """Reporter that outputs comparison reports to the terminal.

    Attributes:
        use_colors: Whether to use ANSI colors in output.
        output: Output stream (defaults to stdout).
        max_changed: Changed ids listed per type before eliding.

    Example:
        >>> reporter = ConsoleReporter()
        >>> reporter.report(report)
        ┌──────────────────────┬─────────┬─────────┬─────────┐
        │ Type                 │ Added   │ Removed │ Changed │
        ├──────────────────────┼─────────┼─────────┼─────────┤
        │ post                 │ 1       │ 0       │ 1       │
        └──────────────────────┴─────────┴─────────┴─────────┘
    """

    def __init__(
        self,
        use_colors: bool = True,
        output: TextIO | None = None,
        max_changed: int = 10,
    ) -> None:
        """Initialize ConsoleReporter.

        Args:
            use_colors: Whether to use ANSI colors. Defaults to True.
            output: Output stream. Defaults to sys.stdout.
            max_changed: Changed ids listed per type before eliding.
        """
        self.output = output or sys.stdout
        self.use_colors = use_colors and _supports_color(self.output)
        self.max_changed = max_changed

    def _color(self, text: str, color: str) -> str:
        """Apply color to text if colors are enabled."""
        if self.use_colors:
            return f"{color}{text}{Colors.RESET}"
        return text

    def _print(self, text: str = "") -> None:
        """Print text to output stream."""
        print(text, file=self.output)

    def report(self, report: Report) -> None:
        """Report a full comparison: header, table, changed ids, warnings.

        Args:
            report: The comparison report.
        """
        self.print_header(f"{report.left_name or 'A'}  ->  {report.right_name or 'B'}")

        if not report.has_changes:
            self.print_success("No differences found.")
        else:
            self._print_type_table(report)
            self._print_changed(report)

        if report.warnings:
            self._print()
            self._print(self._color(f"  {len(report.warnings)} warning(s):", Colors.BOLD))
            for warning in report.warnings:
                self.print_warning(warning.message)
        self._print()

    def _print_type_table(self, report: Report) -> None:
        """Print the added/removed/changed counts of every type."""
        widths = (22, 9, 9, 9)
        headers = ("Type", "Added", "Removed", "Changed")

        def border(left: str, mid: str, right: str) -> str:
            return "  " + left + mid.join("─" * w for w in widths) + right

        def row(cells: tuple[str, ...]) -> str:
            return "  │" + "│".join(f" {c:<{w - 1}}" for c, w in zip(cells, widths)) + "│"

        self._print(border("┌", "┬", "┐"))
        self._print(row(headers))
        self._print(border("├", "┼", "┤"))
        for name, counts in report.summary().items():
            self._print(row((name, str(counts["added"]), str(counts["removed"]), str(counts["changed"]))))
        totals = report.totals()
        self._print(border("├", "┼", "┤"))
        self._print(row(("total", str(totals["added"]), str(totals["removed"]), str(totals["changed"]))))
        self._print(border("└", "┴", "┘"))

    def _print_changed(self, report: Report) -> None:
        """List changed ids with the paths that differ."""
        for name in report:
            changed = report[name].changed
            if not changed:
                continue
            self._print()
            self._print(self._color(f"  {name}", Colors.BOLD))
            for entry in changed[: self.max_changed]:
                paths = ", ".join(dict.fromkeys(entry.paths_changed))
                self._print(f"    {self._color('~', Colors.YELLOW)} {entry.id}: {paths}")
            hidden = len(changed) - self.max_changed
            if hidden > 0:
                self._print(self._color(f"    ... and {hidden} more", Colors.DIM))

    def print_header(self, text: str) -> None:
        """Print a section header.

        Args:
            text: Header text to display.
        """
        self._print()
        self._print(self._color(f"{'=' * 50}", Colors.DIM))
        self._print(self._color(f"  {text}", Colors.BOLD + Colors.CYAN))
        self._print(self._color(f"{'=' * 50}", Colors.DIM))

    def print_success(self, text: str) -> None:
        """Print a success message."""
        self._print(self._color(f"  ✅ {text}", Colors.GREEN))

    def print_warning(self, text: str) -> None:
        """Print a warning message."""
        self._print(self._color(f"  ⚠️  {text}", Colors.YELLOW))


def _supports_color(stream: TextIO) -> bool:
    """Check if the output stream supports ANSI colors.

    Args:
        stream: Output stream to check.

    Returns:
        True if colors are supported, False otherwise.
    """
    if not hasattr(stream, "isatty"):
        return False
    if not stream.isatty():
        return False

    if os.environ.get("NO_COLOR"):
        return False

    return os.environ.get("TERM") != "dumb"
