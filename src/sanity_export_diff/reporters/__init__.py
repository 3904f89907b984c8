"""Reporters module for sanity-export-diff.

This module provides output formatters for comparison reports:
- Console: Terminal summary table and warnings
- JSON: Viewer data file and machine-readable summary
"""

from __future__ import annotations

from sanity_export_diff.reporters.console import ConsoleReporter
from sanity_export_diff.reporters.json import JSONReporter

__all__ = [
    "ConsoleReporter",
    "JSONReporter",
]
