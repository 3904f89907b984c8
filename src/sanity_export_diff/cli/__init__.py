"""CLI module for sanity-export-diff.

This module provides the command-line interface using Typer.
"""

from __future__ import annotations

from sanity_export_diff.cli.main import app

__all__ = ["app"]
