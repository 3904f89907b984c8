"""Main CLI entry point for sanity-export-diff.

This module defines the Typer application and all CLI commands.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

from sanity_export_diff import __version__
from sanity_export_diff.core.config import load_settings
from sanity_export_diff.core.exceptions import ExportDiffError

# Create the main Typer app
app = typer.Typer(
    name="sanity-export-diff",
    help="sanity-export-diff: Compare two Sanity dataset exports.",
    add_completion=False,
    no_args_is_help=True,
)

# Global state for options
state: dict[str, bool] = {
    "json": False,
    "no_color": False,
}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"sanity-export-diff v{__version__}")
        raise typer.Exit()


def _progress(message: str) -> None:
    """Print a progress line to stderr unless JSON output was requested."""
    if not state["json"]:
        typer.echo(f"  {message}", err=True)


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


def _configure_logging(level: str) -> None:
    """Apply the configured level to the library loggers.

    Warnings reach stderr through logging's last-resort handler; a handler
    is only installed when a more verbose level is requested.
    """
    logging.getLogger("sanity_export_diff").setLevel(level)
    if logging.getLevelName(level) < logging.WARNING and not logging.getLogger().handlers:
        logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")


@app.callback()
def main(
    version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Print the report as JSON instead of a summary table.",
        ),
    ] = False,
    no_color: Annotated[
        bool,
        typer.Option(
            "--no-color",
            help="Disable colored output.",
        ),
    ] = False,
) -> None:
    """sanity-export-diff: Compare two Sanity dataset exports.

    Reports added, removed and changed documents per type, ignoring
    revision metadata and renamed assets with identical content.
    """
    state["json"] = json_output
    state["no_color"] = no_color


@app.command()
def version() -> None:
    """Show the current version."""
    typer.echo(f"sanity-export-diff v{__version__}")


@app.command()
def compare(
    dataset_a: Annotated[
        Path,
        typer.Argument(help="First export: directory with data.ndjson, or .tar.gz archive."),
    ],
    dataset_b: Annotated[
        Path,
        typer.Argument(help="Second export: directory with data.ndjson, or .tar.gz archive."),
    ],
    output: Annotated[
        str | None,
        typer.Option(
            "--output",
            "-o",
            help="Report file path. Defaults to web/data.json.",
        ),
    ] = None,
    workdir: Annotated[
        Path | None,
        typer.Option(
            "--workdir",
            "-w",
            help="Directory archives are extracted into. Defaults to the current directory.",
        ),
    ] = None,
    ignore: Annotated[
        list[str] | None,
        typer.Option(
            "--ignore",
            "-i",
            help="Extra field name to ignore at every depth (repeatable).",
        ),
    ] = None,
    asset_field: Annotated[
        str | None,
        typer.Option(
            "--asset-field",
            help="Field holding asset references compared by content.",
        ),
    ] = None,
    hash_algorithm: Annotated[
        str | None,
        typer.Option(
            "--hash",
            help="Digest used to compare asset files (e.g. md5, sha256).",
        ),
    ] = None,
    fail_on_changes: Annotated[
        bool,
        typer.Option(
            "--fail-on-changes",
            help="Exit with code 1 if the datasets differ.",
        ),
    ] = False,
) -> None:
    """Compare two dataset exports and write a report.

    Examples:
        sanity-export-diff compare ../prod.tar.gz ../staging.tar.gz
        sanity-export-diff compare exports/prod exports/staging -o diff.json
        sanity-export-diff --json compare prod/ staging/ --fail-on-changes
    """
    from sanity_export_diff.dataset.diff import compare_datasets
    from sanity_export_diff.dataset.io import is_archive, load_dataset
    from sanity_export_diff.reporters import ConsoleReporter, JSONReporter

    try:
        settings = load_settings(
            asset_field=asset_field,
            hash_algorithm=hash_algorithm,
            output_path=output,
        )
    except ExportDiffError as e:
        raise _fail(str(e)) from e

    _configure_logging(settings.log_level)
    ignored_fields = [*settings.ignored_fields, *(ignore or [])]

    try:
        datasets = []
        for path in (dataset_a, dataset_b):
            _progress(f"Decompressing {path}" if is_archive(path) else f"Loading {path}")
            datasets.append(load_dataset(path, workdir))

        _progress("Comparing datasets")
        report = compare_datasets(
            datasets[0],
            datasets[1],
            ignored_fields=ignored_fields,
            asset_field=settings.asset_field,
            hash_algorithm=settings.hash_algorithm,
        )
    except ExportDiffError as e:
        raise _fail(str(e)) from e

    json_reporter = JSONReporter()
    try:
        written = json_reporter.report_to_file(report, settings.output_path)
    except OSError as e:
        raise _fail(f"Cannot write report to {settings.output_path}: {e}") from e

    if state["json"]:
        typer.echo(json_reporter.report_summary(report))
    else:
        ConsoleReporter(use_colors=not state["no_color"]).report(report)
        _progress(f"Report saved to: {written}")

    if fail_on_changes and report.has_changes:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
