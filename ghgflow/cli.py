"""Typer based command line entry points for GHGFlow."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer

from ghgflow.config import load_ingestion_config
from ghgflow.core.logger import get_logger, set_level
from ghgflow.services.ingestion import ParseResult, parse_file, summarize
from ghgflow.services.ingestion.exporter import export_dataset
from ghgflow.services.ingestion.report import generate_report

app = typer.Typer(help="Emissions workbook ingestion utilities.")

_WORKBOOK_SUFFIXES = {".xlsx", ".xls"}


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    try:
        set_level(log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def cap_errors(errors: List[str], limit: int) -> List[str]:
    """Keep the first ``limit`` messages and summarize the rest."""

    if len(errors) <= limit:
        return list(errors)
    return [*errors[:limit], f"...and {len(errors) - limit} more errors"]


def _load(workbook: Path, config_path: Optional[Path]) -> tuple[ParseResult, int]:
    if workbook.suffix.lower() not in _WORKBOOK_SUFFIXES:
        raise typer.BadParameter("Please provide a valid Excel file (.xlsx or .xls)")
    config = load_ingestion_config(config_path)
    return parse_file(workbook, config=config), config.max_display_errors


def _echo_messages(result: ParseResult, limit: int) -> None:
    for message in cap_errors(result.errors, limit):
        typer.secho(message, fg=typer.colors.RED, err=True)
    for message in result.warnings:
        typer.secho(message, fg=typer.colors.YELLOW, err=True)


_WORKBOOK_ARG = typer.Argument(..., exists=True, readable=True, resolve_path=True, dir_okay=False)
_CONFIG_OPT = typer.Option(
    None, "--config", help="Ingestion config YAML", exists=True, readable=True, resolve_path=True
)


@app.command("parse")
def cli_parse(
    workbook: Path = _WORKBOOK_ARG,
    config: Optional[Path] = _CONFIG_OPT,
    as_json: bool = typer.Option(False, "--json", help="Print the parsed dataset as JSON"),
) -> None:
    """Parse and validate an emissions workbook."""

    result, limit = _load(workbook, config)
    _echo_messages(result, limit)
    if result.dataset is None:
        raise typer.Exit(code=1)

    if as_json:
        payload = {
            "data": result.dataset.to_dict(),
            "errors": result.errors,
            "warnings": result.warnings,
        }
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    dataset = result.dataset
    typer.echo(
        f"Loaded {len(dataset.fixed_sources)} fixed sources, "
        f"{len(dataset.mobile_sources)} mobile sources, "
        f"{len(dataset.fugitive_emissions)} fugitive emissions"
    )
    if dataset.has_errors:
        typer.echo("Some records need review before they can be saved.")


@app.command("summary")
def cli_summary(
    workbook: Path = _WORKBOOK_ARG,
    config: Optional[Path] = _CONFIG_OPT,
) -> None:
    """Print emission totals for a workbook."""

    result, limit = _load(workbook, config)
    _echo_messages(result, limit)
    if result.dataset is None:
        raise typer.Exit(code=1)
    typer.echo(json.dumps(summarize(result.dataset).to_dict(), indent=2))


@app.command("report")
def cli_report(
    workbook: Path = _WORKBOOK_ARG,
    output: Path = typer.Option(..., "--output", "-o", help="Directory for generated files", resolve_path=True),
    config: Optional[Path] = _CONFIG_OPT,
) -> None:
    """Write a Markdown report and a CSV of flagged rows."""

    logger = get_logger()
    result, limit = _load(workbook, config)
    _echo_messages(result, limit)
    report_path, flagged_path = generate_report(output, result, source_name=workbook.name)
    typer.echo(f"Report: {report_path}")
    if flagged_path:
        typer.echo(f"Flagged rows CSV: {flagged_path}")
    logger.info("CLI report completed: output=%s", report_path)
    if result.dataset is None:
        raise typer.Exit(code=1)


@app.command("export")
def cli_export(
    workbook: Path = _WORKBOOK_ARG,
    output: Path = typer.Option(..., "--output", "-o", help="Target .xlsx path", resolve_path=True),
    config: Optional[Path] = _CONFIG_OPT,
    force: bool = typer.Option(False, help="Export even when records are flagged"),
) -> None:
    """Re-export a parsed workbook in the canonical upload layout."""

    result, limit = _load(workbook, config)
    _echo_messages(result, limit)
    if result.dataset is None:
        raise typer.Exit(code=1)
    if result.dataset.has_errors and not force:
        typer.secho("Records need review; use --force to export anyway.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)
    path = export_dataset(result.dataset, output)
    typer.echo(f"Exported: {path}")


if __name__ == "__main__":
    app()
