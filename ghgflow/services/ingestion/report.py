"""Reporting utilities for parsed emissions workbooks."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from .models import (
    AtmosphericEmissionsDataset,
    FixedSourceRecord,
    FugitiveEmissionRecord,
    MobileSourceRecord,
    ParseResult,
)
from .summary import records_frame, summarize

_SECTIONS = (
    ("Fixed Sources", "fixed_sources", FixedSourceRecord),
    ("Mobile Sources", "mobile_sources", MobileSourceRecord),
    ("Fugitive Emissions", "fugitive_emissions", FugitiveEmissionRecord),
)


def _flagged_frame(dataset: AtmosphericEmissionsDataset) -> pd.DataFrame:
    frames = []
    for label, kind, record_type in _SECTIONS:
        records = [r for r in dataset.records(kind) if r.has_error]
        frame = records_frame(records, record_type)
        if frame.empty:
            continue
        frame["error_fields"] = frame["error_fields"].map(lambda items: "; ".join(items))
        frame.insert(0, "sheet", label)
        frames.append(frame)
    if not frames:
        return pd.DataFrame()
    return pd.concat(frames, ignore_index=True)


def generate_report(
    output_dir: Path,
    result: ParseResult,
    source_name: str | None = None,
) -> tuple[Path, Path | None]:
    """Generate a Markdown report and a CSV of flagged rows.

    Returns:
        ``(report_path, flagged_csv_path)``; the CSV path is ``None`` when no
        record is flagged or the parse produced no dataset.
    """

    output_dir.mkdir(parents=True, exist_ok=True)
    report_path = output_dir / "emissions_report.md"
    flagged_path: Path | None = None

    lines = ["# Emissions Upload Report", ""]
    if source_name:
        lines.append(f"Source: `{source_name}`")
        lines.append("")

    if result.dataset is None:
        lines.append("**Upload rejected.**")
        lines.append("")
        lines.extend(f"- {message}" for message in result.errors)
        report_path.write_text("\n".join(lines), encoding="utf-8")
        return report_path, None

    summary = summarize(result.dataset)
    lines.append(f"- Fixed sources: {summary.fixed_count}")
    lines.append(f"- Mobile sources: {summary.mobile_count}")
    lines.append(f"- Fugitive emissions: {summary.fugitive_count}")
    lines.append(f"- Records needing review: {summary.flagged_count}")
    lines.append("")
    lines.append("## Totals")
    lines.append(f"- CO₂ (fixed): {summary.fixed_co2:.4f}")
    lines.append(f"- CH₄ (fixed): {summary.fixed_ch4:.4f}")
    lines.append(f"- N₂O (fixed): {summary.fixed_n2o:.4f}")
    lines.append(f"- GHG (mobile): {summary.mobile_ghg:.4f}")
    lines.append(f"- Fugitive quantity: {summary.fugitive_quantity:.4f}")
    lines.append("")

    if result.errors:
        lines.append("## Validation errors")
        lines.extend(f"- {message}" for message in result.errors)
        lines.append("")
    if result.warnings:
        lines.append("## Warnings")
        lines.extend(f"- {message}" for message in result.warnings)
        lines.append("")

    flagged = _flagged_frame(result.dataset)
    if not flagged.empty:
        flagged_path = output_dir / "flagged_rows.csv"
        flagged.to_csv(flagged_path, index=False)
        lines.append(f"Flagged records exported to `{flagged_path.name}`.")

    report_path.write_text("\n".join(lines), encoding="utf-8")
    return report_path, flagged_path


__all__ = ["generate_report"]
