from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from ghgflow.services.ingestion import demo_dataset, parse_file, parse_workbook, summarize
from ghgflow.services.ingestion.exporter import export_dataset
from ghgflow.services.ingestion.models import MobileSourceRecord
from ghgflow.services.ingestion.report import generate_report
from ghgflow.services.ingestion.summary import records_frame


def test_fixed_co2_total_matches_rows() -> None:
    summary = summarize(demo_dataset())

    assert summary.fixed_co2 == pytest.approx(98.38, abs=1e-9)
    assert summary.mobile_ghg == pytest.approx(154.62, abs=1e-9)
    assert summary.fugitive_quantity == pytest.approx(46.5, abs=1e-9)
    assert (summary.fixed_count, summary.mobile_count, summary.fugitive_count) == (3, 3, 3)
    assert summary.flagged_count == 0


def test_summary_from_parsed_workbook(valid_workbook: bytes) -> None:
    summary = summarize(parse_workbook(valid_workbook).dataset)

    assert summary.fixed_co2 == pytest.approx(98.38, abs=1e-9)
    assert summary.fixed_ch4 == pytest.approx(0.142, abs=1e-9)
    assert summary.to_dict()["mobile_count"] == 2


def test_records_frame_columns() -> None:
    frame = records_frame(demo_dataset().mobile_sources)

    assert list(frame.columns) == [
        "vehicle_type",
        "fuel",
        "annual_consumption",
        "calculation_method",
        "ghg_emissions",
        "error_fields",
        "id",
        "has_error",
    ]
    assert len(frame) == 3

    empty = records_frame([], MobileSourceRecord)
    assert empty.empty
    assert "ghg_emissions" in empty.columns


def test_report_lists_flagged_rows(tmp_path: Path, make_workbook, sheets) -> None:
    sheets["Fixed Sources"][2][0] = "Kiln"
    result = parse_workbook(make_workbook(sheets))

    report_path, flagged_path = generate_report(tmp_path, result, source_name="upload.xlsx")

    text = report_path.read_text(encoding="utf-8")
    assert "Records needing review: 1" in text
    assert "Fixed Sources row 3: Invalid values in equipment_type" in text
    assert flagged_path is not None
    flagged = pd.read_csv(flagged_path)
    assert flagged["sheet"].tolist() == ["Fixed Sources"]
    assert flagged["error_fields"].tolist() == ["equipment_type"]


def test_report_for_rejected_upload(tmp_path: Path) -> None:
    result = parse_workbook(b"garbage")

    report_path, flagged_path = generate_report(tmp_path, result)

    assert flagged_path is None
    assert "Upload rejected" in report_path.read_text(encoding="utf-8")


def test_export_round_trips_through_parser(tmp_path: Path) -> None:
    dataset = demo_dataset()

    path = export_dataset(dataset, tmp_path / "out" / "emissions.xlsx")
    result = parse_file(path)

    assert result.errors == []
    assert result.warnings == []
    assert [r.co2_emissions for r in result.dataset.fixed_sources] == [28.35, 22.78, 47.25]
    assert [r.vehicle_type for r in result.dataset.mobile_sources] == [
        r.vehicle_type for r in dataset.mobile_sources
    ]
    assert result.dataset.fugitive_emissions[1].source == "Valves"
