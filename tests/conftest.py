from __future__ import annotations

import logging
import sys
from io import BytesIO
from pathlib import Path
from typing import Callable, Dict, Iterator, List

import pytest
from openpyxl import Workbook

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

FIXED_HEADER = [
    "Equipment Type",
    "Fuel",
    "Annual Consumption",
    "Operating Hours",
    "Estimation Method",
    "CO₂ Emissions",
    "CH₄ Emissions",
    "N₂O Emissions",
]
MOBILE_HEADER = ["Vehicle Type", "Fuel", "Annual Consumption", "Calculation Method", "GHG Emissions"]
FUGITIVE_HEADER = ["Gas Type", "Source", "Estimated Quantity", "Methodology"]

FIXED_ROWS = [
    ["Boiler", "Natural Gas", 15000, 4500, "Direct measurement", 28.35, 0.015, 0.003],
    ["Generator", "Diesel", "8,500", 2200, "Emission factor", 22.78, 0.102, 0.017],
    ["Furnace", "Natural Gas", 25000, 6000, "Mass balance", 47.25, 0.025, 0.005],
]
MOBILE_ROWS = [
    ["Heavy truck", "Diesel", 45000, "Fuel based", 120.6],
    ["Light vehicle", "Gasoline", 12000, "Distance based", 27.72],
]
FUGITIVE_ROWS = [
    ["R-134a", "Refrigeration", 25.5, "Mass balance"],
    ["Methane", "Valves", 12.3, "Emission factor"],
]

SheetRows = Dict[str, List[List[object]]]


def build_workbook(sheets: SheetRows) -> bytes:
    """Serialize ``{sheet title: rows}`` into xlsx bytes."""

    wb = Workbook()
    wb.remove(wb.active)
    for title, rows in sheets.items():
        ws = wb.create_sheet(title=title)
        for row in rows:
            ws.append(row)
    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def standard_sheets() -> SheetRows:
    return {
        "Fixed Sources": [list(FIXED_HEADER), *[list(r) for r in FIXED_ROWS]],
        "Mobile Sources": [list(MOBILE_HEADER), *[list(r) for r in MOBILE_ROWS]],
        "Fugitive Emissions": [list(FUGITIVE_HEADER), *[list(r) for r in FUGITIVE_ROWS]],
    }


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    monkeypatch.setenv("GHGFLOW_HOME", str(tmp_path / "home"))
    monkeypatch.delenv("GHGFLOW_INGESTION_CONFIG", raising=False)
    yield
    logger = logging.getLogger("ghgflow")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture()
def sheets() -> SheetRows:
    return standard_sheets()


@pytest.fixture()
def make_workbook() -> Callable[[SheetRows], bytes]:
    return build_workbook


@pytest.fixture()
def valid_workbook() -> bytes:
    return build_workbook(standard_sheets())
