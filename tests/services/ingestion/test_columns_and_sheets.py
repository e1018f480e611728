from __future__ import annotations

import pytest

from ghgflow.services.ingestion.columns import build_column_index, normalize_column_name
from ghgflow.services.ingestion.sheets import find_sheet, locate_sheet


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("CO₂ Emissions", "co2emissions"),
        ("CH₄ Emissions", "ch4emissions"),
        ("N₂O-Emissions", "n2oemissions"),
        ("  Annual_Consumption ", "annualconsumption"),
        ("Operating\tHours", "operatinghours"),
        ("Horas de Operación", "horasdeoperación"),
        ("", ""),
    ],
)
def test_normalize_column_name(header: str, expected: str) -> None:
    assert normalize_column_name(header) == expected


@pytest.mark.parametrize(
    "header",
    ["GHG Emissions", "ch₄ - emissions", "Estimated__Quantity", "Tipo de Vehículo", "  "],
)
def test_normalize_column_name_is_idempotent(header: str) -> None:
    once = normalize_column_name(header)
    assert normalize_column_name(once) == once


def test_column_index_prefers_first_containing_header() -> None:
    index = build_column_index(
        ["Fuel Type", "Fuel", "GHG Emissions (t CO2e)"],
        {"fuel": ["Fuel"], "ghg_emissions": ["GHG Emissions"], "vehicle_type": ["Vehicle Type"]},
    )

    assert index.get("fuel") == 0
    assert index.get("ghg_emissions") == 2
    assert index.get("vehicle_type") is None
    assert index.missing == ["vehicle_type"]


def test_column_index_falls_back_to_aliases() -> None:
    index = build_column_index(
        ["Tipo de Gas", "Fuente", "Cantidad Estimada"],
        {"source": ["Source", "Fuente"], "gas_type": ["Gas Type", "Tipo de Gas"]},
    )

    assert index.positions == {"source": 1, "gas_type": 0}


def test_find_sheet_accepts_containment_either_way() -> None:
    assert find_sheet(["Summary", "FixedSources 2024"], "Fixed Sources") == "FixedSources 2024"
    assert find_sheet(["Fixed"], "Fixed Sources") == "Fixed"


def test_find_sheet_keyword_rule_ignores_word_order() -> None:
    names = ["Fixed Sources", "Sources (Mobile)", "Fugitive"]

    assert find_sheet(names, "Mobile Sources") == "Sources (Mobile)"


def test_find_sheet_returns_first_match() -> None:
    names = ["Fixed Sources", "fixed sources copy"]

    assert find_sheet(names, "Fixed Sources") == "Fixed Sources"


def test_find_sheet_does_not_cross_logical_sheets() -> None:
    names = ["3.1 Fuentes Fijas", "Mobile Srcs", "Emisiones Fugitivas"]

    assert find_sheet(names, "Fixed Sources") is None
    assert find_sheet(["Mobile Srcs"], "Fixed Sources") is None


def test_locate_sheet_tries_synonyms_in_order() -> None:
    names = ["3.1 Fuentes Fijas", "Mobile Srcs", "Emisiones Fugitivas"]

    assert locate_sheet(names, ["Fixed Sources", "Fuentes Fijas"]) == "3.1 Fuentes Fijas"
    assert locate_sheet(names, ["Fugitive Emissions", "Emisiones Fugitivas"]) == "Emisiones Fugitivas"
    assert locate_sheet(names, ["Tanks"]) is None
