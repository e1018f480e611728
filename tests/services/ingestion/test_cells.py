from __future__ import annotations

from datetime import datetime

import pytest

from ghgflow.services.ingestion.cells import (
    EMPTY,
    Number,
    Text,
    cell_at,
    coerce_number,
    coerce_text,
    is_empty_row,
    to_cell,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, EMPTY),
        ("", EMPTY),
        (5, Number(5.0)),
        (2.5, Number(2.5)),
        (True, Text("TRUE")),
        ("  Boiler ", Text("  Boiler ")),
        (datetime(2024, 1, 2), Text("2024-01-02T00:00:00")),
    ],
)
def test_to_cell(raw: object, expected: object) -> None:
    assert to_cell(raw) == expected


@pytest.mark.parametrize(
    ("cell", "expected"),
    [
        (EMPTY, None),
        (Number(3.0), 3.0),
        (Number(0.0), 0.0),
        (Text(" 1,234.5 "), 1234.5),
        (Text("-12"), -12.0),
        (Text("1e3"), 1000.0),
        (Text("abc"), None),
        (Text("   "), None),
        (Text("nan"), None),
        (Text("inf"), None),
        (Text("1e999"), None),
    ],
)
def test_coerce_number(cell, expected) -> None:
    assert coerce_number(cell) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1,200 kg", 1200.0),
        ("28.35 t", 28.35),
        ("12abc", 12.0),
        (".5 m3", 0.5),
        ("4500h", 4500.0),
        ("kg 12", None),
        ("-", None),
    ],
)
def test_coerce_number_reads_leading_number(raw: str, expected: float | None) -> None:
    assert coerce_number(Text(raw)) == expected


@pytest.mark.parametrize(
    ("cell", "expected"),
    [
        (EMPTY, ""),
        (Number(15000.0), "15000"),
        (Number(2.5), "2.5"),
        (Text("  Diesel  "), "Diesel"),
    ],
)
def test_coerce_text(cell, expected) -> None:
    assert coerce_text(cell) == expected


def test_row_helpers() -> None:
    row = (EMPTY, Text("x"))

    assert not is_empty_row(row)
    assert is_empty_row((EMPTY, EMPTY))
    assert is_empty_row(())
    assert cell_at(row, 1) == Text("x")
    assert cell_at(row, 5) is EMPTY
    assert cell_at(row, None) is EMPTY
