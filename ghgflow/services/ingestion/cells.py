"""Cell model and value coercion for worksheet grids."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Tuple, Union

_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True, slots=True)
class Empty:
    """A blank cell."""


@dataclass(frozen=True, slots=True)
class Number:
    """A numeric cell as stored by the spreadsheet."""

    value: float


@dataclass(frozen=True, slots=True)
class Text:
    """A textual cell, kept verbatim (untrimmed)."""

    value: str


Cell = Union[Empty, Number, Text]
Row = Tuple[Cell, ...]

EMPTY = Empty()


def to_cell(raw: object) -> Cell:
    """Wrap a raw value returned by openpyxl/xlrd into a tagged cell."""

    if raw is None:
        return EMPTY
    if isinstance(raw, bool):
        return Text("TRUE" if raw else "FALSE")
    if isinstance(raw, (int, float)):
        return Number(float(raw))
    if isinstance(raw, (datetime, date, time)):
        return Text(raw.isoformat())
    text = str(raw)
    if text == "":
        return EMPTY
    return Text(text)


def is_empty_row(row: Row) -> bool:
    return all(isinstance(cell, Empty) for cell in row)


def cell_at(row: Row, index: int | None) -> Cell:
    """Return the cell at ``index`` or ``EMPTY`` when the column is absent or short."""

    if index is None or index >= len(row):
        return EMPTY
    return row[index]


def format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def coerce_number(cell: Cell) -> float | None:
    """Convert a cell to a float; ``None`` signals an unparseable value.

    Thousands separators (commas) are stripped from text, then the leading
    number is read, so unit suffixes such as ``"1,200 kg"`` are ignored.
    Blank cells are unparseable rather than zero.
    """

    match cell:
        case Empty():
            return None
        case Number(value=value):
            return value if math.isfinite(value) else None
        case Text(value=value):
            found = _LEADING_NUMBER.match(value.strip().replace(",", ""))
            if found is None:
                return None
            parsed = float(found.group())
            return parsed if math.isfinite(parsed) else None
    raise TypeError(f"unsupported cell: {cell!r}")


def coerce_text(cell: Cell) -> str:
    """Stringify and trim a cell; blank cells become ``""``."""

    match cell:
        case Empty():
            return ""
        case Number(value=value):
            return format_number(value)
        case Text(value=value):
            return value.strip()
    raise TypeError(f"unsupported cell: {cell!r}")


__all__ = [
    "Cell",
    "EMPTY",
    "Empty",
    "Number",
    "Row",
    "Text",
    "cell_at",
    "coerce_number",
    "coerce_text",
    "format_number",
    "is_empty_row",
    "to_cell",
]
