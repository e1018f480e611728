"""Decode uploaded workbook bytes into immutable sheet grids."""

# Module responsibilities:
# - Pick the reader engine from the container signature (.xlsx zip vs. legacy .xls OLE2).
# - Flatten every worksheet into tagged-cell rows starting at its first used row.
# - Surface any reader failure as WorkbookDecodeError.

from __future__ import annotations

import logging
import zipfile
from dataclasses import dataclass
from io import BytesIO
from typing import Iterable, Tuple

import xlrd
from openpyxl import load_workbook

from ghgflow.core.errors import WorkbookDecodeError

from .cells import Row, is_empty_row, to_cell

LOGGER = logging.getLogger(__name__)

_OLE2_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


@dataclass(frozen=True, slots=True)
class Sheet:
    """A named worksheet as a grid of cells."""

    name: str
    rows: Tuple[Row, ...]


@dataclass(frozen=True, slots=True)
class Workbook:
    """Ordered worksheets of an uploaded file."""

    sheets: Tuple[Sheet, ...]

    @property
    def sheet_names(self) -> list[str]:
        return [sheet.name for sheet in self.sheets]

    def sheet(self, name: str) -> Sheet:
        for sheet in self.sheets:
            if sheet.name == name:
                return sheet
        raise KeyError(f"Sheet '{name}' not found in workbook")


def _to_row(values: Iterable[object]) -> Row:
    return tuple(to_cell(value) for value in values)


def _from_first_used_row(rows: Iterable[Row]) -> Tuple[Row, ...]:
    grid = list(rows)
    for idx, row in enumerate(grid):
        if not is_empty_row(row):
            return tuple(grid[idx:])
    return ()


def _read_xlsx(data: bytes) -> Workbook:
    wb = load_workbook(BytesIO(data), data_only=True)
    try:
        sheets = []
        for ws in wb.worksheets:
            rows = ws.iter_rows(
                min_row=ws.min_row, max_row=ws.max_row, max_col=ws.max_column, values_only=True
            )
            grid = _from_first_used_row(_to_row(r) for r in rows)
            sheets.append(Sheet(name=ws.title, rows=grid))
        return Workbook(sheets=tuple(sheets))
    finally:
        wb.close()


def _xls_value(cell: xlrd.sheet.Cell, datemode: int) -> object:
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype == xlrd.XL_CELL_ERROR:
        return xlrd.error_text_from_code.get(cell.value, "#ERR")
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate_as_datetime(cell.value, datemode)
    return cell.value


def _read_xls(data: bytes) -> Workbook:
    book = xlrd.open_workbook(file_contents=data)
    try:
        sheets = []
        for sh in book.sheets():
            rows = (
                _to_row(_xls_value(cell, book.datemode) for cell in sh.row(idx))
                for idx in range(sh.nrows)
            )
            sheets.append(Sheet(name=sh.name, rows=_from_first_used_row(rows)))
        return Workbook(sheets=tuple(sheets))
    finally:
        book.release_resources()


def read_workbook(data: bytes) -> Workbook:
    """Decode an ``.xlsx`` or ``.xls`` payload.

    Raises:
        WorkbookDecodeError: When the bytes are empty, of an unknown container
            type, or rejected by the reader.
    """

    if not data:
        raise WorkbookDecodeError("empty workbook payload")

    try:
        if data.startswith(_OLE2_SIGNATURE):
            workbook = _read_xls(data)
        elif zipfile.is_zipfile(BytesIO(data)):
            workbook = _read_xlsx(data)
        else:
            raise WorkbookDecodeError("unrecognized workbook container")
    except WorkbookDecodeError:
        raise
    except Exception as exc:  # noqa: BLE001 - reader libraries raise assorted errors
        raise WorkbookDecodeError(f"failed to decode workbook: {exc}") from exc

    LOGGER.info(
        "Workbook decoded: %s sheets (%s)", len(workbook.sheets), ", ".join(workbook.sheet_names)
    )
    return workbook


__all__ = ["Sheet", "Workbook", "read_workbook"]
