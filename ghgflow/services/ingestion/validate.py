"""Row validation for the three emissions sheets."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Sequence, Tuple

from .cells import Cell, Row, cell_at, coerce_number, coerce_text, is_empty_row, to_cell
from .columns import build_column_index
from .models import (
    EQUIPMENT_TYPES,
    FUGITIVE_SOURCES,
    FixedSourceRecord,
    FugitiveEmissionRecord,
    MobileSourceRecord,
    SheetOutcome,
)

LOGGER = logging.getLogger(__name__)

TEXT = "text"
NUMBER = "number"
CHOICE = "choice"


@dataclass(frozen=True, slots=True)
class FieldRule:
    """How one record attribute is read from its column and checked."""

    name: str
    header: str
    kind: str = TEXT
    choices: Tuple[str, ...] = ()
    fallback: str = ""

    @property
    def checked(self) -> bool:
        return self.kind in (NUMBER, CHOICE)


FIXED_SOURCE_RULES: Tuple[FieldRule, ...] = (
    FieldRule("equipment_type", "Equipment Type", CHOICE, EQUIPMENT_TYPES, "Other"),
    FieldRule("fuel", "Fuel"),
    FieldRule("annual_consumption", "Annual Consumption", NUMBER),
    FieldRule("operating_hours", "Operating Hours", NUMBER),
    FieldRule("estimation_method", "Estimation Method"),
    FieldRule("co2_emissions", "CO₂ Emissions", NUMBER),
    FieldRule("ch4_emissions", "CH₄ Emissions", NUMBER),
    FieldRule("n2o_emissions", "N₂O Emissions", NUMBER),
)

MOBILE_SOURCE_RULES: Tuple[FieldRule, ...] = (
    FieldRule("vehicle_type", "Vehicle Type"),
    FieldRule("fuel", "Fuel"),
    FieldRule("annual_consumption", "Annual Consumption", NUMBER),
    FieldRule("calculation_method", "Calculation Method"),
    FieldRule("ghg_emissions", "GHG Emissions", NUMBER),
)

FUGITIVE_EMISSION_RULES: Tuple[FieldRule, ...] = (
    FieldRule("gas_type", "Gas Type"),
    FieldRule("source", "Source", CHOICE, FUGITIVE_SOURCES, "Other"),
    FieldRule("estimated_quantity", "Estimated Quantity", NUMBER),
    FieldRule("methodology", "Methodology"),
)

RULES_BY_RECORD: Dict[type, Tuple[FieldRule, ...]] = {
    FixedSourceRecord: FIXED_SOURCE_RULES,
    MobileSourceRecord: MOBILE_SOURCE_RULES,
    FugitiveEmissionRecord: FUGITIVE_EMISSION_RULES,
}


def check_cell(rule: FieldRule, cell: Cell) -> Tuple[object, bool]:
    """Return ``(value, valid)`` for a cell read under ``rule``.

    Invalid numbers come back as ``0.0``. Blank choices fall back silently to
    ``rule.fallback``; unrecognized non-blank choices are kept verbatim but
    reported invalid.
    """

    if rule.kind == NUMBER:
        number = coerce_number(cell)
        if number is None:
            return 0.0, False
        return number, True

    text = coerce_text(cell)
    if rule.kind == CHOICE:
        if not text:
            return rule.fallback, True
        return text, text in rule.choices
    return text, True


def check_value(rule: FieldRule, raw: object) -> Tuple[object, bool]:
    """Like :func:`check_cell` for a plain Python value (e.g. an edit)."""

    return check_cell(rule, to_cell(raw))


def _row_message(label: str, row_number: int, error_fields: Sequence[str]) -> str:
    return f"{label} row {row_number}: Invalid values in {', '.join(error_fields)}"


def validate_sheet(
    rows: Sequence[Row],
    rules: Sequence[FieldRule],
    record_factory: Callable[..., object],
    label: str,
    column_aliases: Mapping[str, Sequence[str]] | None = None,
) -> SheetOutcome:
    """Validate a sheet grid whose first row holds the headers.

    Entirely blank rows are skipped. Every other row yields exactly one record;
    fields that fail coercion or their domain check are defaulted and listed in
    the record's ``error_fields``, and the row contributes one error message.
    The reported row number is the grid index plus one, i.e. the worksheet row
    when the grid starts at the sheet's first row.
    """

    outcome = SheetOutcome(records=[])
    if len(rows) < 2:
        outcome.errors.append(f"{label} sheet is empty or has no data rows")
        return outcome

    aliases = column_aliases or {}
    candidates = {rule.name: [rule.header, *aliases.get(rule.name, [])] for rule in rules}
    headers = [coerce_text(cell) for cell in rows[0]]
    columns = build_column_index(headers, candidates)
    headers_by_name = {rule.name: rule.header for rule in rules}
    for name in columns.missing:
        outcome.warnings.append(f"{label}: column '{headers_by_name[name]}' not found")
    if columns.missing:
        LOGGER.warning("%s: unmatched columns %s (headers: %s)", label, columns.missing, headers)

    for idx in range(1, len(rows)):
        row = rows[idx]
        if is_empty_row(row):
            continue

        values: Dict[str, object] = {}
        error_fields: List[str] = []
        for rule in rules:
            value, valid = check_cell(rule, cell_at(row, columns.get(rule.name)))
            values[rule.name] = value
            if not valid:
                error_fields.append(rule.name)

        if error_fields:
            outcome.errors.append(_row_message(label, idx + 1, error_fields))
        outcome.records.append(record_factory(**values, error_fields=error_fields))

    LOGGER.debug(
        "%s: %s records, %s rows with errors", label, len(outcome.records), len(outcome.errors)
    )
    return outcome


def validate_fixed_sources(
    rows: Sequence[Row],
    label: str = "Fixed Sources",
    column_aliases: Mapping[str, Sequence[str]] | None = None,
) -> SheetOutcome:
    return validate_sheet(rows, FIXED_SOURCE_RULES, FixedSourceRecord, label, column_aliases)


def validate_mobile_sources(
    rows: Sequence[Row],
    label: str = "Mobile Sources",
    column_aliases: Mapping[str, Sequence[str]] | None = None,
) -> SheetOutcome:
    return validate_sheet(rows, MOBILE_SOURCE_RULES, MobileSourceRecord, label, column_aliases)


def validate_fugitive_emissions(
    rows: Sequence[Row],
    label: str = "Fugitive Emissions",
    column_aliases: Mapping[str, Sequence[str]] | None = None,
) -> SheetOutcome:
    return validate_sheet(
        rows, FUGITIVE_EMISSION_RULES, FugitiveEmissionRecord, label, column_aliases
    )


__all__ = [
    "FIXED_SOURCE_RULES",
    "FUGITIVE_EMISSION_RULES",
    "FieldRule",
    "MOBILE_SOURCE_RULES",
    "RULES_BY_RECORD",
    "check_cell",
    "check_value",
    "validate_fixed_sources",
    "validate_fugitive_emissions",
    "validate_mobile_sources",
    "validate_sheet",
]
