"""Public API for the emissions workbook ingestion service."""

from __future__ import annotations

import logging
from pathlib import Path

from ghgflow.config import (
    FIXED_SOURCES,
    FUGITIVE_EMISSIONS,
    MOBILE_SOURCES,
    IngestionConfig,
    load_ingestion_config,
)
from ghgflow.core.errors import WorkbookDecodeError

from .models import AtmosphericEmissionsDataset, ParseResult
from .sheets import locate_sheet
from .validate import validate_fixed_sources, validate_fugitive_emissions, validate_mobile_sources
from .workbook import read_workbook

LOGGER = logging.getLogger(__name__)

DECODE_FAILURE_MESSAGE = "Failed to parse the Excel file, please make sure it is a valid workbook."

SHEET_ORDER = (FIXED_SOURCES, MOBILE_SOURCES, FUGITIVE_EMISSIONS)

_VALIDATORS = {
    FIXED_SOURCES: validate_fixed_sources,
    MOBILE_SOURCES: validate_mobile_sources,
    FUGITIVE_EMISSIONS: validate_fugitive_emissions,
}


def parse_workbook(data: bytes, config: IngestionConfig | None = None) -> ParseResult:
    """Parse an emissions workbook into a dataset.

    Only an unreadable container or a missing logical sheet yields
    ``dataset=None``. Row-level problems are reported in ``errors`` next to a
    dataset whose affected fields are defaulted and flagged.
    """

    config = config or load_ingestion_config()

    try:
        workbook = read_workbook(data)
    except WorkbookDecodeError as exc:
        LOGGER.error("Workbook decode failed: %s", exc)
        return ParseResult(dataset=None, errors=[DECODE_FAILURE_MESSAGE])

    sheet_names = workbook.sheet_names
    located: dict[str, str] = {}
    missing: list[str] = []
    for key in SHEET_ORDER:
        spec = config.sheet(key)
        found = locate_sheet(sheet_names, spec.candidates)
        if found is None:
            missing.append(spec.label)
        else:
            located[key] = found

    if missing:
        LOGGER.warning("Missing required sheets %s; workbook has %s", missing, sheet_names)
        return ParseResult(
            dataset=None,
            errors=[
                f"Missing required sheets: {', '.join(missing)}",
                f"Found sheets: {', '.join(sheet_names)}",
            ],
        )

    errors: list[str] = []
    warnings: list[str] = []
    outcomes = {}
    for key in SHEET_ORDER:
        spec = config.sheet(key)
        LOGGER.info("Validating sheet '%s' as %s", located[key], spec.label)
        outcome = _VALIDATORS[key](
            workbook.sheet(located[key]).rows,
            label=spec.label,
            column_aliases=spec.column_aliases,
        )
        errors.extend(outcome.errors)
        warnings.extend(outcome.warnings)
        outcomes[key] = outcome

    dataset = AtmosphericEmissionsDataset(
        fixed_sources=outcomes[FIXED_SOURCES].records,
        mobile_sources=outcomes[MOBILE_SOURCES].records,
        fugitive_emissions=outcomes[FUGITIVE_EMISSIONS].records,
    )

    LOGGER.info(
        "Parsed %s fixed / %s mobile / %s fugitive records with %s errors",
        len(dataset.fixed_sources),
        len(dataset.mobile_sources),
        len(dataset.fugitive_emissions),
        len(errors),
    )
    return ParseResult(dataset=dataset, errors=errors, warnings=warnings)


def parse_file(path: str | Path, config: IngestionConfig | None = None) -> ParseResult:
    """Read ``path`` and parse it with :func:`parse_workbook`."""

    source = Path(path)
    if not source.exists():
        raise FileNotFoundError(f"Source workbook not found: {source}")
    LOGGER.info("Reading emissions workbook: %s", source)
    return parse_workbook(source.read_bytes(), config=config)


__all__ = ["DECODE_FAILURE_MESSAGE", "SHEET_ORDER", "parse_file", "parse_workbook"]
