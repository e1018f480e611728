"""Emissions workbook ingestion service package."""

from .api import parse_file, parse_workbook
from .editing import update_record
from .models import (
    AtmosphericEmissionsDataset,
    FixedSourceRecord,
    FugitiveEmissionRecord,
    MobileSourceRecord,
    ParseResult,
)
from .store import EmissionsStore, demo_dataset
from .summary import EmissionsSummary, summarize

__all__ = [
    "AtmosphericEmissionsDataset",
    "EmissionsStore",
    "EmissionsSummary",
    "FixedSourceRecord",
    "FugitiveEmissionRecord",
    "MobileSourceRecord",
    "ParseResult",
    "demo_dataset",
    "parse_file",
    "parse_workbook",
    "summarize",
    "update_record",
]
