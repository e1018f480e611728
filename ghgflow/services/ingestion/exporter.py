"""Excel exporter for reviewed emissions datasets."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from openpyxl import Workbook

from ghgflow.core.errors import ExportError

from .models import AtmosphericEmissionsDataset
from .validate import (
    FIXED_SOURCE_RULES,
    FUGITIVE_EMISSION_RULES,
    MOBILE_SOURCE_RULES,
    FieldRule,
)

LOGGER = logging.getLogger(__name__)

_LAYOUT: Sequence[tuple[str, str, Sequence[FieldRule]]] = (
    ("Fixed Sources", "fixed_sources", FIXED_SOURCE_RULES),
    ("Mobile Sources", "mobile_sources", MOBILE_SOURCE_RULES),
    ("Fugitive Emissions", "fugitive_emissions", FUGITIVE_EMISSION_RULES),
)


def export_dataset(dataset: AtmosphericEmissionsDataset, path: Path) -> Path:
    """Write the dataset in the upload layout: one sheet per record kind.

    Headers use the canonical column names, so the file can be uploaded again.
    Record ids and error flags are not written.
    """

    wb = Workbook()
    wb.remove(wb.active)
    for title, kind, rules in _LAYOUT:
        ws = wb.create_sheet(title=title)
        ws.append([rule.header for rule in rules])
        for record in dataset.records(kind):
            ws.append([getattr(record, rule.name) for rule in rules])

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(path)
    except OSError as exc:
        raise ExportError(f"failed to write {path}: {exc}") from exc

    LOGGER.info(
        "Exported dataset to %s (%s/%s/%s records)",
        path,
        len(dataset.fixed_sources),
        len(dataset.mobile_sources),
        len(dataset.fugitive_emissions),
    )
    return path


__all__ = ["export_dataset"]
