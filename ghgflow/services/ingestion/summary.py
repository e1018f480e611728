"""Aggregation helpers for parsed datasets."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from typing import Sequence

import pandas as pd

from .models import AtmosphericEmissionsDataset


@dataclass(frozen=True, slots=True)
class EmissionsSummary:
    """Totals shown on the dashboard and sent along with recommendation requests."""

    fixed_co2: float
    fixed_ch4: float
    fixed_n2o: float
    mobile_ghg: float
    fugitive_quantity: float
    fixed_count: int
    mobile_count: int
    fugitive_count: int
    flagged_count: int

    def to_dict(self) -> dict[str, float | int]:
        return asdict(self)


def summarize(dataset: AtmosphericEmissionsDataset) -> EmissionsSummary:
    """Sum the emission columns of every record kind."""

    all_records = [*dataset.fixed_sources, *dataset.mobile_sources, *dataset.fugitive_emissions]
    return EmissionsSummary(
        fixed_co2=math.fsum(r.co2_emissions for r in dataset.fixed_sources),
        fixed_ch4=math.fsum(r.ch4_emissions for r in dataset.fixed_sources),
        fixed_n2o=math.fsum(r.n2o_emissions for r in dataset.fixed_sources),
        mobile_ghg=math.fsum(r.ghg_emissions for r in dataset.mobile_sources),
        fugitive_quantity=math.fsum(r.estimated_quantity for r in dataset.fugitive_emissions),
        fixed_count=len(dataset.fixed_sources),
        mobile_count=len(dataset.mobile_sources),
        fugitive_count=len(dataset.fugitive_emissions),
        flagged_count=sum(1 for r in all_records if r.has_error),
    )


def records_frame(records: Sequence[object], record_type: type | None = None) -> pd.DataFrame:
    """Tabulate records, one column per attribute plus ``has_error``.

    ``record_type`` supplies the columns when ``records`` is empty.
    """

    if records:
        record_type = type(records[0])
    columns = [f.name for f in fields(record_type)] if record_type is not None else []
    rows = []
    for record in records:
        row = {name: getattr(record, name) for name in columns}
        row["has_error"] = record.has_error  # type: ignore[attr-defined]
        rows.append(row)
    return pd.DataFrame(rows, columns=[*columns, "has_error"] if columns else None)


__all__ = ["EmissionsSummary", "records_frame", "summarize"]
