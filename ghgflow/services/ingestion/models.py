"""Data models produced by the ingestion pipeline."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

EQUIPMENT_TYPES = ("Boiler", "Furnace", "Generator", "Incinerator", "Heater", "Other")
FUGITIVE_SOURCES = ("Valves", "Tanks", "Refrigeration", "Pipes", "Other")


def _new_id() -> str:
    return str(uuid.uuid4())


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


class _RecordMixin:
    """Shared behaviour for the three record kinds."""

    error_fields: List[str]

    @property
    def has_error(self) -> bool:
        return bool(self.error_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase keys consumed by the dashboard."""

        payload: Dict[str, Any] = {}
        for item in fields(self):  # type: ignore[arg-type]
            value = getattr(self, item.name)
            if item.name == "error_fields":
                value = [_camel(name) for name in value]
            payload[_camel(item.name)] = value
        payload["hasError"] = self.has_error
        return payload


@dataclass(slots=True)
class FixedSourceRecord(_RecordMixin):
    """Stationary combustion asset (boiler, furnace, generator...)."""

    equipment_type: str
    fuel: str
    annual_consumption: float
    operating_hours: float
    estimation_method: str
    co2_emissions: float
    ch4_emissions: float
    n2o_emissions: float
    error_fields: List[str] = field(default_factory=list)
    id: str = field(default_factory=_new_id)


@dataclass(slots=True)
class MobileSourceRecord(_RecordMixin):
    """Vehicle or mobile equipment."""

    vehicle_type: str
    fuel: str
    annual_consumption: float
    calculation_method: str
    ghg_emissions: float
    error_fields: List[str] = field(default_factory=list)
    id: str = field(default_factory=_new_id)


@dataclass(slots=True)
class FugitiveEmissionRecord(_RecordMixin):
    """Uncontrolled gas release (leaks, valves, refrigerant loss)."""

    gas_type: str
    source: str
    estimated_quantity: float
    methodology: str
    error_fields: List[str] = field(default_factory=list)
    id: str = field(default_factory=_new_id)


@dataclass(slots=True)
class AtmosphericEmissionsDataset:
    """Records of the three kinds, in spreadsheet row order."""

    fixed_sources: List[FixedSourceRecord] = field(default_factory=list)
    mobile_sources: List[MobileSourceRecord] = field(default_factory=list)
    fugitive_emissions: List[FugitiveEmissionRecord] = field(default_factory=list)

    def records(self, kind: str) -> list:
        """Return the record list for ``kind`` (``fixed_sources`` etc.)."""

        if kind not in ("fixed_sources", "mobile_sources", "fugitive_emissions"):
            raise KeyError(f"unknown record kind: {kind}")
        return getattr(self, kind)

    @property
    def has_errors(self) -> bool:
        return any(
            record.has_error
            for records in (self.fixed_sources, self.mobile_sources, self.fugitive_emissions)
            for record in records
        )

    @property
    def is_empty(self) -> bool:
        return not (self.fixed_sources or self.mobile_sources or self.fugitive_emissions)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fixedSources": [r.to_dict() for r in self.fixed_sources],
            "mobileSources": [r.to_dict() for r in self.mobile_sources],
            "fugitiveEmissions": [r.to_dict() for r in self.fugitive_emissions],
        }


@dataclass(slots=True)
class SheetOutcome:
    """Records and messages produced by one sheet validator."""

    records: list
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


class ParseResult(BaseModel):
    """Aggregated outcome returned to callers of ``parse_workbook``."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    dataset: Optional[AtmosphericEmissionsDataset] = None
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.dataset is not None


__all__ = [
    "AtmosphericEmissionsDataset",
    "EQUIPMENT_TYPES",
    "FUGITIVE_SOURCES",
    "FixedSourceRecord",
    "FugitiveEmissionRecord",
    "MobileSourceRecord",
    "ParseResult",
    "SheetOutcome",
]
