"""In-memory holder for the dataset a user is reviewing."""

from __future__ import annotations

import logging
from typing import Any

from ghgflow.core.errors import RecordUpdateError

from .editing import update_record
from .models import (
    AtmosphericEmissionsDataset,
    FixedSourceRecord,
    FugitiveEmissionRecord,
    MobileSourceRecord,
)

LOGGER = logging.getLogger(__name__)


class EmissionsStore:
    """Session state for one reviewer.

    The initial dataset is supplied by the caller; nothing is shared between
    instances.
    """

    def __init__(self, initial: AtmosphericEmissionsDataset | None = None) -> None:
        self.dataset = initial if initial is not None else AtmosphericEmissionsDataset()

    def import_dataset(self, dataset: AtmosphericEmissionsDataset) -> None:
        self.dataset = dataset

    def clear(self) -> None:
        self.dataset = AtmosphericEmissionsDataset()

    def _index_of(self, kind: str, record_id: str) -> int:
        try:
            records = self.dataset.records(kind)
        except KeyError as exc:
            raise RecordUpdateError(str(exc)) from exc
        for idx, record in enumerate(records):
            if record.id == record_id:
                return idx
        raise RecordUpdateError(f"no {kind} record with id {record_id}")

    def get(self, kind: str, record_id: str) -> Any:
        return self.dataset.records(kind)[self._index_of(kind, record_id)]

    def update(self, kind: str, record_id: str, **changes: Any) -> Any:
        """Apply an edit to one record and return the updated record."""

        idx = self._index_of(kind, record_id)
        records = self.dataset.records(kind)
        updated = update_record(records[idx], **changes)
        records[idx] = updated
        LOGGER.debug("Updated %s %s: %s", kind, record_id, sorted(changes))
        return updated

    def remove(self, kind: str, record_id: str) -> None:
        idx = self._index_of(kind, record_id)
        del self.dataset.records(kind)[idx]

    @property
    def has_errors(self) -> bool:
        return self.dataset.has_errors

    @property
    def can_commit(self) -> bool:
        """Saving is allowed once there is data and no record is flagged."""

        return not self.dataset.is_empty and not self.dataset.has_errors


def demo_dataset() -> AtmosphericEmissionsDataset:
    """Build a fresh sample dataset for demos and previews."""

    return AtmosphericEmissionsDataset(
        fixed_sources=[
            FixedSourceRecord("Boiler", "Gas Natural", 15000, 4500, "Medición directa", 28.35, 0.015, 0.003),
            FixedSourceRecord("Generator", "Diesel", 8500, 2200, "Factor de emisión", 22.78, 0.102, 0.017),
            FixedSourceRecord("Furnace", "Gas Natural", 25000, 6000, "Balance de Masa", 47.25, 0.025, 0.005),
        ],
        mobile_sources=[
            MobileSourceRecord("Camión pesado", "Diesel", 45000, "Basado en combustible", 120.6),
            MobileSourceRecord("Vehiculo ligero", "Gasoline", 12000, "Basado en distancia", 27.72),
            MobileSourceRecord("Máquina elevadora", "LPG", 3500, "Basado en combustible", 6.3),
        ],
        fugitive_emissions=[
            FugitiveEmissionRecord("R-134a", "Refrigeration", 25.5, "Balance de masa"),
            FugitiveEmissionRecord("Metano", "Valves", 12.3, "Factor de emision"),
            FugitiveEmissionRecord("R-410A", "Refrigeration", 8.7, "Estimación de ingeniería"),
        ],
    )


__all__ = ["EmissionsStore", "demo_dataset"]
