"""Configuration helpers for GHGFlow ingestion.

Provides the pydantic model describing which workbook sheets and header
spellings the ingestion pipeline accepts, plus a YAML loader so synonyms can be
extended per deployment without touching code.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ghgflow.core.errors import ConfigError


load_dotenv(override=False)

CONFIG_DIR = Path(__file__).resolve().parent
DEFAULT_INGESTION_CONFIG_PATH = CONFIG_DIR / "ingestion.yaml"
CONFIG_ENV_VAR = "GHGFLOW_INGESTION_CONFIG"

FIXED_SOURCES = "fixed_sources"
MOBILE_SOURCES = "mobile_sources"
FUGITIVE_EMISSIONS = "fugitive_emissions"


class SheetSpec(BaseModel):
    """Logical sheet definition: display label, accepted names and header aliases."""

    model_config = ConfigDict(extra="forbid")

    label: str
    synonyms: List[str] = Field(default_factory=list)
    column_aliases: Dict[str, List[str]] = Field(default_factory=dict)

    @property
    def candidates(self) -> List[str]:
        """Sheet names to try, the label first."""

        return [self.label, *[s for s in self.synonyms if s != self.label]]


def _default_sheets() -> Dict[str, SheetSpec]:
    return {
        FIXED_SOURCES: SheetSpec(
            label="Fixed Sources",
            synonyms=["Fuentes Fijas"],
            column_aliases={
                "equipment_type": ["Tipo de Equipo"],
                "fuel": ["Combustible"],
                "annual_consumption": ["Consumo Anual"],
                "operating_hours": ["Horas de Operacion", "Horas de Operación"],
                "estimation_method": ["Metodo de Estimacion", "Método de Estimación"],
                "co2_emissions": ["Emisiones CO2"],
                "ch4_emissions": ["Emisiones CH4"],
                "n2o_emissions": ["Emisiones N2O"],
            },
        ),
        MOBILE_SOURCES: SheetSpec(
            label="Mobile Sources",
            synonyms=["Mobile Srcs", "Fuentes Moviles", "Fuentes Móviles"],
            column_aliases={
                "vehicle_type": ["Tipo de Vehiculo", "Tipo de Vehículo"],
                "fuel": ["Combustible"],
                "annual_consumption": ["Consumo Anual"],
                "calculation_method": ["Metodo de Calculo", "Método de Cálculo"],
                "ghg_emissions": ["Emisiones GEI"],
            },
        ),
        FUGITIVE_EMISSIONS: SheetSpec(
            label="Fugitive Emissions",
            synonyms=["Emisiones Fugitivas"],
            column_aliases={
                "gas_type": ["Tipo de Gas"],
                "source": ["Fuente"],
                "estimated_quantity": ["Cantidad Estimada"],
                "methodology": ["Metodologia", "Metodología"],
            },
        ),
    }


class IngestionConfig(BaseModel):
    """Complete ingestion configuration."""

    model_config = ConfigDict(extra="forbid")

    sheets: Dict[str, SheetSpec] = Field(default_factory=_default_sheets)
    max_display_errors: int = Field(default=10, ge=1)

    def sheet(self, key: str) -> SheetSpec:
        """Return the sheet spec for ``key``, falling back to the built-in default."""

        spec = self.sheets.get(key)
        if spec is None:
            spec = _default_sheets()[key]
        return spec


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Ingestion config not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigError("Ingestion config must be a mapping")
    return data


def load_ingestion_config(path: str | Path | None = None) -> IngestionConfig:
    """Load ingestion configuration.

    Resolution order: explicit ``path``, then ``$GHGFLOW_INGESTION_CONFIG``,
    then the built-in defaults.
    """

    if path is None:
        env_path = os.getenv(CONFIG_ENV_VAR)
        if not env_path:
            return IngestionConfig()
        path = env_path

    data = _load_yaml(Path(path))
    unknown = set(data.get("sheets", {}) or {}) - {FIXED_SOURCES, MOBILE_SOURCES, FUGITIVE_EMISSIONS}
    if unknown:
        raise ConfigError(f"Unknown sheet keys in ingestion config: {', '.join(sorted(unknown))}")
    try:
        return IngestionConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid ingestion config {path}: {exc}") from exc


__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_INGESTION_CONFIG_PATH",
    "FIXED_SOURCES",
    "FUGITIVE_EMISSIONS",
    "IngestionConfig",
    "MOBILE_SOURCES",
    "SheetSpec",
    "load_ingestion_config",
]
