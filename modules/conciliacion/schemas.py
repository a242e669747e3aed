# Nombre de archivo: schemas.py
# Ubicación de archivo: modules/conciliacion/schemas.py
# Descripción: Modelos de datos de la conciliación (período, resultado, opciones de mes)

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from core.utils.timefmt import a_hora_local

FilaPlanilla = Dict[str, Any]


class Periodo(BaseModel):
    """Mes calendario de comparación (mes 1-12) en una zona horaria local."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    anio: int
    mes: int
    tz: tzinfo

    @property
    def token(self) -> str:
        return f"{self.anio:04d}-{self.mes:02d}"

    def contiene(self, valor: Optional[datetime]) -> bool:
        """Indica si ``valor`` cae en el mes/año del período (hora local)."""
        if valor is None:
            return False
        local = a_hora_local(valor, self.tz)
        return local.year == self.anio and local.month == self.mes


class ResultadoConciliacion(BaseModel):
    """Filas aumentadas y estadísticas de coincidencia."""

    filas: List[FilaPlanilla]
    coincidencias: int
    total_filas: int
    periodo: Optional[str] = None
    campo_fecha: Optional[str] = None
    incidentes_periodo: int = 0
    columnas_agregadas: List[str] = []


class OpcionMes(BaseModel):
    valor: str
    etiqueta: str
