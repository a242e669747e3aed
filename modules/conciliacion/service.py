# Nombre de archivo: service.py
# Ubicación de archivo: modules/conciliacion/service.py
# Descripción: Flujo completo de conciliación: lectura de la planilla, incidentes del período, cruce y exportación

"""Servicio compartido por la API y el CLI para conciliar planillas de incidentes."""

from __future__ import annotations

import io
import logging
import math
import zipfile
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Optional, Protocol, Sequence

import numpy as np
import pandas as pd

from core.config import Settings, get_settings
from modules.incidentes.schemas import IncidenteConDuracion

from . import processor, report
from .config import (
    CAMPO_FECHA_DEFAULT,
    COLUMNA_DURACION_ESTILIZADO,
    COLUMNA_DURACION_PLANO,
    COLUMNA_OBSERVACIONES,
    ESTILO_ESTILIZADO,
    ESTILO_PLANO,
    FIRMA_XLS,
    MOTOR_XLS,
    MOTOR_XLSX,
)
from .schemas import FilaPlanilla, ResultadoConciliacion

if TYPE_CHECKING:  # pragma: no cover - solo para type checking
    from core.repositories.incidentes import IncidentesRepository

logger = logging.getLogger(__name__)


class ArchivoInvalidoError(ValueError):
    """El contenido recibido no es una planilla Excel legible."""


class FuenteIncidentes(Protocol):
    def fetch_all(self) -> List[IncidenteConDuracion]: ...


@dataclass(slots=True)
class ConciliacionConfig:
    """Parámetros de la conciliación: campo de fecha ancla, estilo y etiquetas de salida."""

    campo_fecha: str
    estilo: str
    timezone: tzinfo
    reports_dir: Path
    columna_duracion: str
    columna_observaciones: str = COLUMNA_OBSERVACIONES

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ConciliacionConfig":
        conf = (settings or get_settings()).conciliacion
        return cls.crear(
            campo_fecha=conf.campo_fecha,
            estilo=conf.estilo,
            timezone=conf.timezone,
            reports_dir=conf.reports_dir,
        )

    @classmethod
    def crear(
        cls,
        *,
        timezone: tzinfo,
        reports_dir: Path,
        campo_fecha: str = CAMPO_FECHA_DEFAULT,
        estilo: str = ESTILO_ESTILIZADO,
        columna_duracion: Optional[str] = None,
        columna_observaciones: str = COLUMNA_OBSERVACIONES,
    ) -> "ConciliacionConfig":
        """Construye la configuración; la etiqueta de duración depende del estilo si no se indica."""
        if columna_duracion is None:
            columna_duracion = COLUMNA_DURACION_PLANO if estilo == ESTILO_PLANO else COLUMNA_DURACION_ESTILIZADO
        return cls(
            campo_fecha=campo_fecha,
            estilo=estilo,
            timezone=timezone,
            reports_dir=Path(reports_dir),
            columna_duracion=columna_duracion,
            columna_observaciones=columna_observaciones,
        )


def _es_nulo(valor: Any) -> bool:
    if valor is None or valor is pd.NaT:
        return True
    if isinstance(valor, str) and valor == "":
        return True
    if isinstance(valor, float) and math.isnan(valor):
        return True
    return False


def _a_escalar(valor: Any) -> Any:
    if isinstance(valor, np.generic):
        return valor.item()
    if isinstance(valor, pd.Timestamp):
        return valor.to_pydatetime()
    return valor


def motor_excel(excel_bytes: bytes) -> str:
    """Motor de pandas según la firma del contenido: ``openpyxl`` (ZIP) o ``xlrd`` (OLE2)."""
    if zipfile.is_zipfile(io.BytesIO(excel_bytes)):
        return MOTOR_XLSX
    if excel_bytes.startswith(FIRMA_XLS):
        return MOTOR_XLS
    logger.warning("action=leer_filas level=warning reason=bad_signature bytes=%s", len(excel_bytes))
    raise ArchivoInvalidoError("Archivo inválido: el contenido no corresponde a un Excel .xlsx o .xls")


def leer_filas(excel_bytes: bytes) -> List[FilaPlanilla]:
    """Lee la primera hoja de un XLSX/XLS en memoria como filas ``columna → valor``.

    La primera fila es el encabezado. Los tipos de celda se conservan tal como
    vienen (texto, número, booleano, fecha), incluso textos como ``"N/A"`` o
    ``"None"``; solo las celdas vacías se omiten y las filas completamente
    vacías se descartan.
    """
    if not excel_bytes:
        raise ArchivoInvalidoError("El archivo recibido está vacío")
    motor = motor_excel(excel_bytes)

    try:
        df = pd.read_excel(
            io.BytesIO(excel_bytes),
            engine=motor,
            sheet_name=0,
            dtype=object,
            keep_default_na=False,
            na_values=[],
        )
    except Exception as exc:  # noqa: BLE001 - cualquier falla de parseo invalida el archivo
        logger.exception("action=leer_filas level=error motor=%s error=%s", motor, exc)
        raise ArchivoInvalidoError("No se pudo leer el archivo. Verifique que sea un archivo Excel válido.") from exc

    columnas = [str(c) for c in df.columns]
    filas: List[FilaPlanilla] = []
    for valores in df.itertuples(index=False, name=None):
        fila = {col: _a_escalar(val) for col, val in zip(columnas, valores) if not _es_nulo(val)}
        if fila:
            filas.append(fila)
    logger.info("action=leer_filas motor=%s filas=%s columnas=%s", motor, len(filas), columnas)
    return filas


def conciliar_filas(
    filas: Sequence[FilaPlanilla],
    incidentes: Sequence[IncidenteConDuracion],
    config: ConciliacionConfig,
    mes: Optional[str] = None,
    ahora: Optional[datetime] = None,
) -> ResultadoConciliacion:
    """Filtra los incidentes al período y cruza las filas contra ellos."""
    periodo = processor.resolver_periodo(mes, config.timezone, ahora)
    del_periodo = processor.filtrar_por_periodo(incidentes, periodo, config.campo_fecha)
    logger.info(
        "action=conciliacion stage=periodo periodo=%s campo_fecha=%s incidentes=%s en_periodo=%s",
        periodo.token,
        config.campo_fecha,
        len(incidentes),
        len(del_periodo),
    )
    resultado = processor.conciliar(
        filas,
        del_periodo,
        columna_duracion=config.columna_duracion,
        columna_observaciones=config.columna_observaciones,
    )
    return resultado.model_copy(
        update={
            "periodo": periodo.token,
            "campo_fecha": config.campo_fecha,
            "incidentes_periodo": len(del_periodo),
        }
    )


def conciliar_excel(
    excel_bytes: bytes,
    fuente: "FuenteIncidentes | IncidentesRepository",
    config: ConciliacionConfig,
    mes: Optional[str] = None,
    ahora: Optional[datetime] = None,
) -> ResultadoConciliacion:
    """Ejecuta una conciliación completa.

    El archivo y el mes se validan antes de consultar los incidentes; una falla
    del almacenamiento aborta la corrida sin resultado parcial.
    """
    filas = leer_filas(excel_bytes)
    processor.resolver_periodo(mes, config.timezone, ahora)
    incidentes = fuente.fetch_all()
    return conciliar_filas(filas, incidentes, config, mes=mes, ahora=ahora)


def exportar_resultado(
    resultado: ResultadoConciliacion,
    config: ConciliacionConfig,
    hoy: Optional[date] = None,
) -> tuple[str, bytes]:
    """Devuelve ``(nombre_archivo, contenido_xlsx)`` de la planilla procesada."""
    contenido = report.exportar_xlsx(
        resultado.filas,
        estilo=config.estilo,
        columna_duracion=config.columna_duracion,
        columna_observaciones=config.columna_observaciones,
    )
    return report.nombre_archivo(hoy), contenido
