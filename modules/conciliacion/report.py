# Nombre de archivo: report.py
# Ubicación de archivo: modules/conciliacion/report.py
# Descripción: Exportación de las filas conciliadas a una planilla XLSX (con o sin estilo)

import io
import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, List, Optional, Sequence

import numpy as np
import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from .config import (
    ANCHO_FACTOR,
    ANCHO_MAX,
    ANCHO_MIN,
    ANCHO_PADDING,
    COLOR_FONDO_DURACION,
    COLOR_FUENTE_DURACION,
    COLUMNA_DURACION_ESTILIZADO,
    COLUMNA_OBSERVACIONES,
    ESTILO_ESTILIZADO,
    ESTILOS,
    EXTENSION_SALIDA,
    NOMBRE_HOJA,
    PREFIJO_ARCHIVO,
)
from .processor import valor_a_texto
from .schemas import FilaPlanilla

logger = logging.getLogger(__name__)

FUENTE_DURACION = Font(color=COLOR_FUENTE_DURACION, bold=True)
RELLENO_DURACION = PatternFill(
    start_color=COLOR_FONDO_DURACION, end_color=COLOR_FONDO_DURACION, fill_type="solid"
)
ALINEACION_DURACION = Alignment(horizontal="center")


def columnas_exportacion(filas: Sequence[FilaPlanilla], derivadas: Sequence[str]) -> List[str]:
    """Columnas de la planilla de salida.

    Todas las columnas originales en orden de aparición y, al final, las
    columnas derivadas que tengan valor en al menos una fila.
    """
    originales: List[str] = []
    vistas = set(derivadas)
    for fila in filas:
        for columna in fila:
            if columna not in vistas:
                vistas.add(columna)
                originales.append(columna)
    presentes = [col for col in derivadas if any(col in fila for fila in filas)]
    return originales + presentes


def ancho_columna(columna: str, filas: Sequence[FilaPlanilla]) -> float:
    """Ancho en caracteres: ``clamp(ANCHO_MIN, largo * ANCHO_FACTOR + ANCHO_PADDING, ANCHO_MAX)``."""
    largo = len(columna)
    for fila in filas:
        largo = max(largo, len(valor_a_texto(fila.get(columna))))
    return max(ANCHO_MIN, min(ANCHO_MAX, largo * ANCHO_FACTOR + ANCHO_PADDING))


def nombre_archivo(hoy: Optional[date] = None) -> str:
    hoy = hoy or date.today()
    return f"{PREFIJO_ARCHIVO}{hoy.strftime('%Y-%m-%d')}{EXTENSION_SALIDA}"


def _valor_celda(valor: Any) -> Any:
    if isinstance(valor, np.generic):
        valor = valor.item()
    if isinstance(valor, pd.Timestamp):
        valor = valor.to_pydatetime()
    if isinstance(valor, (datetime, time)) and valor.tzinfo is not None:
        # Excel no admite zonas horarias
        valor = valor.replace(tzinfo=None)
    return valor


def exportar_xlsx(
    filas: Sequence[FilaPlanilla],
    *,
    estilo: str = ESTILO_ESTILIZADO,
    columna_duracion: str = COLUMNA_DURACION_ESTILIZADO,
    columna_observaciones: str = COLUMNA_OBSERVACIONES,
) -> bytes:
    """Serializa las filas a XLSX y devuelve el contenido en memoria.

    En modo ``estilizado`` la columna de duración se marca en rojo (fuente en
    negrita, fondo claro, centrado); en modo ``plano`` no se aplica formato.
    """
    if estilo not in ESTILOS:
        raise ValueError(f"Estilo de exportación no soportado: {estilo}")

    columnas = columnas_exportacion(filas, [columna_duracion, columna_observaciones])
    wb = Workbook()
    ws = wb.active
    ws.title = NOMBRE_HOJA

    ws.append(columnas)
    for fila in filas:
        ws.append([_valor_celda(fila.get(col)) for col in columnas])

    if estilo == ESTILO_ESTILIZADO and columna_duracion in columnas:
        idx = columnas.index(columna_duracion) + 1
        for (celda,) in ws.iter_rows(min_col=idx, max_col=idx, min_row=1, max_row=ws.max_row):
            celda.font = FUENTE_DURACION
            celda.fill = RELLENO_DURACION
            celda.alignment = ALINEACION_DURACION

    for idx, columna in enumerate(columnas, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = ancho_columna(columna, filas)

    buffer = io.BytesIO()
    wb.save(buffer)
    logger.info(
        "action=exportar_xlsx estilo=%s filas=%s columnas=%s",
        estilo,
        len(filas),
        len(columnas),
    )
    return buffer.getvalue()


def guardar_xlsx(contenido: bytes, out_dir: Path, hoy: Optional[date] = None) -> Path:
    """Escribe la planilla procesada en ``out_dir`` con el nombre del día."""
    out_dir.mkdir(parents=True, exist_ok=True)
    destino = out_dir / nombre_archivo(hoy)
    destino.write_bytes(contenido)
    destino.chmod(0o600)
    logger.info("action=guardar_xlsx path=%s bytes=%s", destino, len(contenido))
    return destino
