# Nombre de archivo: conciliar_excel.py
# Ubicación de archivo: scripts/conciliar_excel.py
# Descripción: CLI para conciliar una planilla Excel contra los incidentes registrados
"""
Concilia una planilla XLSX con los incidentes del mes y guarda la planilla procesada.

Uso:
    # Desde la raíz del proyecto:
    python -m scripts.conciliar_excel planilla.xlsx --mes 2024-03

    # Anclando por ATR y sin formato en la columna de duración:
    python -m scripts.conciliar_excel planilla.xlsx --campo-fecha atr --plano --salida /tmp
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from core.config import get_settings
from core.logging import setup_logging
from core.repositories.incidentes import IncidentesRepository, IncidentesStorageError
from db.session import build_engine, build_session_factory
from modules.conciliacion.config import CAMPOS_FECHA, ESTILO_ESTILIZADO, ESTILO_PLANO
from modules.conciliacion.report import guardar_xlsx
from modules.conciliacion.service import (
    ArchivoInvalidoError,
    ConciliacionConfig,
    conciliar_excel,
    exportar_resultado,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Conciliar planilla Excel contra incidentes registrados")
    parser.add_argument("archivo", type=Path, help="Planilla .xlsx o .xls a procesar")
    parser.add_argument("--mes", default=None, help="Mes de comparación YYYY-MM (default: mes actual)")
    parser.add_argument("--salida", type=Path, default=None, help="Carpeta destino (default: REPORTS_DIR)")
    parser.add_argument("--campo-fecha", choices=CAMPOS_FECHA, default=None, help="Fecha que ancla el incidente al mes")
    parser.add_argument("--plano", action="store_true", help="Exportar sin formato en la columna de duración")
    return parser


def main(argv: Optional[Sequence[str]] = None, repositorio: Optional[IncidentesRepository] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging("cli", settings.log_level)

    base = settings.conciliacion
    config = ConciliacionConfig.crear(
        campo_fecha=args.campo_fecha or base.campo_fecha,
        estilo=ESTILO_PLANO if args.plano else (base.estilo or ESTILO_ESTILIZADO),
        timezone=base.timezone,
        reports_dir=args.salida or base.reports_dir,
    )

    if not args.archivo.is_file():
        print(f"[ERROR] No existe el archivo {args.archivo}")
        return 1

    if repositorio is None:
        engine = build_engine(settings.database.url, echo=settings.database.echo)
        repositorio = IncidentesRepository(build_session_factory(engine))

    try:
        resultado = conciliar_excel(args.archivo.read_bytes(), repositorio, config, mes=args.mes)
    except (ArchivoInvalidoError, ValueError) as exc:
        print(f"[ERROR] {exc}")
        return 2
    except IncidentesStorageError as exc:
        logger.error("action=conciliar_excel stage=fetch error=%s", exc)
        print("[ERROR] No se pudieron obtener los incidentes")
        return 3

    _, contenido = exportar_resultado(resultado, config)
    destino = guardar_xlsx(contenido, config.reports_dir)
    print(
        f"[OK] Período {resultado.periodo}: {resultado.coincidencias} de "
        f"{resultado.total_filas} filas coinciden. Archivo: {destino}"
    )
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
