# Nombre de archivo: conciliacion.py
# Ubicación de archivo: api/app/routes/conciliacion.py
# Descripción: Endpoints para conciliar una planilla Excel contra los incidentes del mes

"""Carga de planilla, cruce con incidentes y descarga del resultado."""

from __future__ import annotations

import io
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, StreamingResponse

from core.repositories.incidentes import IncidentesRepository, IncidentesStorageError
from modules.conciliacion.config import EXTENSIONES_ENTRADA, MEDIA_TYPE_XLSX
from modules.conciliacion.processor import opciones_meses
from modules.conciliacion.schemas import OpcionMes
from modules.conciliacion.service import (
    ArchivoInvalidoError,
    ConciliacionConfig,
    conciliar_excel,
    exportar_resultado,
)

from ..deps import get_conciliacion_config, get_repositorio

router = APIRouter(prefix="/conciliacion", tags=["conciliacion"])
logger = logging.getLogger(__name__)

FORMATOS = ("xlsx", "json")


@router.get("/meses", response_model=List[OpcionMes])
def meses_disponibles() -> List[OpcionMes]:
    """Meses seleccionables para la comparación (año anterior y actual)."""
    return opciones_meses()


@router.post("")
async def conciliar(
    file: UploadFile = File(..., description="Planilla XLSX o XLS con los incidentes a conciliar"),
    mes: Optional[str] = Form(None, description="Mes de comparación YYYY-MM (default: mes actual)"),
    formato: str = Form("xlsx", description="xlsx (descarga) o json (resumen y filas)"),
    repositorio: IncidentesRepository = Depends(get_repositorio),
    config: ConciliacionConfig = Depends(get_conciliacion_config),
):
    if not file.filename:
        raise HTTPException(status_code=400, detail="Falta nombre de archivo")
    if not file.filename.lower().endswith(tuple(EXTENSIONES_ENTRADA)):
        raise HTTPException(status_code=415, detail="Formato no soportado (use .xlsx o .xls)")
    if formato not in FORMATOS:
        raise HTTPException(status_code=422, detail=f"Formato de salida inválido: {formato}")
    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Archivo vacío")

    try:
        resultado = await run_in_threadpool(conciliar_excel, content, repositorio, config, mes)
    except ArchivoInvalidoError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except IncidentesStorageError as exc:
        logger.error("action=conciliacion stage=fetch error=%s", exc)
        raise HTTPException(status_code=502, detail="No se pudieron obtener los incidentes") from exc

    logger.info(
        "action=conciliacion stage=done archivo=%s periodo=%s filas=%s coincidencias=%s",
        file.filename,
        resultado.periodo,
        resultado.total_filas,
        resultado.coincidencias,
    )
    headers = {
        "X-Total-Filas": str(resultado.total_filas),
        "X-Coincidencias": str(resultado.coincidencias),
        "X-Periodo": resultado.periodo or "",
    }

    if formato == "json":
        payload: Dict[str, Any] = {
            "status": "ok",
            "periodo": resultado.periodo,
            "campo_fecha": resultado.campo_fecha,
            "total_filas": resultado.total_filas,
            "coincidencias": resultado.coincidencias,
            "incidentes_periodo": resultado.incidentes_periodo,
            "columnas_agregadas": resultado.columnas_agregadas,
            "filas": jsonable_encoder(resultado.filas),
        }
        return JSONResponse(payload, headers=headers)

    nombre, contenido = exportar_resultado(resultado, config)
    headers["Content-Disposition"] = f'attachment; filename="{nombre}"'
    return StreamingResponse(io.BytesIO(contenido), media_type=MEDIA_TYPE_XLSX, headers=headers)
