# Nombre de archivo: incidentes.py
# Ubicación de archivo: api/app/routes/incidentes.py
# Descripción: Endpoints del registro de incidentes (alta, tabla de registros, edición y baja)

"""Rutas CRUD sobre ``app.incidentes``."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel

from core.repositories.incidentes import (
    IncidenteDuplicadoError,
    IncidenteNoEncontradoError,
    IncidentesRepository,
    IncidentesStorageError,
)
from modules.incidentes.config import ITEMS_POR_PAGINA, TIPO_CUSTOM, TIPOS_INCIDENTES
from modules.incidentes.schemas import (
    IncidenteConDuracion,
    IncidenteCreate,
    IncidenteUpdate,
    PaginaIncidentes,
)
from modules.incidentes.service import listar_incidentes

from ..deps import get_repositorio

router = APIRouter(prefix="/incidentes", tags=["incidentes"])
logger = logging.getLogger(__name__)


class TiposIncidente(BaseModel):
    tipos: list[str]
    custom: str


def _error_almacenamiento(exc: IncidentesStorageError) -> HTTPException:
    if isinstance(exc, IncidenteNoEncontradoError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, IncidenteDuplicadoError):
        return HTTPException(status_code=409, detail=str(exc))
    return HTTPException(status_code=502, detail=str(exc))


@router.get("/tipos", response_model=TiposIncidente)
def tipos_incidente() -> TiposIncidente:
    """Opciones del selector de tipo del formulario de alta."""
    return TiposIncidente(tipos=list(TIPOS_INCIDENTES), custom=TIPO_CUSTOM)


@router.post("", response_model=IncidenteConDuracion, status_code=201)
def crear_incidente(
    datos: IncidenteCreate,
    repositorio: IncidentesRepository = Depends(get_repositorio),
) -> IncidenteConDuracion:
    try:
        return repositorio.create(datos)
    except IncidentesStorageError as exc:
        raise _error_almacenamiento(exc) from exc


@router.get("", response_model=PaginaIncidentes)
def listar(
    q: Optional[str] = Query(None, description="Búsqueda por ID, tipo, alimentador o usuario"),
    tipo: Optional[str] = Query(None, description="Tipo exacto o 'all'"),
    orden: str = Query("created_at"),
    direccion: str = Query("desc"),
    pagina: int = Query(1, ge=1),
    por_pagina: int = Query(ITEMS_POR_PAGINA, ge=1, le=100),
    repositorio: IncidentesRepository = Depends(get_repositorio),
) -> PaginaIncidentes:
    try:
        incidentes = repositorio.fetch_all()
    except IncidentesStorageError as exc:
        raise _error_almacenamiento(exc) from exc
    try:
        return listar_incidentes(
            incidentes,
            termino=q,
            tipo=tipo,
            orden=orden,
            direccion=direccion,
            pagina=pagina,
            por_pagina=por_pagina,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.get("/{incidente_id}", response_model=IncidenteConDuracion)
def obtener(
    incidente_id: str,
    repositorio: IncidentesRepository = Depends(get_repositorio),
) -> IncidenteConDuracion:
    try:
        return repositorio.get_by_id(incidente_id)
    except IncidentesStorageError as exc:
        raise _error_almacenamiento(exc) from exc


@router.patch("/{incidente_id}", response_model=IncidenteConDuracion)
def actualizar(
    incidente_id: str,
    cambios: IncidenteUpdate,
    repositorio: IncidentesRepository = Depends(get_repositorio),
) -> IncidenteConDuracion:
    try:
        return repositorio.update(incidente_id, cambios)
    except IncidentesStorageError as exc:
        raise _error_almacenamiento(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.delete("/{incidente_id}", status_code=204)
def eliminar(
    incidente_id: str,
    repositorio: IncidentesRepository = Depends(get_repositorio),
) -> Response:
    try:
        repositorio.delete(incidente_id)
    except IncidentesStorageError as exc:
        raise _error_almacenamiento(exc) from exc
    return Response(status_code=204)
