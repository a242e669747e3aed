# Nombre de archivo: deps.py
# Ubicación de archivo: api/app/deps.py
# Descripción: Dependencias de FastAPI (repositorio de incidentes y configuración de conciliación)

from __future__ import annotations

from fastapi import Request

from core.repositories.incidentes import IncidentesRepository
from modules.conciliacion.service import ConciliacionConfig


def get_repositorio(request: Request) -> IncidentesRepository:
    """Repositorio inyectado en ``app.state`` por ``create_app``."""
    return request.app.state.repositorio


def get_conciliacion_config(request: Request) -> ConciliacionConfig:
    return request.app.state.conciliacion_config
