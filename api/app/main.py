# Nombre de archivo: main.py
# Ubicación de archivo: api/app/main.py
# Descripción: Aplicación FastAPI principal (health, incidentes y conciliación de planillas)

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI

from core.config import get_settings
from core.logging import setup_logging
from core.repositories.incidentes import IncidentesRepository
from db.session import build_engine, build_session_factory
from modules.conciliacion.service import ConciliacionConfig

from .routes import conciliacion_router, health_router, incidentes_router

logger = logging.getLogger(__name__)


def _repositorio_desde_settings() -> IncidentesRepository:
    settings = get_settings()
    engine = build_engine(settings.database.url, echo=settings.database.echo)
    return IncidentesRepository(build_session_factory(engine))


def create_app(
    repositorio: Optional[IncidentesRepository] = None,
    conciliacion_config: Optional[ConciliacionConfig] = None,
) -> FastAPI:
    """Construye la aplicación.

    Sin argumentos, el repositorio y la configuración se arman desde el
    entorno; los tests inyectan dobles en memoria.
    """
    setup_logging("api", get_settings().log_level)
    app = FastAPI(title="Incidentes API", version="0.1.0")
    app.state.repositorio = repositorio or _repositorio_desde_settings()
    app.state.conciliacion_config = conciliacion_config or ConciliacionConfig.from_settings()
    app.include_router(health_router, tags=["health"])
    app.include_router(incidentes_router)
    app.include_router(conciliacion_router)
    logger.info(
        "action=create_app campo_fecha=%s estilo=%s",
        app.state.conciliacion_config.campo_fecha,
        app.state.conciliacion_config.estilo,
    )
    return app


app = create_app()
