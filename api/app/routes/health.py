# Nombre de archivo: health.py
# Ubicación de archivo: api/app/routes/health.py
# Descripción: Endpoints de health y verificación de DB
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from core.repositories.incidentes import IncidentesRepository

from ..deps import get_repositorio

router = APIRouter()


@router.get("/health")
def health():
    return {
        "status": "ok",
        "service": "api",
        "time": datetime.now(timezone.utc).isoformat()
    }


@router.get("/db-check")
def db_check(repositorio: IncidentesRepository = Depends(get_repositorio)):
    return repositorio.ping()
