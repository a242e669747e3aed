# Nombre de archivo: conftest.py
# Ubicación de archivo: tests/conftest.py
# Descripción: Configuraciones comunes para Pytest (ajuste de PYTHONPATH y dobles de incidentes)

from __future__ import annotations

import io
import sys
from datetime import datetime, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

import pandas as pd
import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:  # pragma: no cover - inicialización
    sys.path.insert(0, str(ROOT_DIR))

from core.repositories.incidentes import IncidentesStorageError  # noqa: E402
from modules.incidentes.schemas import IncidenteConDuracion  # noqa: E402

TZ_AR = ZoneInfo("America/Argentina/Buenos_Aires")


def nuevo_incidente(
    id: str = "INC 0001234567",
    *,
    fecha: datetime | None = None,
    minutos: int = 45,
    observaciones: str = "ok",
    tipo: str = "Programada",
    alimentador: str = "ALIM-01",
    usuario: str = "USR0000001",
    created_at: datetime | None = None,
) -> IncidenteConDuracion:
    fecha = fecha or datetime(2024, 3, 15, 10, 0, tzinfo=TZ_AR)
    return IncidenteConDuracion(
        id=id,
        tipo=tipo,
        fecha_incidencia=fecha,
        atr=fecha + timedelta(minutes=minutos),
        alimentador_normal=alimentador,
        usuario_asignado=usuario,
        observaciones=observaciones,
        created_at=created_at or fecha,
    )


class FakeRepositorio:
    """Repositorio en memoria con la misma interfaz de lectura que ``IncidentesRepository``."""

    def __init__(self, incidentes=None, falla: bool = False) -> None:
        self.incidentes = list(incidentes or [])
        self.falla = falla
        self.llamadas = 0

    def fetch_all(self):
        self.llamadas += 1
        if self.falla:
            raise IncidentesStorageError("Error al obtener incidentes")
        return list(self.incidentes)

    def ping(self) -> dict:
        return {"db": "ok"}


def excel_bytes(filas, columnas=None) -> bytes:
    df = pd.DataFrame(filas, columns=columnas)
    buffer = io.BytesIO()
    df.to_excel(buffer, index=False)
    return buffer.getvalue()


@pytest.fixture
def incidente_factory():
    return nuevo_incidente


@pytest.fixture
def fake_repo_factory():
    return FakeRepositorio


@pytest.fixture
def xlsx_factory():
    return excel_bytes
