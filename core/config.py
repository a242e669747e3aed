# Nombre de archivo: config.py
# Ubicación de archivo: core/config.py
# Descripción: Configuración centralizada (entorno) para el registro y conciliación de incidentes

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from os import getenv
from pathlib import Path
from zoneinfo import ZoneInfo

from core.secrets import get_secret

CAMPOS_FECHA_VALIDOS = ("fecha_incidencia", "atr")
ESTILOS_VALIDOS = ("estilizado", "plano")


@dataclass(slots=True)
class DatabaseSettings:
    url: str
    echo: bool


@dataclass(slots=True)
class ConciliacionSettings:
    """Ejes configurables de la conciliación de planillas."""

    campo_fecha: str
    estilo: str
    timezone: ZoneInfo
    reports_dir: Path


@dataclass(slots=True)
class Settings:
    database: DatabaseSettings
    conciliacion: ConciliacionSettings
    log_level: str

    def __init__(self) -> None:
        self.database = DatabaseSettings(
            url=_database_url(),
            echo=getenv("DATABASE_ECHO", "false").lower() in ("true", "1", "yes"),
        )
        campo_fecha = getenv("CONCILIACION_CAMPO_FECHA", "fecha_incidencia").strip().lower()
        if campo_fecha not in CAMPOS_FECHA_VALIDOS:
            raise ValueError(
                f"CONCILIACION_CAMPO_FECHA inválido: {campo_fecha!r} (use {', '.join(CAMPOS_FECHA_VALIDOS)})"
            )
        estilo = getenv("CONCILIACION_ESTILO", "estilizado").strip().lower()
        if estilo not in ESTILOS_VALIDOS:
            raise ValueError(
                f"CONCILIACION_ESTILO inválido: {estilo!r} (use {', '.join(ESTILOS_VALIDOS)})"
            )
        self.conciliacion = ConciliacionSettings(
            campo_fecha=campo_fecha,
            estilo=estilo,
            timezone=ZoneInfo(getenv("INCIDENTES_TZ", "America/Argentina/Buenos_Aires")),
            reports_dir=Path(getenv("REPORTS_DIR", "/app/data/reports")),
        )
        self.log_level = getenv("LOG_LEVEL", "INFO").upper()


def _database_url() -> str:
    url = getenv("DATABASE_URL")
    if url:
        return url
    user = getenv("POSTGRES_USER", "incidentes")
    password = get_secret("POSTGRES_PASSWORD", "cambiar-este-password")
    host = getenv("POSTGRES_HOST", "postgres")
    port = getenv("POSTGRES_PORT", "5432")
    name = getenv("POSTGRES_DB", "incidentes")
    return f"postgresql+psycopg://{user}:{password}@{host}:{port}/{name}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
