# Nombre de archivo: logging.py
# Ubicación de archivo: core/logging.py
# Descripción: Logging key=value para API y CLI con archivo rotativo opcional en el logger raíz

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

FORMATO = "%(asctime)s service=%(name)s level=%(levelname)s msg=%(message)s"
_MARCA_HANDLER = "_incidentes_servicio"


def resolver_nivel(level: str | int) -> int:
    """Convierte ``"debug"``/``"INFO"``/``10`` a nivel numérico; los nombres desconocidos caen en INFO."""
    if isinstance(level, int):
        return level
    nivel = logging.getLevelName(level.strip().upper())
    return nivel if isinstance(nivel, int) else logging.INFO


def _archivo_habilitado(enable_file: bool | None) -> bool:
    if enable_file is not None:
        return enable_file
    return os.getenv("ENV", "production").strip().lower() == "development"


def _directorio_logs(logs_dir: str | Path | None) -> Path:
    if logs_dir:
        return Path(logs_dir)
    return Path(os.getenv("LOG_DIR") or (Path.cwd() / "Logs"))


def _quitar_handler_previo(raiz: logging.Logger, service: str) -> None:
    for handler in list(raiz.handlers):
        if getattr(handler, _MARCA_HANDLER, None) == service:
            raiz.removeHandler(handler)
            handler.close()


def setup_logging(
    service: str,
    level: str | int = "INFO",
    enable_file: bool | None = None,
    logs_dir: str | Path | None = None,
    filename: str | None = None,
    max_bytes: int = 5_000_000,
    backup_count: int = 3,
) -> logging.Logger:
    """Configura el logging del proceso y devuelve el logger del servicio.

    La salida a consola usa el formato ``key=value``. El archivo rotativo se
    agrega al logger raíz para que también reciba los mensajes de ``modules.*``
    y ``api.*``; se activa con ``enable_file=True`` o con ``ENV=development``.
    La carpeta es ``logs_dir``, luego ``LOG_DIR`` y por último ``./Logs``.
    Volver a llamar con el mismo ``service`` reemplaza su archivo en lugar de
    duplicarlo.
    """
    nivel = resolver_nivel(level)
    logging.basicConfig(level=nivel, format=FORMATO)
    raiz = logging.getLogger()
    raiz.setLevel(nivel)
    logger = logging.getLogger(service)
    logger.setLevel(nivel)

    _quitar_handler_previo(raiz, service)
    if not _archivo_habilitado(enable_file):
        return logger

    destino = _directorio_logs(logs_dir) / (filename or f"{service}.log")
    try:
        destino.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(destino, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    except OSError as exc:
        logger.error("action=logging stage=file_handler status=failed path=%s error=%s", destino, exc)
        return logger

    handler.setFormatter(logging.Formatter(FORMATO))
    handler.setLevel(nivel)
    setattr(handler, _MARCA_HANDLER, service)
    raiz.addHandler(handler)
    logger.debug("action=logging stage=file_handler status=enabled path=%s", destino)
    return logger


__all__ = ["FORMATO", "resolver_nivel", "setup_logging"]
