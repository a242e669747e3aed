# Nombre de archivo: incidentes.py
# Ubicación de archivo: core/repositories/incidentes.py
# Descripción: Acceso a la tabla app.incidentes (alta, lectura, edición y baja)

from __future__ import annotations

import logging
from typing import Callable, List

from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from db.models.incidente import Incidente
from modules.incidentes.config import ID_PREFIJO
from modules.incidentes.schemas import (
    IncidenteConDuracion,
    IncidenteCreate,
    IncidenteUpdate,
    atr_anterior,
)

logger = logging.getLogger(__name__)


class IncidentesStorageError(RuntimeError):
    """Falla del almacenamiento de incidentes (mensaje genérico para el usuario)."""


class IncidenteDuplicadoError(IncidentesStorageError):
    pass


class IncidenteNoEncontradoError(IncidentesStorageError, LookupError):
    pass


class IncidentesRepository:
    """Repositorio de incidentes construido sobre una fábrica de sesiones explícita.

    No guarda estado global: cada instancia recibe su ``session_factory`` y cada
    operación abre y cierra su propia sesión.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def fetch_all(self) -> List[IncidenteConDuracion]:
        """Todos los incidentes, del más reciente al más antiguo (``created_at``)."""
        try:
            with self._session_factory() as session:
                filas = session.scalars(
                    select(Incidente).order_by(Incidente.created_at.desc())
                ).all()
                incidentes = [IncidenteConDuracion.model_validate(fila) for fila in filas]
        except SQLAlchemyError as exc:
            logger.exception("action=incidentes_fetch_all stage=error error=%s", exc)
            raise IncidentesStorageError("Error al obtener incidentes") from exc
        logger.debug("action=incidentes_fetch_all total=%s", len(incidentes))
        return incidentes

    def create(self, datos: IncidenteCreate) -> IncidenteConDuracion:
        """Persiste un incidente agregando el prefijo canónico al ID."""
        incidente = Incidente(
            id=f"{ID_PREFIJO}{datos.id}",
            tipo=datos.tipo,
            tipo_custom=datos.tipo_custom or None,
            fecha_incidencia=datos.fecha_incidencia,
            atr=datos.atr,
            alimentador_normal=datos.alimentador_normal,
            usuario_asignado=datos.usuario_asignado,
            observaciones=datos.observaciones,
        )
        try:
            with self._session_factory() as session:
                session.add(incidente)
                session.commit()
                session.refresh(incidente)
                creado = IncidenteConDuracion.model_validate(incidente)
        except IntegrityError as exc:
            logger.warning("action=incidentes_create stage=duplicado id=%s", incidente.id)
            raise IncidenteDuplicadoError(f"Ya existe un incidente con ID {incidente.id}") from exc
        except SQLAlchemyError as exc:
            logger.exception("action=incidentes_create stage=error id=%s error=%s", incidente.id, exc)
            raise IncidentesStorageError("Error al crear incidente") from exc
        logger.info("action=incidentes_create id=%s tipo=%s duracion=%s", creado.id, creado.tipo, creado.duracion)
        return creado

    def get_by_id(self, incidente_id: str) -> IncidenteConDuracion:
        try:
            with self._session_factory() as session:
                incidente = session.get(Incidente, incidente_id)
                if incidente is None:
                    raise IncidenteNoEncontradoError(f"No existe el incidente {incidente_id}")
                return IncidenteConDuracion.model_validate(incidente)
        except SQLAlchemyError as exc:
            logger.exception("action=incidentes_get stage=error id=%s error=%s", incidente_id, exc)
            raise IncidentesStorageError("Error al obtener incidente") from exc

    def update(self, incidente_id: str, cambios: IncidenteUpdate) -> IncidenteConDuracion:
        """Aplica cambios parciales verificando que el ATR siga siendo posterior a la incidencia."""
        valores = cambios.cambios()
        try:
            with self._session_factory() as session:
                incidente = session.get(Incidente, incidente_id)
                if incidente is None:
                    raise IncidenteNoEncontradoError(f"No existe el incidente {incidente_id}")
                fecha = valores.get("fecha_incidencia", incidente.fecha_incidencia)
                atr = valores.get("atr", incidente.atr)
                if atr_anterior(fecha, atr):
                    raise ValueError("El ATR no puede ser anterior a la fecha de incidencia")
                if "tipo" in valores and "tipo_custom" not in valores:
                    incidente.tipo_custom = None
                for campo, valor in valores.items():
                    setattr(incidente, campo, valor)
                session.commit()
                session.refresh(incidente)
                actualizado = IncidenteConDuracion.model_validate(incidente)
        except SQLAlchemyError as exc:
            logger.exception("action=incidentes_update stage=error id=%s error=%s", incidente_id, exc)
            raise IncidentesStorageError("Error al actualizar incidente") from exc
        logger.info("action=incidentes_update id=%s campos=%s", incidente_id, sorted(valores))
        return actualizado

    def delete(self, incidente_id: str) -> bool:
        try:
            with self._session_factory() as session:
                incidente = session.get(Incidente, incidente_id)
                if incidente is None:
                    raise IncidenteNoEncontradoError(f"No existe el incidente {incidente_id}")
                session.delete(incidente)
                session.commit()
        except SQLAlchemyError as exc:
            logger.exception("action=incidentes_delete stage=error id=%s error=%s", incidente_id, exc)
            raise IncidentesStorageError("Error al eliminar incidente") from exc
        logger.info("action=incidentes_delete id=%s", incidente_id)
        return True

    def ping(self) -> dict:
        """Realiza un SELECT 1 y devuelve info básica."""
        try:
            with self._session_factory() as session:
                session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.warning("action=incidentes_ping stage=error error=%s", exc)
            return {"db": "error", "detail": str(exc)}
        return {"db": "ok"}
