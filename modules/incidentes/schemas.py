# Nombre de archivo: schemas.py
# Ubicación de archivo: modules/incidentes/schemas.py
# Descripción: Modelos pydantic de alta, edición, lectura y paginación de incidentes

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from core.utils.timefmt import minutos_entre

from .config import ID_LONGITUD, TIPO_CUSTOM, TIPOS_INCIDENTES, USUARIO_LONGITUD


def _requerido(valor: Optional[str], mensaje: str) -> str:
    texto = (valor or "").strip()
    if not texto:
        raise ValueError(mensaje)
    return texto


def _validar_tipo(tipo: str, tipo_custom: Optional[str]) -> None:
    if tipo == TIPO_CUSTOM:
        if not (tipo_custom or "").strip():
            raise ValueError("Debe especificar el tipo de incidente")
    elif tipo not in TIPOS_INCIDENTES:
        raise ValueError(f"Tipo de incidente no reconocido: {tipo}")


class IncidenteCreate(BaseModel):
    """Datos del formulario de alta.

    ``id`` es el sufijo de 10 caracteres; el prefijo ``INC `` lo agrega el
    repositorio al persistir.
    """

    id: str
    tipo: str
    tipo_custom: Optional[str] = None
    fecha_incidencia: datetime
    atr: datetime
    alimentador_normal: str
    usuario_asignado: str
    observaciones: str

    @field_validator("id")
    @classmethod
    def _id_valido(cls, valor: str) -> str:
        texto = _requerido(valor, "El ID del incidente es requerido")
        if len(texto) != ID_LONGITUD:
            raise ValueError(f"El ID debe tener exactamente {ID_LONGITUD} caracteres")
        return texto

    @field_validator("tipo")
    @classmethod
    def _tipo_requerido(cls, valor: str) -> str:
        return _requerido(valor, "El tipo de incidente es requerido")

    @field_validator("alimentador_normal")
    @classmethod
    def _alimentador_requerido(cls, valor: str) -> str:
        return _requerido(valor, "El alimentador normal es requerido")

    @field_validator("usuario_asignado")
    @classmethod
    def _usuario_valido(cls, valor: str) -> str:
        texto = _requerido(valor, "El usuario asignado es requerido")
        if len(texto) != USUARIO_LONGITUD:
            raise ValueError(
                f"El usuario asignado debe tener exactamente {USUARIO_LONGITUD} caracteres"
            )
        return texto

    @field_validator("observaciones")
    @classmethod
    def _observaciones_requeridas(cls, valor: str) -> str:
        return _requerido(valor, "Las observaciones son requeridas")

    @model_validator(mode="after")
    def _coherencia(self) -> "IncidenteCreate":
        _validar_tipo(self.tipo, self.tipo_custom)
        if self.tipo != TIPO_CUSTOM:
            self.tipo_custom = None
        if atr_anterior(self.fecha_incidencia, self.atr):
            raise ValueError("El ATR no puede ser anterior a la fecha de incidencia")
        return self


class IncidenteUpdate(BaseModel):
    """Cambios parciales; solo se aplican los campos informados."""

    tipo: Optional[str] = None
    tipo_custom: Optional[str] = None
    fecha_incidencia: Optional[datetime] = None
    atr: Optional[datetime] = None
    alimentador_normal: Optional[str] = None
    usuario_asignado: Optional[str] = None
    observaciones: Optional[str] = None

    @field_validator("alimentador_normal", "observaciones", "tipo")
    @classmethod
    def _no_vacios(cls, valor: Optional[str]) -> Optional[str]:
        if valor is None:
            return None
        return _requerido(valor, "El campo no puede quedar vacío")

    @field_validator("usuario_asignado")
    @classmethod
    def _usuario_valido(cls, valor: Optional[str]) -> Optional[str]:
        if valor is None:
            return None
        texto = _requerido(valor, "El usuario asignado es requerido")
        if len(texto) != USUARIO_LONGITUD:
            raise ValueError(
                f"El usuario asignado debe tener exactamente {USUARIO_LONGITUD} caracteres"
            )
        return texto

    @model_validator(mode="after")
    def _coherencia(self) -> "IncidenteUpdate":
        if self.tipo is not None:
            _validar_tipo(self.tipo, self.tipo_custom)
        if self.fecha_incidencia is not None and self.atr is not None:
            if atr_anterior(self.fecha_incidencia, self.atr):
                raise ValueError("El ATR no puede ser anterior a la fecha de incidencia")
        return self

    def cambios(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


def atr_anterior(fecha_incidencia: datetime, atr: datetime) -> bool:
    if (fecha_incidencia.tzinfo is None) != (atr.tzinfo is None):
        if fecha_incidencia.tzinfo is None:
            fecha_incidencia = fecha_incidencia.replace(tzinfo=atr.tzinfo)
        else:
            atr = atr.replace(tzinfo=fecha_incidencia.tzinfo)
    return atr < fecha_incidencia


class IncidenteConDuracion(BaseModel):
    """Incidente leído del almacenamiento con su duración derivada (minutos)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    tipo: str
    tipo_custom: Optional[str] = None
    fecha_incidencia: datetime
    atr: datetime
    alimentador_normal: str
    usuario_asignado: str
    observaciones: str
    created_at: Optional[datetime] = None
    duracion: int = 0

    @model_validator(mode="after")
    def _calcular_duracion(self) -> "IncidenteConDuracion":
        self.duracion = minutos_entre(self.fecha_incidencia, self.atr)
        return self


class PaginaIncidentes(BaseModel):
    items: List[IncidenteConDuracion]
    total: int
    pagina: int
    total_paginas: int
    por_pagina: int
