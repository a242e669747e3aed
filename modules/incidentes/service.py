# Nombre de archivo: service.py
# Ubicación de archivo: modules/incidentes/service.py
# Descripción: Búsqueda, filtro por tipo, ordenamiento y paginación de la tabla de registros

"""Operaciones de la vista de registros sobre el conjunto completo de incidentes."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional

from .config import CAMPOS_BUSQUEDA, CAMPOS_ORDENABLES, ITEMS_POR_PAGINA
from .schemas import IncidenteConDuracion, PaginaIncidentes

logger = logging.getLogger(__name__)

TODOS = "all"


def buscar(incidentes: Iterable[IncidenteConDuracion], termino: Optional[str]) -> List[IncidenteConDuracion]:
    """Filtra por coincidencia parcial, sin distinguir mayúsculas, en ID, tipo, alimentador y usuario."""

    items = list(incidentes)
    texto = (termino or "").strip().lower()
    if not texto:
        return items
    return [
        inc
        for inc in items
        if any(texto in str(getattr(inc, campo)).lower() for campo in CAMPOS_BUSQUEDA)
    ]


def filtrar_por_tipo(incidentes: Iterable[IncidenteConDuracion], tipo: Optional[str]) -> List[IncidenteConDuracion]:
    items = list(incidentes)
    if not tipo or tipo == TODOS:
        return items
    return [inc for inc in items if inc.tipo == tipo]


def _clave_orden(valor: Any) -> Any:
    if isinstance(valor, str):
        return valor.casefold()
    if isinstance(valor, datetime) and valor.tzinfo is None:
        return valor.replace(tzinfo=timezone.utc)
    return valor


def ordenar(
    incidentes: Iterable[IncidenteConDuracion],
    campo: str = "created_at",
    direccion: str = "desc",
) -> List[IncidenteConDuracion]:
    """Ordena por ``campo``; los valores ausentes quedan siempre al final."""

    if campo not in CAMPOS_ORDENABLES:
        raise ValueError(f"Campo de orden no soportado: {campo}")
    if direccion not in ("asc", "desc"):
        raise ValueError(f"Dirección de orden inválida: {direccion}")

    items = list(incidentes)
    presentes = [inc for inc in items if getattr(inc, campo) is not None]
    ausentes = [inc for inc in items if getattr(inc, campo) is None]
    presentes.sort(key=lambda inc: _clave_orden(getattr(inc, campo)), reverse=direccion == "desc")
    return presentes + ausentes


def paginar(
    incidentes: List[IncidenteConDuracion],
    pagina: int = 1,
    por_pagina: int = ITEMS_POR_PAGINA,
) -> PaginaIncidentes:
    """Devuelve una página; números fuera de rango se ajustan a la primera/última."""

    if por_pagina < 1:
        raise ValueError("por_pagina debe ser mayor a cero")
    total = len(incidentes)
    total_paginas = math.ceil(total / por_pagina)
    pagina = min(max(pagina, 1), max(total_paginas, 1))
    inicio = (pagina - 1) * por_pagina
    return PaginaIncidentes(
        items=incidentes[inicio : inicio + por_pagina],
        total=total,
        pagina=pagina,
        total_paginas=total_paginas,
        por_pagina=por_pagina,
    )


def listar_incidentes(
    incidentes: Iterable[IncidenteConDuracion],
    *,
    termino: Optional[str] = None,
    tipo: Optional[str] = None,
    orden: str = "created_at",
    direccion: str = "desc",
    pagina: int = 1,
    por_pagina: int = ITEMS_POR_PAGINA,
) -> PaginaIncidentes:
    """Aplica búsqueda, filtro por tipo, orden y paginación en ese orden."""

    filtrados = filtrar_por_tipo(buscar(incidentes, termino), tipo)
    resultado = paginar(ordenar(filtrados, orden, direccion), pagina, por_pagina)
    logger.debug(
        "action=listar_incidentes termino=%s tipo=%s orden=%s direccion=%s pagina=%s total=%s",
        termino,
        tipo,
        orden,
        direccion,
        resultado.pagina,
        resultado.total,
    )
    return resultado
