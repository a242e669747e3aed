# Nombre de archivo: processor.py
# Ubicación de archivo: modules/conciliacion/processor.py
# Descripción: Selección de período, filtro de incidentes, normalización de IDs y cruce con filas de planilla

import logging
import math
from datetime import date, datetime, tzinfo
from typing import Any, Iterable, List, Optional, Sequence

from core.utils.timefmt import a_hora_local, etiqueta_minutos
from modules.incidentes.schemas import IncidenteConDuracion

from .config import (
    CAMPOS_FECHA,
    COLUMNA_DURACION_ESTILIZADO,
    COLUMNA_OBSERVACIONES,
    COLUMNAS_ID,
    MESES_ES,
    PERIODO_RE,
    PREFIJO_ID_RE,
    VALOR_ID_RE,
)
from .schemas import FilaPlanilla, OpcionMes, Periodo, ResultadoConciliacion

logger = logging.getLogger(__name__)


def resolver_periodo(token: Optional[str], tz: tzinfo, ahora: Optional[datetime] = None) -> Periodo:
    """Convierte un token ``YYYY-MM`` (o su ausencia) en un período mensual.

    Sin token se usa el mes calendario actual en ``tz``. Un token mal formado o
    con mes fuera de 1-12 se rechaza con ``ValueError``.
    """
    texto = (token or "").strip()
    if not texto:
        if ahora is None:
            actual = datetime.now(tz)
        else:
            actual = a_hora_local(ahora, tz)
        return Periodo(anio=actual.year, mes=actual.month, tz=tz)

    match = PERIODO_RE.match(texto)
    if not match:
        raise ValueError(f"Mes de comparación inválido: {texto!r} (formato esperado YYYY-MM)")
    anio = int(match.group("anio"))
    mes = int(match.group("mes"))
    if not 1 <= mes <= 12:
        raise ValueError(f"Mes de comparación fuera de rango: {texto!r}")
    return Periodo(anio=anio, mes=mes, tz=tz)


def filtrar_por_periodo(
    incidentes: Iterable[IncidenteConDuracion],
    periodo: Periodo,
    campo_fecha: str = "fecha_incidencia",
) -> List[IncidenteConDuracion]:
    """Conserva, en su orden original, los incidentes cuyo campo de fecha cae en el período."""
    if campo_fecha not in CAMPOS_FECHA:
        raise ValueError(f"Campo de fecha no soportado: {campo_fecha}")
    return [inc for inc in incidentes if periodo.contiene(getattr(inc, campo_fecha))]


def normalizar_id(valor: str) -> str:
    """Quita el prefijo ``INC`` (con espacios o guiones) y los espacios externos."""
    return PREFIJO_ID_RE.sub("", valor, count=1).strip()


def _es_vacio(valor: Any) -> bool:
    if valor is None or valor is False:
        return True
    if isinstance(valor, float) and math.isnan(valor):
        return True
    if isinstance(valor, (int, float)) and not isinstance(valor, bool) and valor == 0:
        return True
    return isinstance(valor, str) and valor == ""


def valor_a_texto(valor: Any) -> str:
    """Representación textual de una celda (``True`` → ``"true"``, ``12.0`` → ``"12"``)."""
    if valor is None:
        return ""
    if isinstance(valor, bool):
        return "true" if valor else "false"
    if isinstance(valor, float):
        if math.isnan(valor):
            return ""
        if valor.is_integer():
            return str(int(valor))
    if isinstance(valor, (datetime, date)):
        return valor.isoformat()
    return str(valor)


def extraer_id(fila: FilaPlanilla) -> Optional[str]:
    """Localiza el identificador del incidente en una fila de planilla.

    Toma la primera columna conocida (``COLUMNAS_ID``, en orden) que tenga
    valor; si ese valor recortado queda vacío, o ninguna columna conocida tiene
    valor, recorre todas las columnas y toma el primer valor con forma de ID.
    Devuelve ``None`` si no encuentra ninguno.
    """
    for columna in COLUMNAS_ID:
        valor = fila.get(columna)
        if not _es_vacio(valor):
            texto = valor_a_texto(valor).strip()
            if texto:
                return texto
            break

    for valor in fila.values():
        if _es_vacio(valor):
            continue
        texto = valor_a_texto(valor)
        if VALOR_ID_RE.match(texto):
            return texto.strip()
    return None


def buscar_incidente(
    incidentes: Sequence[IncidenteConDuracion], incidente_id: str
) -> Optional[IncidenteConDuracion]:
    """Primer incidente cuyo ID normalizado coincide exactamente con ``incidente_id`` normalizado."""
    buscado = normalizar_id(incidente_id)
    for incidente in incidentes:
        if normalizar_id(incidente.id) == buscado:
            return incidente
    return None


def conciliar(
    filas: Sequence[FilaPlanilla],
    incidentes: Sequence[IncidenteConDuracion],
    columna_duracion: str = COLUMNA_DURACION_ESTILIZADO,
    columna_observaciones: str = COLUMNA_OBSERVACIONES,
) -> ResultadoConciliacion:
    """Agrega duración y observaciones a cada fila con incidente coincidente.

    Las filas conservan sus columnas y su orden; las que no coinciden pasan sin
    cambios.
    """
    coincidencias = 0
    procesadas: List[FilaPlanilla] = []
    for fila in filas:
        nueva = dict(fila)
        incidente_id = extraer_id(fila)
        encontrado = buscar_incidente(incidentes, incidente_id) if incidente_id else None
        if encontrado is not None:
            coincidencias += 1
            nueva[columna_duracion] = etiqueta_minutos(encontrado.duracion)
            nueva[columna_observaciones] = encontrado.observaciones
        procesadas.append(nueva)

    logger.info(
        "action=conciliar filas=%s incidentes=%s coincidencias=%s",
        len(filas),
        len(incidentes),
        coincidencias,
    )
    return ResultadoConciliacion(
        filas=procesadas,
        coincidencias=coincidencias,
        total_filas=len(filas),
        columnas_agregadas=[columna_duracion, columna_observaciones] if coincidencias else [],
    )


def opciones_meses(hoy: Optional[date] = None) -> List[OpcionMes]:
    """Meses ofrecidos para comparar.

    Primero el año anterior de diciembre a enero y luego el año actual de enero
    a diciembre, como los presenta el selector de mes.
    """
    hoy = hoy or date.today()

    def _opcion(anio: int, mes: int) -> OpcionMes:
        return OpcionMes(valor=f"{anio:04d}-{mes:02d}", etiqueta=f"{MESES_ES[mes - 1]} de {anio}")

    anterior = [_opcion(hoy.year - 1, mes) for mes in range(12, 0, -1)]
    actual = [_opcion(hoy.year, mes) for mes in range(1, 13)]
    return anterior + actual
