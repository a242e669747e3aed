# Nombre de archivo: timefmt.py
# Ubicación de archivo: core/utils/timefmt.py
# Descripción: Cálculo de duraciones en minutos, etiquetas "N min" y conversión a hora local

from __future__ import annotations

import math
from datetime import datetime, tzinfo


def minutos_entre(inicio: datetime, fin: datetime) -> int:
    """Devuelve los minutos enteros entre ``inicio`` y ``fin``.

    Redondea al minuto más cercano (las mitades hacia arriba) y nunca devuelve
    valores negativos: un ATR anterior a la incidencia se informa como 0.
    """

    if (inicio.tzinfo is None) != (fin.tzinfo is None):
        # Mezcla naive/aware: se interpreta el naive en la zona del otro extremo
        if inicio.tzinfo is None:
            inicio = inicio.replace(tzinfo=fin.tzinfo)
        else:
            fin = fin.replace(tzinfo=inicio.tzinfo)
    segundos = (fin - inicio).total_seconds()
    return max(0, math.floor(segundos / 60 + 0.5))


def etiqueta_minutos(minutos: int) -> str:
    """Formatea una duración como ``"<N> min"``."""

    return f"{int(minutos)} min"


def a_hora_local(valor: datetime, tz: tzinfo) -> datetime:
    """Expresa ``valor`` en la zona ``tz``.

    Los timestamps naive se consideran ya expresados en hora local.
    """

    if valor.tzinfo is None:
        return valor.replace(tzinfo=tz)
    return valor.astimezone(tz)

