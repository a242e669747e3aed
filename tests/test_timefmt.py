# Nombre de archivo: test_timefmt.py
# Ubicación de archivo: tests/test_timefmt.py
# Descripción: Pruebas unitarias para duraciones en minutos y conversión a hora local

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from core.utils.timefmt import a_hora_local, etiqueta_minutos, minutos_entre

INICIO = datetime(2024, 3, 15, 10, 0, tzinfo=timezone.utc)


def test_minutos_entre_redondea_al_mas_cercano():
    assert minutos_entre(INICIO, INICIO + timedelta(minutes=45)) == 45
    assert minutos_entre(INICIO, INICIO + timedelta(minutes=5, seconds=30)) == 6
    assert minutos_entre(INICIO, INICIO + timedelta(minutes=5, seconds=29)) == 5
    assert minutos_entre(INICIO, INICIO) == 0


def test_minutos_entre_nunca_es_negativo():
    assert minutos_entre(INICIO, INICIO - timedelta(hours=2)) == 0


def test_minutos_entre_acepta_mezcla_naive_y_aware():
    naive = datetime(2024, 3, 15, 10, 30)
    assert minutos_entre(INICIO, naive) == 30


def test_etiqueta_minutos():
    assert etiqueta_minutos(45) == "45 min"
    assert etiqueta_minutos(0) == "0 min"


def test_a_hora_local():
    tz = ZoneInfo("America/Argentina/Buenos_Aires")
    assert a_hora_local(INICIO, tz).hour == 7
    naive = datetime(2024, 3, 15, 10, 0)
    assert a_hora_local(naive, tz) == datetime(2024, 3, 15, 10, 0, tzinfo=tz)
