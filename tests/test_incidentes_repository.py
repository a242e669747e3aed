# Nombre de archivo: test_incidentes_repository.py
# Ubicación de archivo: tests/test_incidentes_repository.py
# Descripción: Pruebas del repositorio de incidentes sobre SQLite en memoria

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool

from core.repositories.incidentes import (
    IncidenteDuplicadoError,
    IncidenteNoEncontradoError,
    IncidentesRepository,
    IncidentesStorageError,
)
from db.base import Base
from db.models.incidente import Incidente  # noqa: F401  registra la tabla
from db.session import build_engine, build_session_factory
from modules.incidentes.schemas import IncidenteCreate, IncidenteUpdate

INICIO = datetime(2024, 3, 15, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def repo():
    engine = build_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield IncidentesRepository(build_session_factory(engine))
    engine.dispose()


def _alta(id: str = "0001234567", minutos: int = 45, **cambios) -> IncidenteCreate:
    datos = {
        "id": id,
        "tipo": "Programada",
        "fecha_incidencia": INICIO,
        "atr": INICIO + timedelta(minutes=minutos),
        "alimentador_normal": "ALIM-01",
        "usuario_asignado": "USR0000001",
        "observaciones": "Corte programado",
    }
    datos.update(cambios)
    return IncidenteCreate(**datos)


def test_create_agrega_prefijo_y_calcula_duracion(repo):
    creado = repo.create(_alta())
    assert creado.id == "INC 0001234567"
    assert creado.duracion == 45
    assert creado.usuario_asignado == "USR0000001"
    assert creado.created_at is not None


def test_create_duplicado(repo):
    repo.create(_alta())
    with pytest.raises(IncidenteDuplicadoError):
        repo.create(_alta())


def test_fetch_all_mas_recientes_primero(repo):
    repo.create(_alta("0000000001"))
    repo.create(_alta("0000000002"))
    ids = [inc.id for inc in repo.fetch_all()]
    assert set(ids) == {"INC 0000000001", "INC 0000000002"}
    assert ids[0] == "INC 0000000002"


def test_get_update_delete(repo):
    repo.create(_alta())

    assert repo.get_by_id("INC 0001234567").observaciones == "Corte programado"

    actualizado = repo.update(
        "INC 0001234567",
        IncidenteUpdate(observaciones="Normalizado", atr=INICIO + timedelta(minutes=90)),
    )
    assert actualizado.observaciones == "Normalizado"
    assert actualizado.duracion == 90

    with pytest.raises(ValueError):
        repo.update("INC 0001234567", IncidenteUpdate(atr=INICIO - timedelta(minutes=5)))

    assert repo.delete("INC 0001234567") is True
    with pytest.raises(IncidenteNoEncontradoError):
        repo.get_by_id("INC 0001234567")
    with pytest.raises(IncidenteNoEncontradoError):
        repo.delete("INC 0001234567")


def test_update_cambio_de_tipo_limpia_tipo_custom(repo):
    repo.create(_alta(tipo="custom", tipo_custom="Caída de poste"))
    actualizado = repo.update("INC 0001234567", IncidenteUpdate(tipo="Programada"))
    assert actualizado.tipo == "Programada"
    assert actualizado.tipo_custom is None


def test_fetch_all_envuelve_errores_de_base():
    def session_factory():
        raise OperationalError("SELECT", {}, Exception("sin conexión"))

    repo = IncidentesRepository(session_factory)
    with pytest.raises(IncidentesStorageError) as exc:
        repo.fetch_all()
    assert str(exc.value) == "Error al obtener incidentes"


def test_ping(repo):
    assert repo.ping() == {"db": "ok"}
