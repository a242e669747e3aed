# Nombre de archivo: test_health.py
# Ubicación de archivo: tests/test_health.py
# Descripción: Pruebas para las rutas de health y verificación de DB de la API

from zoneinfo import ZoneInfo

from fastapi.testclient import TestClient

from api.app.main import create_app
from modules.conciliacion.service import ConciliacionConfig


def _client(repo, tmp_path) -> TestClient:
    config = ConciliacionConfig.crear(timezone=ZoneInfo("UTC"), reports_dir=tmp_path)
    return TestClient(create_app(repositorio=repo, conciliacion_config=config))


def test_health_returns_ok(tmp_path, fake_repo_factory) -> None:
    """Verifica que el endpoint /health responde correctamente."""
    response = _client(fake_repo_factory(), tmp_path).get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "api"
    assert "time" in data


def test_db_check_usa_el_repositorio(tmp_path, fake_repo_factory) -> None:
    response = _client(fake_repo_factory(), tmp_path).get("/db-check")
    assert response.status_code == 200
    assert response.json() == {"db": "ok"}
