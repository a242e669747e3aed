# Nombre de archivo: test_config.py
# Ubicación de archivo: tests/test_config.py
# Descripción: Pruebas de la configuración por variables de entorno

import pytest

from core.config import Settings
from modules.conciliacion.service import ConciliacionConfig


def test_settings_por_defecto(monkeypatch):
    for var in ("DATABASE_URL", "CONCILIACION_CAMPO_FECHA", "CONCILIACION_ESTILO", "INCIDENTES_TZ"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("POSTGRES_PASSWORD", "secreto")

    settings = Settings()

    assert settings.database.url.startswith("postgresql+psycopg://")
    assert ":secreto@" in settings.database.url
    assert settings.conciliacion.campo_fecha == "fecha_incidencia"
    assert settings.conciliacion.estilo == "estilizado"
    assert str(settings.conciliacion.timezone) == "America/Argentina/Buenos_Aires"


def test_settings_variantes_de_conciliacion(monkeypatch, tmp_path):
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("CONCILIACION_CAMPO_FECHA", "ATR")
    monkeypatch.setenv("CONCILIACION_ESTILO", "plano")
    monkeypatch.setenv("REPORTS_DIR", str(tmp_path))

    settings = Settings()
    config = ConciliacionConfig.from_settings(settings)

    assert settings.database.url == "sqlite://"
    assert config.campo_fecha == "atr"
    assert config.estilo == "plano"
    assert config.columna_duracion == "Duracion Calculada"
    assert config.reports_dir == tmp_path


def test_settings_rechaza_valores_invalidos(monkeypatch):
    monkeypatch.setenv("CONCILIACION_CAMPO_FECHA", "created_at")
    with pytest.raises(ValueError):
        Settings()
    monkeypatch.setenv("CONCILIACION_CAMPO_FECHA", "atr")
    monkeypatch.setenv("CONCILIACION_ESTILO", "negrita")
    with pytest.raises(ValueError):
        Settings()


def test_get_secret_lee_archivo_de_secretos(monkeypatch, tmp_path):
    from core import secrets

    monkeypatch.delenv("POSTGRES_PASSWORD", raising=False)
    monkeypatch.setattr(secrets, "SECRETS_DIR", tmp_path)
    assert secrets.get_secret("POSTGRES_PASSWORD", "x") == "x"

    (tmp_path / "postgres_password").write_text("desde-archivo\n", encoding="utf-8")
    assert secrets.get_secret("POSTGRES_PASSWORD") == "desde-archivo"
