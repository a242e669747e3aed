# Nombre de archivo: test_conciliacion_api.py
# Ubicación de archivo: tests/test_conciliacion_api.py
# Descripción: Pruebas del endpoint /conciliacion (descarga XLSX, resumen JSON y errores)

import io
from pathlib import Path
from zoneinfo import ZoneInfo

from fastapi.testclient import TestClient
from openpyxl import load_workbook

from api.app.main import create_app
from modules.conciliacion.service import ConciliacionConfig

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
TZ = ZoneInfo("America/Argentina/Buenos_Aires")


def _client(repo, tmp_path: Path, **kwargs) -> TestClient:
    config = ConciliacionConfig.crear(timezone=TZ, reports_dir=tmp_path, **kwargs)
    return TestClient(create_app(repositorio=repo, conciliacion_config=config))


def test_conciliacion_devuelve_xlsx(tmp_path, xlsx_factory, incidente_factory, fake_repo_factory):
    repo = fake_repo_factory([incidente_factory("INC 0001234567", minutos=45, observaciones="ok")])
    client = _client(repo, tmp_path)
    files = {"file": ("planilla.xlsx", xlsx_factory([{"ID": "INC-0001234567", "city": "X"}]), XLSX)}

    response = client.post("/conciliacion", data={"mes": "2024-03"}, files=files)

    assert response.status_code == 200
    assert response.headers["content-type"] == XLSX
    assert response.headers["content-disposition"].startswith('attachment; filename="incidentes_procesados_')
    assert response.headers["x-total-filas"] == "1"
    assert response.headers["x-coincidencias"] == "1"
    assert response.headers["x-periodo"] == "2024-03"
    ws = load_workbook(io.BytesIO(response.content)).active
    assert [c.value for c in ws[1]] == ["ID", "city", "Duración de incidencia (calculada)", "Observaciones"]
    assert ws["C2"].value == "45 min"


def test_conciliacion_formato_json(tmp_path, xlsx_factory, incidente_factory, fake_repo_factory):
    repo = fake_repo_factory([incidente_factory("INC 0001234567", minutos=30)])
    client = _client(repo, tmp_path, estilo="plano", campo_fecha="atr")
    files = {"file": ("planilla.xlsx", xlsx_factory([{"numero": "INC-0001234567"}, {"numero": "X-1"}]), XLSX)}

    response = client.post("/conciliacion", data={"mes": "2024-03", "formato": "json"}, files=files)

    assert response.status_code == 200
    data = response.json()
    assert data["periodo"] == "2024-03"
    assert data["campo_fecha"] == "atr"
    assert data["total_filas"] == 2
    assert data["coincidencias"] == 1
    assert data["filas"][0] == {"numero": "INC-0001234567", "Duracion Calculada": "30 min", "Observaciones": "ok"}
    assert data["filas"][1] == {"numero": "X-1"}


def test_conciliacion_rechaza_extension(tmp_path, fake_repo_factory):
    repo = fake_repo_factory()
    client = _client(repo, tmp_path)
    files = {"file": ("planilla.csv", b"ID\nINC-1\n", "text/csv")}
    response = client.post("/conciliacion", files=files)
    assert response.status_code == 415
    assert repo.llamadas == 0


def test_conciliacion_acepta_extension_xls(tmp_path, fake_repo_factory):
    repo = fake_repo_factory()
    client = _client(repo, tmp_path)
    # Firma OLE2 válida pero libro ilegible: pasa el filtro de extensión y falla la lectura
    contenido = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 504
    files = {"file": ("planilla.XLS", contenido, "application/vnd.ms-excel")}
    response = client.post("/conciliacion", files=files, data={"mes": "2024-03"})
    assert response.status_code == 400
    assert repo.llamadas == 0


def test_conciliacion_rechaza_archivo_invalido(tmp_path, fake_repo_factory):
    repo = fake_repo_factory()
    client = _client(repo, tmp_path)
    files = {"file": ("planilla.xlsx", b"esto no es un excel", XLSX)}
    response = client.post("/conciliacion", files=files)
    assert response.status_code == 400
    assert repo.llamadas == 0


def test_conciliacion_rechaza_mes_invalido(tmp_path, xlsx_factory, fake_repo_factory):
    repo = fake_repo_factory()
    client = _client(repo, tmp_path)
    files = {"file": ("planilla.xlsx", xlsx_factory([{"ID": "INC-1"}]), XLSX)}
    response = client.post("/conciliacion", data={"mes": "2024-13"}, files=files)
    assert response.status_code == 422
    assert repo.llamadas == 0


def test_conciliacion_falla_de_almacenamiento(tmp_path, xlsx_factory, fake_repo_factory):
    client = _client(fake_repo_factory(falla=True), tmp_path)
    files = {"file": ("planilla.xlsx", xlsx_factory([{"ID": "INC-1"}]), XLSX)}
    response = client.post("/conciliacion", data={"mes": "2024-03"}, files=files)
    assert response.status_code == 502
    assert response.json()["detail"] == "No se pudieron obtener los incidentes"


def test_conciliacion_meses(tmp_path, fake_repo_factory):
    client = _client(fake_repo_factory(), tmp_path)
    response = client.get("/conciliacion/meses")
    assert response.status_code == 200
    opciones = response.json()
    assert len(opciones) == 24
    assert set(opciones[0]) == {"valor", "etiqueta"}
