# Nombre de archivo: test_conciliar_excel_cli.py
# Ubicación de archivo: tests/test_conciliar_excel_cli.py
# Descripción: Pruebas del CLI de conciliación de planillas

import io

from openpyxl import load_workbook

from scripts import conciliar_excel


def test_cli_genera_planilla(tmp_path, capsys, xlsx_factory, incidente_factory, fake_repo_factory):
    entrada = tmp_path / "planilla.xlsx"
    entrada.write_bytes(xlsx_factory([{"ID": "INC-0001234567", "zona": "N"}]))
    repo = fake_repo_factory([incidente_factory("INC 0001234567", minutos=12)])
    salida = tmp_path / "out"

    codigo = conciliar_excel.main(
        [str(entrada), "--mes", "2024-03", "--salida", str(salida), "--plano"], repositorio=repo
    )

    assert codigo == 0
    assert "[OK]" in capsys.readouterr().out
    generados = list(salida.glob("incidentes_procesados_*.xlsx"))
    assert len(generados) == 1
    ws = load_workbook(io.BytesIO(generados[0].read_bytes())).active
    assert [c.value for c in ws[1]] == ["ID", "zona", "Duracion Calculada", "Observaciones"]
    assert ws["C2"].value == "12 min"


def test_cli_codigos_de_error(tmp_path, capsys, xlsx_factory, fake_repo_factory):
    entrada = tmp_path / "planilla.xlsx"
    entrada.write_bytes(xlsx_factory([{"ID": "INC-1"}]))

    assert conciliar_excel.main([str(tmp_path / "no-existe.xlsx")], repositorio=fake_repo_factory()) == 1
    assert conciliar_excel.main([str(entrada), "--mes", "2024-13"], repositorio=fake_repo_factory()) == 2
    assert (
        conciliar_excel.main(
            [str(entrada), "--mes", "2024-03", "--salida", str(tmp_path)],
            repositorio=fake_repo_factory(falla=True),
        )
        == 3
    )
    assert "No se pudieron obtener los incidentes" in capsys.readouterr().out
