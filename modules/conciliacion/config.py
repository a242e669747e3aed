# Nombre de archivo: config.py
# Ubicación de archivo: modules/conciliacion/config.py
# Descripción: Constantes de la conciliación de planillas contra incidentes registrados

import re
from typing import List

# Columnas candidatas al ID del incidente, en orden de prioridad
COLUMNAS_ID: List[str] = [
    "ID",
    "Id",
    "id",
    "incidente",
    "Incidente",
    "incident_id",
    "numero",
    "codigo",
]

# Prefijo "INC" seguido de espacios o guiones (se quita antes de comparar)
PREFIJO_ID_RE = re.compile(r"^INC[\s-]*", re.IGNORECASE)

# Valor con forma de ID: "INC" opcional + separador opcional + caracteres de palabra o guiones
VALOR_ID_RE = re.compile(r"^(INC[\s-]?)?[\w-]+$", re.ASCII)

# Formato del token de mes de comparación
PERIODO_RE = re.compile(r"^(?P<anio>\d{4})-(?P<mes>\d{2})$")

# Campos de fecha que pueden anclar un incidente a un mes
CAMPOS_FECHA: List[str] = ["fecha_incidencia", "atr"]
CAMPO_FECHA_DEFAULT = "fecha_incidencia"

# Variantes de exportación
ESTILO_ESTILIZADO = "estilizado"
ESTILO_PLANO = "plano"
ESTILOS: List[str] = [ESTILO_ESTILIZADO, ESTILO_PLANO]

COLUMNA_DURACION_ESTILIZADO = "Duración de incidencia (calculada)"
COLUMNA_DURACION_PLANO = "Duracion Calculada"
COLUMNA_OBSERVACIONES = "Observaciones"

# Planilla de salida
NOMBRE_HOJA = "Incidentes Procesados"
PREFIJO_ARCHIVO = "incidentes_procesados_"
EXTENSION_SALIDA = ".xlsx"
EXTENSIONES_ENTRADA: List[str] = [".xlsx", ".xlsm", ".xls"]

# Motores de pandas por formato; los .xls (OLE2) se reconocen por su firma
MOTOR_XLSX = "openpyxl"
MOTOR_XLS = "xlrd"
FIRMA_XLS = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
MEDIA_TYPE_XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Ancho de columnas en unidades de carácter: clamp(ANCHO_MIN, largo * FACTOR + PADDING, ANCHO_MAX)
ANCHO_MIN = 8
ANCHO_MAX = 50
ANCHO_FACTOR = 1.2
ANCHO_PADDING = 2

# Marcado de la columna de duración (ARGB)
COLOR_FUENTE_DURACION = "FFDC2626"
COLOR_FONDO_DURACION = "FFFEE2E2"

MESES_ES: List[str] = [
    "enero",
    "febrero",
    "marzo",
    "abril",
    "mayo",
    "junio",
    "julio",
    "agosto",
    "septiembre",
    "octubre",
    "noviembre",
    "diciembre",
]
