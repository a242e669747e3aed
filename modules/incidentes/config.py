# Nombre de archivo: config.py
# Ubicación de archivo: modules/incidentes/config.py
# Descripción: Constantes del registro de incidentes (tipos, prefijos, paginación)

from typing import List

# Tipos predefinidos que ofrece el formulario de carga
TIPOS_INCIDENTES: List[str] = [
    "Programada",
    "No programada sin servicio",
    "No programada con servicio",
    "Alumbrado publico",
]

# Valor del selector que habilita el tipo libre (tipo_custom)
TIPO_CUSTOM = "custom"

# Prefijo canónico de los IDs almacenados ("INC " + 10 caracteres)
ID_PREFIJO = "INC "
ID_LONGITUD = 10
USUARIO_LONGITUD = 10

# Tabla de registros
ITEMS_POR_PAGINA = 10
CAMPOS_ORDENABLES: List[str] = [
    "id",
    "tipo",
    "duracion",
    "fecha_incidencia",
    "atr",
    "alimentador_normal",
    "usuario_asignado",
    "created_at",
]
CAMPOS_BUSQUEDA: List[str] = ["id", "tipo", "alimentador_normal", "usuario_asignado"]
