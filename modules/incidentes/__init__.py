# Nombre de archivo: __init__.py
# Ubicación de archivo: modules/incidentes/__init__.py
# Descripción: Inicializa el paquete del registro de incidentes

from .schemas import IncidenteConDuracion, IncidenteCreate, IncidenteUpdate, PaginaIncidentes
from .service import listar_incidentes

__all__ = [
    "IncidenteConDuracion",
    "IncidenteCreate",
    "IncidenteUpdate",
    "PaginaIncidentes",
    "listar_incidentes",
]
