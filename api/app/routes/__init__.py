# Nombre de archivo: __init__.py
# Ubicación de archivo: api/app/routes/__init__.py
# Descripción: Init del paquete routes

"""Routers de la API agrupados por funcionalidad.

Cada módulo expone un ``APIRouter`` que ``create_app`` registra en la
aplicación.
"""

from .conciliacion import router as conciliacion_router
from .health import router as health_router
from .incidentes import router as incidentes_router

__all__ = ["conciliacion_router", "health_router", "incidentes_router"]
