# Nombre de archivo: __init__.py
# Ubicación de archivo: core/__init__.py
# Descripción: Paquete de utilidades compartidas (configuración, logging, secretos, repositorios)

"""Utilidades compartidas por la API, el CLI y los módulos de incidentes."""

from .config import get_settings
from .secrets import get_secret

__all__ = ["get_secret", "get_settings"]
