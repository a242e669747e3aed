# Nombre de archivo: secrets.py
# Ubicación de archivo: core/secrets.py
# Descripción: Lectura de secretos (credenciales de base) desde entorno o Docker secrets

"""Funciones para leer secretos de variables de entorno o archivos en `/run/secrets`.

La contraseña de PostgreSQL del servicio de incidentes puede llegar como
variable de entorno o como Docker secret. Si la variable no está definida, se
busca un archivo con el mismo nombre (en minúsculas) dentro del directorio de
secretos.
"""

from pathlib import Path
from typing import Optional
import os

SECRETS_DIR = Path(os.getenv("SECRETS_DIR", "/run/secrets"))


def get_secret(name: str, default: Optional[str] = None) -> Optional[str]:
    """Obtiene el secreto `name` desde variables de entorno o el directorio de secretos.

    Parameters
    ----------
    name:
        Nombre de la variable de entorno a buscar (p. ej. ``POSTGRES_PASSWORD``).
    default:
        Valor a retornar si no se encuentra el secreto.

    Returns
    -------
    Optional[str]
        Valor del secreto o `default` si no está disponible.
    """

    value = os.getenv(name)
    if value:
        return value

    secret_file = SECRETS_DIR / name.lower()
    try:
        return secret_file.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return default
