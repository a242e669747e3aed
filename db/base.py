# Nombre de archivo: base.py
# Ubicación de archivo: db/base.py
# Descripción: Base declarativa SQLAlchemy compartida por el modelo de incidentes

from __future__ import annotations

from sqlalchemy.orm import declarative_base

Base = declarative_base()
