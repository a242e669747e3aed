# Nombre de archivo: incidente.py
# Ubicación de archivo: db/models/incidente.py
# Descripción: Modelo SQLAlchemy para incidentes de la red eléctrica (tabla app.incidentes)

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String, Text, func

from db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Incidente(Base):
    __tablename__ = "incidentes"
    __table_args__ = {"schema": "app"}

    id = Column(String(32), primary_key=True)
    tipo = Column(String(120), nullable=False, index=True)
    tipo_custom = Column(String(120), nullable=True)
    fecha_incidencia = Column(DateTime(timezone=True), nullable=False, index=True)
    atr = Column(DateTime(timezone=True), nullable=False, index=True)
    alimentador_normal = Column(String(120), nullable=False)
    usuario_asignado = Column(String(32), nullable=False)
    observaciones = Column(Text, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
        index=True,
    )

    def __repr__(self) -> str:  # pragma: no cover - depuración
        return f"<Incidente id={self.id!r} tipo={self.tipo!r}>"
