# Nombre de archivo: session.py
# Ubicación de archivo: db/session.py
# Descripción: Construcción explícita de engine y fábrica de sesiones SQLAlchemy

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker


def build_engine(url: str, *, echo: bool = False, **kwargs: Any) -> Engine:
    """Crea un engine para ``url``.

    Las URLs PostgreSQL usan ``pool_pre_ping`` y reciclado de conexiones; para
    SQLite (tests, uso local) el esquema ``app`` se traduce al esquema por
    defecto.
    """
    if url.startswith("sqlite"):
        engine = create_engine(url, echo=echo, **kwargs)
        return engine.execution_options(schema_translate_map={"app": None})
    return create_engine(url, echo=echo, pool_pre_ping=True, pool_recycle=1800, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
