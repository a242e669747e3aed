"""
# Nombre de archivo: 20250901_01_incidentes.py
# Ubicación de archivo: db/alembic/versions/20250901_01_incidentes.py
# Descripción: Crea el esquema app y la tabla app.incidentes con sus índices
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20250901_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.execute("CREATE SCHEMA IF NOT EXISTS app")
    op.create_table(
        "incidentes",
        sa.Column("id", sa.String(length=32), primary_key=True),
        sa.Column("tipo", sa.String(length=120), nullable=False),
        sa.Column("tipo_custom", sa.String(length=120), nullable=True),
        sa.Column("fecha_incidencia", sa.DateTime(timezone=True), nullable=False),
        sa.Column("atr", sa.DateTime(timezone=True), nullable=False),
        sa.Column("alimentador_normal", sa.String(length=120), nullable=False),
        sa.Column("usuario_asignado", sa.String(length=32), nullable=False),
        sa.Column("observaciones", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.CheckConstraint("atr >= fecha_incidencia", name="ck_incidentes_atr_posterior"),
        schema="app",
    )
    op.create_index("ix_app_incidentes_tipo", "incidentes", ["tipo"], schema="app")
    op.create_index("ix_app_incidentes_fecha_incidencia", "incidentes", ["fecha_incidencia"], schema="app")
    op.create_index("ix_app_incidentes_atr", "incidentes", ["atr"], schema="app")
    op.create_index("ix_app_incidentes_created_at", "incidentes", ["created_at"], schema="app")


def downgrade() -> None:
    op.drop_index("ix_app_incidentes_created_at", table_name="incidentes", schema="app")
    op.drop_index("ix_app_incidentes_atr", table_name="incidentes", schema="app")
    op.drop_index("ix_app_incidentes_fecha_incidencia", table_name="incidentes", schema="app")
    op.drop_index("ix_app_incidentes_tipo", table_name="incidentes", schema="app")
    op.drop_table("incidentes", schema="app")
