"""initial tables: users, cursos, proveedores, periodos, trabajos

Revision ID: 0001_initial
Revises:
Create Date: 2025-06-01 10:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns():
    return [
        sa.Column("created_date", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_date", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("user_id", sa.Uuid(), primary_key=True),
        sa.Column("user_name", sa.String(255), nullable=False),
        sa.Column("password", sa.String(255), nullable=False),
        sa.Column("user_email", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_audit_columns(),
        sa.Column("last_login_date", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_users_user_id", "users", ["user_id"])
    op.create_index("ix_users_user_email", "users", ["user_email"], unique=True)

    op.create_table(
        "cursos",
        sa.Column("curso_id", sa.Uuid(), primary_key=True),
        sa.Column("nombre", sa.String(255), nullable=False),
        *_audit_columns(),
    )
    op.create_index("ix_cursos_curso_id", "cursos", ["curso_id"])
    op.create_index("ix_cursos_nombre", "cursos", ["nombre"])

    op.create_table(
        "proveedores",
        sa.Column("proveedor_id", sa.Uuid(), primary_key=True),
        sa.Column("nombre", sa.String(255), nullable=False),
        sa.Column("celular", sa.String(9), nullable=False),
        *_audit_columns(),
    )
    op.create_index("ix_proveedores_proveedor_id", "proveedores", ["proveedor_id"])
    op.create_index("ix_proveedores_nombre", "proveedores", ["nombre"])

    op.create_table(
        "periodos",
        sa.Column("periodo_id", sa.Uuid(), primary_key=True),
        sa.Column("nombre", sa.String(100), nullable=False),
        *_audit_columns(),
    )
    op.create_index("ix_periodos_periodo_id", "periodos", ["periodo_id"])
    op.create_index("ix_periodos_nombre", "periodos", ["nombre"])

    op.create_table(
        "trabajos",
        sa.Column("trabajo_id", sa.Uuid(), primary_key=True),
        sa.Column("nombre_cliente", sa.String(255), nullable=False),
        sa.Column("tipo_pa", sa.String(10), nullable=False),
        sa.Column("tipo_trabajo", sa.String(50), nullable=False),
        sa.Column("precio", sa.Numeric(10, 2), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("estado", sa.String(20), nullable=False),
        sa.Column("fecha_registro", sa.String(10), nullable=False),
        sa.Column("fecha_entrega", sa.String(10), nullable=False),
        sa.Column("proveedor_id", sa.Uuid(), sa.ForeignKey("proveedores.proveedor_id", ondelete="SET NULL"), nullable=True),
        sa.Column("curso_id", sa.Uuid(), sa.ForeignKey("cursos.curso_id", ondelete="SET NULL"), nullable=True),
        sa.Column("periodo_id", sa.Uuid(), sa.ForeignKey("periodos.periodo_id", ondelete="SET NULL"), nullable=True),
        *_audit_columns(),
        sa.Column("create_user_id", sa.Uuid(), nullable=True),
    )
    op.create_index("ix_trabajos_trabajo_id", "trabajos", ["trabajo_id"])
    op.create_index("ix_trabajos_tipo_pa", "trabajos", ["tipo_pa"])
    op.create_index("ix_trabajos_estado", "trabajos", ["estado"])
    op.create_index("ix_trabajos_fecha_registro", "trabajos", ["fecha_registro"])
    op.create_index("ix_trabajos_proveedor_id", "trabajos", ["proveedor_id"])
    op.create_index("ix_trabajos_curso_id", "trabajos", ["curso_id"])
    op.create_index("ix_trabajos_periodo_id", "trabajos", ["periodo_id"])


def downgrade() -> None:
    op.drop_table("trabajos")
    op.drop_table("periodos")
    op.drop_table("proveedores")
    op.drop_table("cursos")
    op.drop_table("users")
