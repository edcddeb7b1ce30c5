"""Create menu tables

Revision ID: 001
Revises: None
Create Date: 2024-05-01 00:00:00.000000+00:00

What:  Creates categorias, productos, ingredientes and producto_ingrediente.
How:   Integer identity keys, timezone-aware timestamps defaulting to
       CURRENT_TIMESTAMP, and foreign keys without ON DELETE actions: a
       referenced row cannot be deleted.

Rollback: downgrade() drops the four tables in reverse dependency order.
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "categorias",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nombre", sa.String(100), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_categorias"),
    )

    op.create_table(
        "ingredientes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nombre", sa.String(100), nullable=False),
        sa.Column("perecedero", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_ingredientes"),
    )

    op.create_table(
        "productos",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("categoria_id", sa.Integer(), nullable=False),
        sa.Column("nombre", sa.String(150), nullable=False),
        sa.Column("descripcion", sa.Text(), nullable=True),
        sa.Column("precio", sa.Numeric(10, 2), nullable=False),
        sa.Column("disponible", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_productos"),
        sa.ForeignKeyConstraint(
            ["categoria_id"], ["categorias.id"], name="fk_productos_categoria_id"
        ),
    )
    op.create_index("ix_productos_categoria_id", "productos", ["categoria_id"])

    op.create_table(
        "producto_ingrediente",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("producto_id", sa.Integer(), nullable=False),
        sa.Column("ingrediente_id", sa.Integer(), nullable=False),
        sa.Column("cantidad_usada", sa.Float(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_producto_ingrediente"),
        sa.ForeignKeyConstraint(
            ["producto_id"], ["productos.id"], name="fk_producto_ingrediente_producto_id"
        ),
        sa.ForeignKeyConstraint(
            ["ingrediente_id"], ["ingredientes.id"], name="fk_producto_ingrediente_ingrediente_id"
        ),
    )
    op.create_index("ix_producto_ingrediente_producto_id", "producto_ingrediente", ["producto_id"])
    op.create_index("ix_producto_ingrediente_ingrediente_id", "producto_ingrediente", ["ingrediente_id"])


def downgrade() -> None:
    op.drop_index("ix_producto_ingrediente_ingrediente_id", table_name="producto_ingrediente")
    op.drop_index("ix_producto_ingrediente_producto_id", table_name="producto_ingrediente")
    op.drop_table("producto_ingrediente")
    op.drop_index("ix_productos_categoria_id", table_name="productos")
    op.drop_table("productos")
    op.drop_table("ingredientes")
    op.drop_table("categorias")
