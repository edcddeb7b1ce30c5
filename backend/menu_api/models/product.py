"""
Menu API — Product Model
========================

Table `productos`: a dish or drink on the menu.

Relationships:
    - many-to-one to `categorias` through `categoria_id`
    - many-to-many to `ingredientes` through `producto_ingrediente`

The foreign key is enforced by the database; an unknown `categoria_id`
fails the INSERT/UPDATE and is reported as a storage error.
"""

from sqlalchemy import Boolean, ForeignKey, Numeric, String, Text, true
from sqlalchemy.orm import Mapped, mapped_column

from menu_api.database import Base
from menu_api.models.base import TimestampMixin


class Product(TimestampMixin, Base):
    __tablename__ = "productos"

    categoria_id: Mapped[int] = mapped_column(
        ForeignKey("categorias.id"),
        nullable=False,
        index=True,
    )
    nombre: Mapped[str] = mapped_column(String(150), nullable=False)
    descripcion: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Money with two decimals; read back as float
    precio: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)

    disponible: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, nombre='{self.nombre}', precio={self.precio})>"
