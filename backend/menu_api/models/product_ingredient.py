"""
Menu API — Product/Ingredient Junction Model
============================================

Table `producto_ingrediente`: which ingredients a product uses and how much.

Invariants:
    - `cantidad_usada` > 0, checked by the validator before any write
      (there is no CHECK constraint in the database)
    - duplicate (producto_id, ingrediente_id) pairs are allowed
"""

from sqlalchemy import Float, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from menu_api.database import Base
from menu_api.models.base import TimestampMixin


class ProductIngredient(TimestampMixin, Base):
    __tablename__ = "producto_ingrediente"

    producto_id: Mapped[int] = mapped_column(
        ForeignKey("productos.id"),
        nullable=False,
        index=True,
    )
    ingrediente_id: Mapped[int] = mapped_column(
        ForeignKey("ingredientes.id"),
        nullable=False,
        index=True,
    )
    cantidad_usada: Mapped[float] = mapped_column(Float, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<ProductIngredient(id={self.id}, producto_id={self.producto_id}, "
            f"ingrediente_id={self.ingrediente_id}, cantidad_usada={self.cantidad_usada})>"
        )
