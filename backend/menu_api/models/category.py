"""
Menu API — Category Model
=========================

Table `categorias`: menu sections such as "Hamburguesas" or "Bebidas".
Referenced by `productos.categoria_id`.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from menu_api.database import Base
from menu_api.models.base import TimestampMixin


class Category(TimestampMixin, Base):
    __tablename__ = "categorias"

    # No uniqueness constraint: two categories may share a name
    nombre: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, nombre='{self.nombre}')>"
