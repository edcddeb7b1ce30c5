"""
Menu API — Ingredient Model
===========================

Table `ingredientes`. `perecedero` flags ingredients that spoil and
defaults to true.
"""

from sqlalchemy import Boolean, String, true
from sqlalchemy.orm import Mapped, mapped_column

from menu_api.database import Base
from menu_api.models.base import TimestampMixin


class Ingredient(TimestampMixin, Base):
    __tablename__ = "ingredientes"

    nombre: Mapped[str] = mapped_column(String(100), nullable=False)
    perecedero: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )

    def __repr__(self) -> str:
        return f"<Ingredient(id={self.id}, nombre='{self.nombre}')>"
