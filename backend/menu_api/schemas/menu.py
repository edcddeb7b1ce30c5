"""
Menu API — Resource Schemas (Validation Rules and Read Models)
==============================================================

What:  For each resource, three Pydantic models:
       - <Name>Create: create rules. Required fields have no default.
       - <Name>Update: update rules. Every field optional; only the fields
         present in the body are validated and written.
       - <Name>Out:    read model. Normalizes storage values (0/1 → bool,
         Numeric → float) at the response boundary.
How:   Unknown keys are ignored. In update bodies an explicit null is
       rejected for every field that is not nullable in the table.

Rule mapping:
    required        → field without default (create models)
    integer         → int
    non-empty str   → str with min_length=1
    float(min)      → float with ge / gt
    boolean         → bool (accepts true/false, 0/1, "true"/"false")
"""

from datetime import datetime
from typing import Any, ClassVar, FrozenSet, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Shared bases
# ══════════════════════════════════════════════════════════════════════════


# Largest value an INTEGER column holds (ids and foreign keys)
INT_ID_MAX = 2_147_483_647


def _is_numeric(annotation: Any) -> bool:
    """int / float, or Optional of either. `bool` itself is not numeric."""
    candidates = get_args(annotation) or (annotation,)
    return any(c is int or c is float for c in candidates)


class Rules(BaseModel):
    """
    Shared base of create and update rules.

    Pydantic's lax mode coerces JSON `true` to 1 / 1.0; numeric fields here
    accept numbers and numeric strings only.
    """

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    @field_validator("*", mode="before")
    @classmethod
    def reject_bool_for_numbers(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, bool) and _is_numeric(cls.model_fields[info.field_name].annotation):
            raise ValueError("debe ser numérico")
        return value


class CreateRules(Rules):
    pass


class UpdateRules(Rules):
    """
    Base for partial-update rules.

    Field validators only run for keys present in the body, so absent
    fields are never checked while a present null is.
    """

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name not in cls.nullable_fields:
            raise ValueError("no puede ser nulo")
        return value


class ReadModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# ══════════════════════════════════════════════════════════════════════════
# Categorías
# ══════════════════════════════════════════════════════════════════════════


class CategoryCreate(CreateRules):
    nombre: str = Field(min_length=1, max_length=100, examples=["Hamburguesas"])


class CategoryUpdate(UpdateRules):
    nombre: Optional[str] = Field(default=None, min_length=1, max_length=100)


class CategoryOut(ReadModel):
    id: int
    nombre: str
    created_at: datetime
    updated_at: datetime


# ══════════════════════════════════════════════════════════════════════════
# Productos
# ══════════════════════════════════════════════════════════════════════════


class ProductCreate(CreateRules):
    categoria_id: int = Field(ge=1, le=INT_ID_MAX, examples=[1])
    nombre: str = Field(min_length=1, max_length=150, examples=["Cheeseburger Especial"])
    descripcion: Optional[str] = Field(
        default=None, examples=["Carne y queso con salsa especial"]
    )
    precio: float = Field(ge=0, examples=[45.5])
    disponible: bool = Field(default=True)


class ProductUpdate(UpdateRules):
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"descripcion"})

    categoria_id: Optional[int] = Field(default=None, ge=1, le=INT_ID_MAX)
    nombre: Optional[str] = Field(default=None, min_length=1, max_length=150)
    descripcion: Optional[str] = None
    precio: Optional[float] = Field(default=None, ge=0)
    disponible: Optional[bool] = None


class ProductOut(ReadModel):
    id: int
    categoria_id: int
    categoria: Optional[str] = Field(default=None, description="Nombre de la categoría")
    nombre: str
    descripcion: Optional[str] = None
    precio: float
    disponible: bool
    created_at: datetime
    updated_at: datetime


# ══════════════════════════════════════════════════════════════════════════
# Ingredientes
# ══════════════════════════════════════════════════════════════════════════


class IngredientCreate(CreateRules):
    nombre: str = Field(min_length=1, max_length=100, examples=["Queso amarillo"])
    perecedero: bool = Field(default=True)


class IngredientUpdate(UpdateRules):
    nombre: Optional[str] = Field(default=None, min_length=1, max_length=100)
    perecedero: Optional[bool] = None


class IngredientOut(ReadModel):
    id: int
    nombre: str
    perecedero: bool
    created_at: datetime
    updated_at: datetime


# ══════════════════════════════════════════════════════════════════════════
# Producto ↔ Ingrediente
# ══════════════════════════════════════════════════════════════════════════


class ProductIngredientCreate(CreateRules):
    producto_id: int = Field(ge=1, le=INT_ID_MAX, examples=[10])
    ingrediente_id: int = Field(ge=1, le=INT_ID_MAX, examples=[5])
    cantidad_usada: float = Field(gt=0, examples=[0.25])


class ProductIngredientUpdate(UpdateRules):
    producto_id: Optional[int] = Field(default=None, ge=1, le=INT_ID_MAX)
    ingrediente_id: Optional[int] = Field(default=None, ge=1, le=INT_ID_MAX)
    cantidad_usada: Optional[float] = Field(default=None, gt=0)


class ProductIngredientOut(ReadModel):
    id: int
    producto_id: int
    producto: Optional[str] = Field(default=None, description="Nombre del producto")
    ingrediente_id: int
    ingrediente: Optional[str] = Field(default=None, description="Nombre del ingrediente")
    cantidad_usada: float
    created_at: datetime
    updated_at: datetime
