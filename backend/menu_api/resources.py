"""
Menu API — Resource Definitions
===============================

What:  One static descriptor per resource. The CRUD service and the router
       factory read everything they need from here: table, persisted
       columns, display joins, validation rules, coercions, reverse
       references and the messages of each outcome.
How:   Plain frozen dataclasses; adding a resource means adding one
       `ResourceDefinition` to `RESOURCES`.

Display joins:
    Read-only labels attached to each row, e.g. a product row carries
    `categoria` = categorias.nombre. They are never written.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Tuple, Type

from pydantic import BaseModel

from menu_api.database import Base
from menu_api.models import Category, Ingredient, Product, ProductIngredient
from menu_api.schemas.menu import (
    CategoryCreate,
    CategoryOut,
    CategoryUpdate,
    IngredientCreate,
    IngredientOut,
    IngredientUpdate,
    ProductCreate,
    ProductIngredientCreate,
    ProductIngredientOut,
    ProductIngredientUpdate,
    ProductOut,
    ProductUpdate,
)

LIST_OK = "Consulta realizada correctamente"


# ── Coercions ─────────────────────────────────────────────────────────────
# Applied to validated values right before they are written.

def as_flag(value: Any) -> bool:
    """Boolean → storage flag (the Boolean column type stores it as 0/1 where needed)."""
    return bool(value)


def as_money(value: Any) -> float:
    return round(float(value), 2)


# ── Descriptor types ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class DisplayJoin:
    """`<alias>` = <target>.<label_column> joined on <fk_field> = <target>.id"""

    fk_field: str
    target: Type[Base]
    label_column: str
    alias: str


@dataclass(frozen=True)
class Reference:
    """A foreign key in another table pointing at this resource."""

    model: Type[Base]
    fk_field: str
    label: str  # plural noun used in the conflict message


@dataclass(frozen=True)
class ResourceMessages:
    listed: str
    fetched: str
    created: str
    updated: str
    deleted: str
    not_found: str
    in_use: str
    list_failed: str
    get_failed: str
    create_failed: str
    update_failed: str
    delete_failed: str


def build_messages(singular: str, plural: str, feminine: bool) -> ResourceMessages:
    """Spanish outcome messages, e.g. "Categoría creada" / "Producto creado"."""
    end = "a" if feminine else "o"
    pronoun = "la" if feminine else "lo"
    title = singular[0].upper() + singular[1:]
    return ResourceMessages(
        listed=LIST_OK,
        fetched=LIST_OK,
        created=f"{title} cread{end}",
        updated=f"{title} actualizad{end}",
        deleted=f"{title} eliminad{end}",
        not_found=f"{title} no encontrad{end}",
        in_use=f"No se puede eliminar: existen {{label}} que {pronoun} referencian",
        list_failed=f"Error listando {plural}",
        get_failed=f"Error obteniendo {singular}",
        create_failed=f"Error insertando {singular}",
        update_failed=f"Error actualizando {singular}",
        delete_failed=f"Error eliminando {singular}",
    )


@dataclass(frozen=True)
class ResourceDefinition:
    """
    Static descriptor of one CRUD resource.

    Attributes:
        name:          URL segment under /api (e.g. "producto-ingrediente")
        tag:           OpenAPI tag
        model:         Mapped class; its table is `model.__tablename__`
        columns:       Persisted columns in projection order (no join labels)
        create_rules:  Pydantic model; required fields have no default
        update_rules:  Pydantic model; every field optional
        read_schema:   Pydantic model used at the response boundary
        display_joins: Read-only labels from related tables
        coercions:     field → transform applied before persistence
        referenced_by: Foreign keys elsewhere that block a delete
        messages:      Outcome messages
    """

    name: str
    tag: str
    model: Type[Base]
    columns: Tuple[str, ...]
    create_rules: Type[BaseModel]
    update_rules: Type[BaseModel]
    read_schema: Type[BaseModel]
    messages: ResourceMessages
    display_joins: Tuple[DisplayJoin, ...] = ()
    coercions: Mapping[str, Callable[[Any], Any]] = field(default_factory=dict)
    referenced_by: Tuple[Reference, ...] = ()

    @property
    def table(self) -> str:
        return self.model.__tablename__

    @property
    def path(self) -> str:
        return f"/{self.name}"

    @property
    def writable_fields(self) -> Tuple[str, ...]:
        """Allow-list for INSERT/UPDATE: rule fields that are persisted columns."""
        rule_fields = set(self.create_rules.model_fields) | set(self.update_rules.model_fields)
        return tuple(c for c in self.columns if c in rule_fields)


# ══════════════════════════════════════════════════════════════════════════
# The four resources
# ══════════════════════════════════════════════════════════════════════════

CATEGORIES = ResourceDefinition(
    name="categorias",
    tag="Categorías",
    model=Category,
    columns=("id", "nombre", "created_at", "updated_at"),
    create_rules=CategoryCreate,
    update_rules=CategoryUpdate,
    read_schema=CategoryOut,
    messages=build_messages("categoría", "categorías", feminine=True),
    referenced_by=(Reference(Product, "categoria_id", "productos"),),
)

PRODUCTS = ResourceDefinition(
    name="productos",
    tag="Productos",
    model=Product,
    columns=(
        "id", "categoria_id", "nombre", "descripcion", "precio", "disponible",
        "created_at", "updated_at",
    ),
    create_rules=ProductCreate,
    update_rules=ProductUpdate,
    read_schema=ProductOut,
    messages=build_messages("producto", "productos", feminine=False),
    display_joins=(DisplayJoin("categoria_id", Category, "nombre", "categoria"),),
    coercions={"disponible": as_flag, "precio": as_money},
    referenced_by=(Reference(ProductIngredient, "producto_id", "relaciones producto-ingrediente"),),
)

INGREDIENTS = ResourceDefinition(
    name="ingredientes",
    tag="Ingredientes",
    model=Ingredient,
    columns=("id", "nombre", "perecedero", "created_at", "updated_at"),
    create_rules=IngredientCreate,
    update_rules=IngredientUpdate,
    read_schema=IngredientOut,
    messages=build_messages("ingrediente", "ingredientes", feminine=False),
    coercions={"perecedero": as_flag},
    referenced_by=(Reference(ProductIngredient, "ingrediente_id", "relaciones producto-ingrediente"),),
)

PRODUCT_INGREDIENTS = ResourceDefinition(
    name="producto-ingrediente",
    tag="ProductoIngrediente",
    model=ProductIngredient,
    columns=(
        "id", "producto_id", "ingrediente_id", "cantidad_usada", "created_at", "updated_at",
    ),
    create_rules=ProductIngredientCreate,
    update_rules=ProductIngredientUpdate,
    read_schema=ProductIngredientOut,
    messages=build_messages("relación", "relaciones", feminine=True),
    display_joins=(
        DisplayJoin("producto_id", Product, "nombre", "producto"),
        DisplayJoin("ingrediente_id", Ingredient, "nombre", "ingrediente"),
    ),
)

RESOURCES: Tuple[ResourceDefinition, ...] = (
    CATEGORIES,
    PRODUCTS,
    INGREDIENTS,
    PRODUCT_INGREDIENTS,
)
