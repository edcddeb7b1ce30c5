"""
Menu API — ORM Models
=====================

Importing this package registers every table on `Base.metadata`
(used by `Database.create_all()` and by Alembic autogenerate).
"""

from menu_api.models.category import Category
from menu_api.models.ingredient import Ingredient
from menu_api.models.product import Product
from menu_api.models.product_ingredient import ProductIngredient

__all__ = ["Category", "Ingredient", "Product", "ProductIngredient"]
