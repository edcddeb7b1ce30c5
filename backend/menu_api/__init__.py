"""
Menu API — Application Package Initializer
==========================================

What: CRUD REST API over the restaurant menu tables (categorias, productos,
      ingredientes and producto_ingrediente).
Who:  Imported by uvicorn (`menu_api.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │     Routes (one generic router)     │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Validator + CRUD service engine   │  ← validate → query → respond
    ├─────────────────────────────────────┤
    │   Resource definitions + schemas    │  ← declarative, one per table
    ├─────────────────────────────────────┤
    │   Database (async SQLAlchemy)       │  ← injected per request
    └─────────────────────────────────────┘

    Each of the four resources is a declarative descriptor; the control
    flow lives once in `services/crud_service.py`.
"""

__version__ = "1.0.0"
