"""
Menu API — Routes Package
=========================

Route Inventory:
    - crud.py:    /api/categorias, /api/productos, /api/ingredientes,
                  /api/producto-ingrediente   (one router per resource)
    - health.py:  GET /health
"""
