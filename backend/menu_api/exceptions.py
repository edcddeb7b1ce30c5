"""
Menu API — Custom Exception Hierarchy
=====================================

What:  Application-specific exceptions for each failure of the CRUD protocol.
How:   Each exception carries a client-safe message and an optional context
       dict (logged, never returned). Global handlers registered in main.py
       turn them into the `{ok: false, message}` envelope with the right
       HTTP status code.
Who:   Raised by the validator and the CRUD service; caught by the handlers.

Exception Hierarchy:
    MenuAPIError (base)
    ├── ValidationError     → 400 Bad Request (carries a field error list)
    ├── EmptyUpdateError    → 400 Bad Request (update with no fields)
    ├── NotFoundError       → 404 Not Found
    ├── ConflictError       → 409 Conflict (delete of a referenced row)
    └── DatabaseError       → 500 Internal Server Error (storage failure)

Propagation:
    ValidationError and EmptyUpdateError are raised before any storage call.
    NotFoundError is raised after inspecting a row count of 0.
    DatabaseError wraps anything the query executor raises and is never retried.
"""

from typing import Any, Dict, List, Optional


class MenuAPIError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Ocurrió un error inesperado",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(MenuAPIError):
    """
    Raised when client input fails validation.

    When:    Non-integer id, missing required field, wrong type, value out of range.
    HTTP:    400 Bad Request

    Example response:
        {
            "ok": false,
            "message": "Datos inválidos",
            "errors": [{"field": "cantidad_usada", "reason": "Input should be greater than 0"}]
        }
    """

    status_code = 400

    def __init__(
        self,
        errors: Optional[List[Dict[str, str]]] = None,
        message: str = "Datos inválidos",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.errors = errors or []
        ctx = context or {}
        ctx["fields"] = [e.get("field") for e in self.errors]
        super().__init__(message=message, context=ctx)


class EmptyUpdateError(MenuAPIError):
    """
    Raised when an update request validates but supplies no updatable field.

    When:    PUT with `{}` or with only unrecognized keys.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Nada para actualizar",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(MenuAPIError):
    """
    Raised when an id does not resolve to a row.

    When:    Get, update or delete of an id with zero matching rows.
    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        message: str = "Recurso no encontrado",
        resource: str = "resource",
        resource_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(MenuAPIError):
    """
    Raised when deleting a row that other rows still reference.

    When:    DELETE of a category with products, or of a product/ingredient
             used in producto_ingrediente.
    HTTP:    409 Conflict
    """

    status_code = 409

    def __init__(
        self,
        message: str = "El recurso está siendo utilizado por otros registros",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(MenuAPIError):
    """
    Raised when a database operation fails unexpectedly.

    When:    Connection lost, foreign key violation on write, constraint error.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is the generic per-resource
        message ("Error insertando producto"). Driver errors and SQL stay
        in the server log.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Error en la base de datos",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
