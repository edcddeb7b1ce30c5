"""
Menu API — Envelope and Shared Response Schemas
===============================================

What:  The uniform response wrapper `{ok, message, data?}` and the health
       check payload.
Who:   The response writer builds envelopes at runtime; these models feed the
       OpenAPI documentation of every route.

Example success:
    {"ok": true, "message": "Producto creado", "data": {"id": 1, ...}}

Example failure:
    {"ok": false, "message": "Datos inválidos",
     "errors": [{"field": "precio", "reason": "Field required"}]}
"""

from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class FieldError(BaseModel):
    field: str = Field(description="Field that failed validation (dotted path)")
    reason: str = Field(description="Human-readable reason")


class Envelope(BaseModel, Generic[T]):
    """Successful response. `data` is absent on delete."""

    ok: bool = Field(default=True)
    message: str = Field(description="Human-readable outcome")
    data: Optional[T] = Field(default=None, description="Row or array of rows")


class MessageEnvelope(BaseModel):
    """Successful response without data (delete confirmations)."""

    ok: bool = Field(default=True)
    message: str = Field(description="Human-readable outcome")


class ErrorEnvelope(BaseModel):
    """Failed response. `errors` is present only for validation failures."""

    ok: bool = Field(default=False)
    message: str = Field(description="Human-readable error description")
    errors: Optional[List[FieldError]] = Field(default=None)


class HealthResponse(BaseModel):
    """
    What:  Health check response.
    Who:   Returned by GET /health to load balancers and uptime probes.
    """

    status: str = Field(description="ok or error")
    db: bool = Field(description="True when SELECT 1 round-trips")
    version: str = Field(description="Application version")
    uptime_seconds: float = Field(description="Seconds since the process started")
