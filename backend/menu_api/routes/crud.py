"""
Menu API — CRUD Route Factory
=============================

What:  Builds the five endpoints of one resource from its ResourceDefinition.
How:   Handlers are thin: take the raw path id and the raw JSON body, call
       the resource's CrudService, and wrap the result in the envelope.
       Validation happens in the service, so a bad id or body produces the
       same `{ok: false, message, errors}` shape as any other failure.

Endpoints (per resource, e.g. /api/productos):
    GET     /api/<name>          list, newest first        200
    GET     /api/<name>/{id}     one row                   200 | 400 | 404
    POST    /api/<name>          create                    201 | 400 | 500
    PUT     /api/<name>/{id}     partial update            200 | 400 | 404
    DELETE  /api/<name>/{id}     hard delete               200 | 400 | 404 | 409
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from menu_api.database import get_db_session
from menu_api.resources import RESOURCES, ResourceDefinition
from menu_api.responses import success
from menu_api.schemas.common import Envelope, ErrorEnvelope, MessageEnvelope
from menu_api.services.crud_service import CrudService


def _request_body_doc(rules) -> Dict[str, Any]:
    """OpenAPI requestBody for a handler that reads the body as raw JSON."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": rules.model_json_schema()}},
        }
    }


def _error_responses(*codes: int) -> Dict[int, Dict[str, Any]]:
    descriptions = {
        400: "Datos inválidos o id no numérico",
        404: "No encontrado",
        409: "Referenciado por otros registros",
        500: "Error en la base de datos",
    }
    return {code: {"description": descriptions[code], "model": ErrorEnvelope} for code in codes}


def build_crud_router(resource: ResourceDefinition) -> APIRouter:
    service = CrudService(resource)
    messages = resource.messages
    one = Envelope[resource.read_schema]
    many = Envelope[List[resource.read_schema]]

    router = APIRouter(prefix=f"/api{resource.path}", tags=[resource.tag])

    @router.get(
        "",
        responses={200: {"model": many}, **_error_responses(500)},
        summary=f"Listar {resource.name}",
        description="Todas las filas, de la más reciente a la más antigua.",
    )
    async def list_items(db: AsyncSession = Depends(get_db_session)) -> JSONResponse:
        rows = await service.list(db)
        return success(messages.listed, rows)

    @router.get(
        "/{item_id}",
        responses={200: {"model": one}, **_error_responses(400, 404, 500)},
        summary=f"Obtener {resource.name} por id",
    )
    async def get_item(item_id: str, db: AsyncSession = Depends(get_db_session)) -> JSONResponse:
        row = await service.get(db, item_id)
        return success(messages.fetched, row)

    @router.post(
        "",
        status_code=201,
        responses={201: {"model": one}, **_error_responses(400, 500)},
        openapi_extra=_request_body_doc(resource.create_rules),
        summary=f"Crear {resource.name}",
    )
    async def create_item(
        payload: Optional[Any] = Body(None),
        db: AsyncSession = Depends(get_db_session),
    ) -> JSONResponse:
        row = await service.create(db, payload)
        return success(messages.created, row, status_code=201)

    @router.put(
        "/{item_id}",
        responses={200: {"model": one}, **_error_responses(400, 404, 500)},
        openapi_extra=_request_body_doc(resource.update_rules),
        summary=f"Actualizar {resource.name}",
        description="Actualización parcial: solo se escriben los campos enviados.",
    )
    async def update_item(
        item_id: str,
        payload: Optional[Any] = Body(None),
        db: AsyncSession = Depends(get_db_session),
    ) -> JSONResponse:
        row = await service.update(db, item_id, payload)
        return success(messages.updated, row)

    @router.delete(
        "/{item_id}",
        responses={200: {"model": MessageEnvelope}, **_error_responses(400, 404, 409, 500)},
        summary=f"Eliminar {resource.name}",
    )
    async def delete_item(item_id: str, db: AsyncSession = Depends(get_db_session)) -> JSONResponse:
        await service.delete(db, item_id)
        return success(messages.deleted)

    return router


def build_routers() -> List[APIRouter]:
    return [build_crud_router(resource) for resource in RESOURCES]
