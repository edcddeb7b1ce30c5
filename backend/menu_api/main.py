"""
Menu API — FastAPI Application Factory
======================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (`uvicorn menu_api.main:app`) and by the tests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware Chain:                                       │
    │  ┌────────┐ ┌─────────┐ ┌──────────┐ ┌──────┐ ┌──────┐   │
    │  │ Req ID │→│ Logging │→│ Security │→│ GZip │→│ CORS │   │
    │  └────────┘ └─────────┘ └──────────┘ └──────┘ └──────┘   │
    │                                                          │
    │  Routes:                                                 │
    │  /api/categorias   /api/productos   /api/ingredientes    │
    │  /api/producto-ingrediente   /health   /docs  /docs-json │
    │                                                          │
    │  Exception Handlers:                                     │
    │  ┌────────────────────────────────────────────────────┐  │
    │  │ Validation→400 │ NotFound→404 │ Conflict→409 │ 500 │  │
    │  └────────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:   logging → optional table creation → ready
    Shutdown:  dispose the engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from menu_api import __version__
from menu_api.config import Settings, settings as default_settings
from menu_api.database import Database
from menu_api.exceptions import MenuAPIError, ValidationError
from menu_api.middleware.logging import RequestLoggingMiddleware
from menu_api.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    RequestIdFilter,
)
from menu_api.middleware.security_headers import SECURITY_HEADERS, SecurityHeadersMiddleware
from menu_api.responses import failure
from menu_api.routes import health
from menu_api.routes.crud import build_routers
from menu_api.validation import format_errors

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure the root logger once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if settings.log_level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(settings)
    logger.info("Menu API %s starting up", __version__)

    if settings.db_create_tables:
        await database.create_all()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)

    yield

    logger.info("Menu API shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map every failure to the `{ok: false, message, errors?}` envelope.

    Handler hierarchy:
        MenuAPIError            → its status_code (400/404/409/500)
        RequestValidationError  → 400 (malformed JSON body)
        HTTPException           → its status code (unknown route, bad method)
        Exception               → 500 with a generic message

    Server-side context (SQL errors, ids, tables) is logged, never returned.
    """

    @app.exception_handler(MenuAPIError)
    async def handle_menu_api_error(request: Request, exc: MenuAPIError):
        errors = exc.errors if isinstance(exc, ValidationError) else None
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s | Context: %s", request.method, request.url.path, exc.message, exc.context)
        else:
            logger.warning("%s %s rejected: %s | Context: %s", request.method, request.url.path, exc.message, exc.context)
        return failure(exc.message, exc.status_code, errors=errors)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = format_errors(exc.errors())
        logger.warning("%s %s rejected: invalid request %s", request.method, request.url.path, errors)
        return failure("Datos inválidos", 400, errors=errors)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Error en la petición"
        if exc.status_code == 404 and message == "Not Found":
            message = "Ruta no encontrada"
        return failure(message, exc.status_code, headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Runs in ServerErrorMiddleware, outside the application middleware:
        # the request id and security headers are not added for us here.
        # request.state lives in the ASGI scope, so the id set by
        # RequestIDMiddleware is still readable.
        rid = getattr(request.state, "request_id", "-")
        logger.error(
            "[%s] %s %s unexpected error: %s",
            rid,
            request.method,
            request.url.path,
            str(exc),
            exc_info=True,
        )
        return failure(
            "Error interno del servidor",
            500,
            headers={REQUEST_ID_HEADER: rid, **SECURITY_HEADERS},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Explicit configuration; defaults to the environment-backed
                  singleton. Tests pass one pointing at a temporary database.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="API Restaurante",
        description=(
            "CRUD de categorías, productos, ingredientes y la relación "
            "producto-ingrediente del menú de un restaurante."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = Database(settings)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → Security → GZip → CORS
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    for router in build_routers():
        app.include_router(router)
    app.include_router(health.router)

    @app.get("/docs-json", include_in_schema=False)
    async def docs_json() -> JSONResponse:
        return JSONResponse(app.openapi())

    return app


# uvicorn expects `menu_api.main:app`
app = create_app()
