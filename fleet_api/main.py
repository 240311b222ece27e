"""
Fleet API — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes configuration, middleware registration, route mounting,
       error formatting and lifecycle management in one place.
How:   Factory pattern: create_app(settings) returns a configured FastAPI
       instance that owns its own Database (no module-level connection).
Who:   Called by uvicorn (uvicorn fleet_api.main:app), `python -m fleet_api`,
       and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │  app.state.settings · app.state.database            │
    │                                                     │
    │  Middleware:  Request ID → Logging → GZip → CORS    │
    │                                                     │
    │  Routes:                                            │
    │  /api/cars   /api/drivers   /api/vehicles           │
    │  /health     /              /docs /redoc            │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation/BadRequest→400 │ NotFound→404 │ DB→500  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create missing tables (db_create_tables)
    Shutdown: dispose the engine (close pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fleet_api import __version__
from fleet_api.config import Settings, settings as default_settings
from fleet_api.database import Database
from fleet_api.exceptions import FleetError, PersistenceError, ValidationError
from fleet_api.middleware.logging import RequestLoggingMiddleware
from fleet_api.middleware.request_id import RequestIDMiddleware, request_id_var
from fleet_api.routes import cars, drivers, health, vehicles
from fleet_api.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s on stdout,
    which containers capture. Called once, before any other startup work.
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # These log every operation at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings
    database: Database = app.state.database

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings.log_level)
    logger.info("Fleet API starting up...")

    if settings.db_create_tables:
        try:
            await database.create_all()
        except Exception as e:
            # Keep serving: /health reports the database as disconnected and
            # every store call answers with a JSON 500 until it comes back
            logger.error("Could not create tables: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Fleet API shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _current_request_id(request: Request) -> str:
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def _error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        code=status_code,
        error=error,
        message=message,
        details=details or None,
        request_id=_current_request_id(request),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        RequestValidationError  → 400 (FastAPI's 422 normalized to 400)
        StarletteHTTPException  → its own status (unknown route, wrong method)
        PersistenceError        → 500, generic message
        FleetError (subclasses) → the subclass's status_code and error slug
        Exception (fallback)    → 500

    Security: responses never contain stack traces, SQL or driver messages.
    Details are logged server-side.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        error = ValidationError.from_errors(exc.errors())
        logger.warning("[%s] Validation error: %s", _current_request_id(request), error.message)
        return _error_response(request, 400, error.error, error.message, error.context)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        slugs = {404: "not_found", 405: "method_not_allowed"}
        return _error_response(
            request,
            exc.status_code,
            slugs.get(exc.status_code, "http_error"),
            str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        rid = _current_request_id(request)
        logger.error("[%s] Persistence error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(request, exc.status_code, exc.error, exc.message)

    @app.exception_handler(FleetError)
    async def handle_fleet_error(request: Request, exc: FleetError):
        rid = _current_request_id(request)
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
            return _error_response(request, exc.status_code, exc.error, exc.message)
        logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return _error_response(request, exc.status_code, exc.error, exc.message, exc.context)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = _current_request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error_response(
            request,
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again or contact support.",
        )


# ══════════════════════════════════════════════════════════════════════════
# OpenAPI
# ══════════════════════════════════════════════════════════════════════════

def install_openapi(app: FastAPI, settings: Settings) -> None:
    """
    Publish the API-key header as a global security scheme.

    The scheme is documentation only: no handler reads or checks the header.
    """

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )
        components = schema.setdefault("components", {})
        components.setdefault("securitySchemes", {})["app_id"] = {
            "type": "apiKey",
            "in": "header",
            "name": settings.api_key_header,
            "description": "API key to authorize requests (documented, not enforced).",
        }
        schema["security"] = [{"app_id": []}]
        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Explicit configuration (tests pass a temporary SQLite URL).
                  Defaults to the environment-derived settings.

    Returns: Fully configured FastAPI instance. Its Database is created here
             but opens no connection until the first query.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Fleet API",
        description=(
            "REST CRUD service for a vehicle/driver fleet: cars, drivers and vehicles. "
            "Every failure returns a JSON body with code, error and message."
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
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(cars.router)
    app.include_router(drivers.router)
    app.include_router(vehicles.router)
    app.include_router(health.router)

    install_openapi(app, settings)

    return app


# uvicorn expects `fleet_api.main:app` to be importable
app = create_app()
