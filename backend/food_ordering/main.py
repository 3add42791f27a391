"""
Food Ordering Backend — FastAPI Application Factory
=====================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers and
       returns the app; lifespan() owns the database handle.
Who:   uvicorn (uvicorn food_ordering.main:app) or the `food-ordering-api`
       console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────┐ ┌─────────────────────┐  │
    │  │  Req ID  │→│ Logging  │→│ Auth Rate Limit     │  │
    │  └──────────┘ └──────────┘ └─────────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌────────────┐   │
    │  │ /api/menus…  │ │ /api/login…  │ │ /health    │   │
    │  └──────────────┘ └──────────────┘ └────────────┘   │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Validation→400 │ Auth→401 │ NotFound→404 │    │  │
    │  │ Conflict→409   │ Internal→500              │  │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging → config check → Database handle → (optional) tables
    Shutdown: dispose the Database handle
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from food_ordering import __version__
from food_ordering.config import settings
from food_ordering.database import Database
from food_ordering.exceptions import (
    AuthError,
    ConflictError,
    FoodOrderingError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from food_ordering.middleware.logging import RequestLoggingMiddleware
from food_ordering.middleware.rate_limit import AuthRateLimitMiddleware
from food_ordering.middleware.request_id import RequestIDMiddleware, request_id_var
from food_ordering.routes import auth, health, menus

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once at startup.

    Format: 2024-01-15T12:00:00 [INFO] food_ordering.access: GET /api/all-menus 200 ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Configure logging
        2. Warn about insecure configuration (server still starts)
        3. Build the Database handle and attach it to app.state
        4. Create tables when DB_AUTO_CREATE is set

    Shutdown:
        Dispose the Database handle (closes pooled connections).
    """
    setup_logging()
    logger.info("=" * 60)
    logger.info("Food Ordering Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.warning("Configuration warning: %s", str(e))

    database = Database.from_settings(settings)
    if settings.db_auto_create:
        await database.create_all()
    app.state.database = database

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Food Ordering Backend shutting down...")
    await database.dispose()
    app.state.database = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(
    status_code: int,
    error: str,
    message: str,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "requestId": request_id_var.get(""),
        },
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler table:
        ValidationError         → 400
        RequestValidationError  → 400 (malformed JSON / wrong field types)
        AuthError               → 401
        NotFoundError           → 404
        ConflictError           → 409
        InternalError           → 500 (context logged, not returned)
        FoodOrderingError       → 500
        Exception               → 500 (stack trace logged, not returned)

    No response ever includes a stack trace, driver message or request
    body value.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_response(400, "validation_error", exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        # Only locations and messages; `input` may hold a password
        problems = []
        for err in exc.errors():
            loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
            problems.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
        message = "Invalid request body. " + "; ".join(problems) if problems else "Invalid request body."
        logger.warning("[%s] Request validation error: %s", request_id_var.get(""), message)
        return error_response(400, "validation_error", message)

    @app.exception_handler(AuthError)
    async def handle_auth_error(request: Request, exc: AuthError):
        logger.warning("[%s] Authentication failed (%s)", request_id_var.get(""), exc.reason)
        return error_response(
            401,
            "unauthorized",
            exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, "not_found", exc.message)

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        logger.info("[%s] Conflict: %s", request_id_var.get(""), exc.message)
        return error_response(409, "conflict", exc.message)

    @app.exception_handler(InternalError)
    async def handle_internal_error(request: Request, exc: InternalError):
        logger.error(
            "[%s] Internal error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context
        )
        return error_response(500, "server_error", exc.message)

    @app.exception_handler(FoodOrderingError)
    async def handle_app_error(request: Request, exc: FoodOrderingError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return error_response(500, "server_error", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return error_response(
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again later.",
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    The database handle is not created here; lifespan() attaches it to
    app.state.database (tests attach their own).
    """
    app = FastAPI(
        title="Food Ordering API",
        description="Menu catalog CRUD and user registration/login for the food ordering app.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → AuthRateLimit → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(AuthRateLimitMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(menus.router)
    app.include_router(auth.router)
    app.include_router(health.router)

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on BACKEND_HOST:BACKEND_PORT."""
    import uvicorn

    uvicorn.run(
        "food_ordering.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


app = create_app()
