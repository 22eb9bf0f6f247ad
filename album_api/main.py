"""
Album API - FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
       The AlbumStore is either injected (tests) or built by the lifespan
       from Settings (production).
Who:   uvicorn (`uvicorn album_api.main:app`) or the `album-api` console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │ Req ID   │→│  Logging        │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────────┐ ┌──────────────────┐ ┌────────┐ │
    │  │ GET/POST       │ │ GET/DELETE       │ │ GET    │ │
    │  │ /albums        │ │ /albums/{id}     │ │/health │ │
    │  └────────────────┘ └──────────────────┘ └────────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Input→400 │ NotFound→404 │ 405 │ Store→500   │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle (store not injected):
    Startup:
    1. Configure logging
    2. Validate configuration (DB_USER / DB_NAME); failure aborts startup
    3. Build engine + AlbumStore, verify the albums table exists (fatal if not)
    Shutdown:
    1. Dispose the engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from album_api import __version__
from album_api.config import Settings
from album_api.database import create_engine_from_settings, dispose_engine
from album_api.exceptions import AlbumAPIError, MethodNotAllowedError, StoreError
from album_api.middleware.logging import RequestLoggingMiddleware
from album_api.middleware.request_id import RequestIDMiddleware, request_id_var
from album_api.responses import error_response
from album_api.routes import albums, health
from album_api.services.album_store import AlbumStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Output goes to stdout so container runtimes capture it.
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # The access middleware already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Connect the database on startup and release it on shutdown.

    When a store was injected into create_app() there is nothing to build
    or dispose here. Otherwise configuration errors and a missing albums
    table propagate, which makes uvicorn abort before serving any request.
    """
    if getattr(app.state, "album_store", None) is not None:
        yield
        return

    settings: Settings = app.state.settings
    setup_logging(settings.log_level)
    logger.info("Album API %s starting up...", __version__)

    try:
        settings.validate_required()
    except AlbumAPIError as e:
        logger.critical("Configuration error: %s", e.message)
        raise

    engine = create_engine_from_settings(settings)
    store = AlbumStore.from_engine(engine)

    try:
        if not await store.table_exists():
            raise StoreError(message="Albums table doesn't exist or can't be accessed")
        if not await store.ping():
            raise StoreError(message="Failed to connect to database")
    except StoreError as e:
        logger.critical(e.message)
        await dispose_engine(engine)
        raise

    logger.info("Database connected successfully")
    app.state.album_store = store
    logger.info("Server running on %s:%d", settings.backend_host, settings.backend_port)

    try:
        yield
    finally:
        logger.info("Album API shutting down...")
        app.state.album_store = None
        await dispose_engine(engine)
        logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and `{"error": ...}` bodies.

    Handler hierarchy:
        AlbumAPIError           → exc.status_code (400 / 404 / 405 / 500)
        RequestValidationError  → 400 "Invalid request body"
        HTTPException           → its status (unknown path 404, framework 405)
        Exception (fallback)    → 500, stack trace logged
    """

    @app.exception_handler(AlbumAPIError)
    async def handle_album_api_error(request: Request, exc: AlbumAPIError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        headers = None
        if isinstance(exc, MethodNotAllowedError):
            headers = {"Allow": ", ".join(exc.allowed)}
        return error_response(exc.status_code, exc.message, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """A request failed FastAPI's own parameter or body validation."""
        rid = request_id_var.get("")
        logger.warning("[%s] Invalid request body on %s: %s", rid, request.url.path, exc.errors())
        return error_response(400, "Invalid request body")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        message = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
        return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error_response(500, "An unexpected error occurred")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    store: Optional[AlbumStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; read from the environment when omitted.
        store:    Ready AlbumStore. When given, the lifespan leaves the
                  database alone and the caller owns the engine.
    """
    app = FastAPI(
        title="Album API",
        description="CRUD over a single album resource backed by PostgreSQL.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings or Settings()
    app.state.album_store = store

    # Last added runs first: RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(albums.router)
    app.include_router(health.router)

    return app


def main() -> None:
    """Console entry point: serve the application with uvicorn."""
    settings = Settings()
    setup_logging(settings.log_level)
    uvicorn.run(
        create_app(settings=settings),
        host=settings.backend_host,
        port=settings.backend_port,
        log_config=None,
    )


# uvicorn expects `album_api.main:app` to be importable
app = create_app()


if __name__ == "__main__":
    main()
