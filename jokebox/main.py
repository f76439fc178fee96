"""
Jokebox — FastAPI Application Factory
======================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, route mounting, exception
       handling and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn jokebox.main:app) and by `python -m jokebox`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware: Request ID → Logging → GZip → CORS     │
    │                                                     │
    │  Routes:                                            │
    │    GET /  GET /test  GET /health                    │
    │    GET /jokes  POST /jokes  POST /upload            │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError→400 {message}                    │
    │    ServiceError→500 text │ FileStorageError→500     │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup (nothing is served until all steps succeed):
    1. Configure logging
    2. Validate configuration (MONGO_URI must be set)
    3. Create the upload directory
    4. Connect to MongoDB (ping)
    5. Seed sample jokes if the collection is empty

    Any startup failure is re-raised. uvicorn then reports
    "Application startup failed" and exits with a non-zero status.

    Shutdown:
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from jokebox import __version__
from jokebox.config import settings
from jokebox.database import JokeStore
from jokebox.exceptions import (
    FileStorageError,
    ServiceError,
    StoreError,
    ValidationError,
)
from jokebox.middleware.logging import RequestLoggingMiddleware, operation_name
from jokebox.middleware.request_id import RequestIDLogFilter, RequestIDMiddleware
from jokebox.routes import health, jokes, root, upload
from jokebox.services.seeder import seed_if_empty
from jokebox.services.upload_service import UploadService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s

    The request ID comes from RequestIDLogFilter on the stdout handler; it is
    "-" for records logged outside a request.

    Called once at the start of the lifespan, before any other startup step.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # These log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Connect, seed, serve, disconnect.

    The store and upload service are read from app.state, where create_app()
    put them, so tests can run the real startup sequence against doubles.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Jokebox %s starting up...", __version__)

    try:
        settings.validate_required()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        raise

    uploads: UploadService = app.state.upload_service
    uploads.ensure_directory()

    store: JokeStore = app.state.store
    try:
        await store.connect()
        logger.info("MongoDB connected successfully")
        await seed_if_empty(store)
    except StoreError as e:
        logger.error("MongoDB startup failed: %s | Context: %s", e.message, e.context)
        await store.close()
        raise

    logger.info("Server running at http://%s:%d", settings.host, settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Jokebox shutting down...")
    await store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

    Handler hierarchy:
        ValidationError / MissingFileError → 400 {"message": ...}
        RequestValidationError             → 400 {"message": ...}
        ServiceError                       → 500 plain-text message
        FileStorageError                   → 500 {"message": ...}
        Exception (fallback)               → 500 {"message": ...}

    Responses never carry internal details; `context` is logged only.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("Validation error in %s: %s", operation_name(request), exc.message)
        return JSONResponse(status_code=400, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Malformed bodies get the same 400 shape as our own validation errors."""
        logger.warning("Malformed request to %s: %s", operation_name(request), exc.errors())
        return JSONResponse(status_code=400, content={"message": "Invalid request body"})

    @app.exception_handler(ServiceError)
    async def handle_service_error(request: Request, exc: ServiceError):
        logger.error(
            "Service error in %s (%s): %s | Context: %s",
            operation_name(request), exc.kind.value, exc.message, exc.context,
        )
        return PlainTextResponse(status_code=500, content=exc.message)

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        logger.error("File storage error in %s: %s | Context: %s", operation_name(request), exc.message, exc.context)
        return JSONResponse(status_code=500, content={"message": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error in %s: %s", operation_name(request), str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": "An unexpected error occurred. Please try again."},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    store: Optional[JokeStore] = None,
    upload_service: Optional[UploadService] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Document store to use. Defaults to a JokeStore built from
               settings; it is not connected until the lifespan runs.
        upload_service: Upload sink. Defaults to settings.upload_dir.
    """
    app = FastAPI(
        title="Jokebox API",
        description="Create and list jokes stored in MongoDB, and upload files.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.store = store if store is not None else JokeStore()
    app.state.upload_service = upload_service if upload_service is not None else UploadService()

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition.
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Credentials cannot be combined with a wildcard origin
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(root.router)
    app.include_router(health.router)
    app.include_router(jokes.router)
    app.include_router(upload.router)

    return app


# uvicorn expects `jokebox.main:app` to be importable
app = create_app()
