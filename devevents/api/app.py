"""FastAPI application configuration module."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Internal imports
from ..config.environment import IS_PRODUCTION_ENVIRONMENT # Environment must be imported first
from ..config.cors import CORS_CONFIG
from ..config.uploads import ImageUploadConfig
from ..db import Database
from ..errors import (
    EventNotFoundError,
    EventsError,
    InvalidSlugError,
    ReferentialIntegrityError,
    ValidationError,
)
from ..uploads import CloudinaryUploader, ImageUploader
from ..utils.logging_config import setup_logging
from .. import __version__
from .routes import (
    bookings,
    events,
    health
)

# Set up logging
setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events.

    The database connects lazily on the first request; shutdown releases it.
    """
    yield
    # Shutdown
    app.state.database.dispose()

def register_exception_handlers(app: FastAPI) -> None:
    """Map domain errors to JSON responses without leaking internal detail."""

    @app.exception_handler(InvalidSlugError)
    async def invalid_slug_handler(request: Request, exc: InvalidSlugError):
        return JSONResponse(status_code=400, content={"message": exc.message})

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=400,
            content={"message": exc.message, "errors": exc.errors}
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {
                "field": str(error["loc"][-1]) if error.get("loc") else "body",
                "message": error.get("msg", "Invalid value"),
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"message": "Validation failed", "errors": errors}
        )

    @app.exception_handler(EventNotFoundError)
    async def not_found_handler(request: Request, exc: EventNotFoundError):
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(ReferentialIntegrityError)
    async def missing_reference_handler(request: Request, exc: ReferentialIntegrityError):
        return JSONResponse(status_code=404, content={"message": exc.message})

    @app.exception_handler(EventsError)
    async def domain_error_handler(request: Request, exc: EventsError):
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} raised an unexpected error")
        return JSONResponse(status_code=500, content={"message": "Internal server error"})

def create_application(
    database: Optional[Database] = None,
    uploader: Optional[ImageUploader] = None,
    upload_config: Optional[ImageUploadConfig] = None
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        database: Database handle to serve from (a new one from the environment if omitted)
        uploader: Image uploader for event submissions (Cloudinary if omitted)
        upload_config: Image constraints (from the environment if omitted)
    """
    app = FastAPI(
        title="Dev Events API",
        description="API for publishing, browsing and booking developer events",
        version=__version__,
        docs_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/docs',
        redoc_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/redoc',
        lifespan=lifespan
    )

    app.state.database = database or Database()
    app.state.uploader = uploader or CloudinaryUploader()
    app.state.upload_config = upload_config or ImageUploadConfig()

    # Configure CORS
    app.add_middleware(CORSMiddleware, **CORS_CONFIG)

    register_exception_handlers(app)

    # Include health check router without prefix
    app.include_router(health.router)

    # Include routers with prefix
    app.include_router(events.router, prefix="/api")
    app.include_router(bookings.router, prefix="/api")

    return app

# Create the application instance
app = create_application()
