"""Catalog API main application module.

This module builds the FastAPI application and configures middleware,
routers, exception handlers and the database lifecycle.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog_core.api.categories import router as categories_router
from catalog_core.api.health import router as health_router
from catalog_core.api.middleware import setup_middleware
from catalog_core.api.products import router as products_router
from catalog_core.api.variants import router as variants_router
from catalog_core.catalog.seed import seed_catalog
from catalog_core.infrastructure.config import Settings, settings as default_settings
from catalog_core.infrastructure.database import Database
from catalog_core.infrastructure.logging import configure_logging

logger = structlog.get_logger()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the catalog API application.

    Args:
        settings: Settings to use; defaults to the environment settings.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or default_settings
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Open the database handle on startup and dispose it on shutdown.

        Args:
            app: The FastAPI application instance.

        Yields:
            None after startup, cleanup happens after yield.
        """
        logger.info("Starting Catalog API", version=settings.api_version, debug=settings.debug)

        database = Database(settings.database_url, echo=settings.debug)
        app.state.database = database

        if settings.create_tables:
            await database.create_all()
        if settings.seed_sample_data:
            await seed_catalog(database)

        try:
            yield
        finally:
            logger.info("Shutting down Catalog API")
            await database.dispose()

    app = FastAPI(
        title="Catalog API",
        description="Product catalog with SKU variants, categories and soft deletion",
        version=settings.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    # CORS middleware (must be added before custom middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Setup custom middleware (request ID, error handling)
    setup_middleware(app)

    # Include routers
    app.include_router(health_router, tags=["Health"])
    app.include_router(products_router)
    app.include_router(variants_router)
    app.include_router(categories_router)

    register_exception_handlers(app)
    return app


# ============================================================================
# Custom Exception Handlers
# ============================================================================


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error in the standard error format."""

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Handle HTTP exceptions with consistent format."""
        request_id = getattr(request.state, "request_id", None)

        detail = exc.detail
        if isinstance(detail, dict):
            error_code = detail.get("error_code", "ERROR")
            message = detail.get("message", str(detail))
            details = detail.get("details", {})
        else:
            error_code = "ERROR"
            message = str(detail)
            details = {}

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error_code": error_code,
                "message": message,
                "details": details,
                "request_id": request_id,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report malformed path/query/body parameters as invalid input."""
        request_id = getattr(request.state, "request_id", None)
        errors = exc.errors()
        first = errors[0] if errors else {}

        return JSONResponse(
            status_code=400,
            content={
                "error_code": "INVALID_INPUT",
                "message": first.get("msg", "Invalid request"),
                "details": {"field": ".".join(str(part) for part in first.get("loc", ()))},
                "request_id": request_id,
            },
        )


app = create_app()
