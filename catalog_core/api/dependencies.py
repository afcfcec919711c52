"""FastAPI dependencies."""

from fastapi import Request

from catalog_core.catalog.service import CatalogService, get_catalog_service
from catalog_core.infrastructure.database import Database


def get_database(request: Request) -> Database:
    """Storage handle opened by the application lifespan."""
    return request.app.state.database


def get_service(request: Request) -> CatalogService:
    """Get catalog service with request ID."""
    request_id = getattr(request.state, "request_id", None)
    return get_catalog_service(get_database(request), request_id=request_id)
