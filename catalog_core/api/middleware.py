"""Catalog API middleware.

``RequestIdMiddleware`` gives every request a correlation id (taken from
the ``X-Request-ID`` header or generated) and logs its completion.
``InternalErrorMiddleware`` turns anything the handlers did not map into
a 500 with the standard error body.
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from catalog_core.api.errors import error_response
from catalog_core.domain.exceptions import InternalError

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Correlate a request across handlers, logs and the response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Bind the request id for the duration of the request.

        Args:
            request: Incoming request.
            call_next: Next middleware/handler.

        Returns:
            Response carrying the request id header.
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            started = time.perf_counter()
            response = await call_next(request)
            logger.info(
                "request.completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class InternalErrorMiddleware(BaseHTTPMiddleware):
    """Last-resort mapping of unexpected exceptions to ``INTERNAL_ERROR``."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Run the handler, rendering any escaped exception as a 500."""
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "request.unhandled_exception",
                method=request.method,
                path=request.url.path,
            )
            return error_response(
                InternalError(f"{type(e).__name__}: {e}"),
                request_id=getattr(request.state, "request_id", None),
                debug=request.app.state.settings.debug,
            )


def setup_middleware(app: FastAPI) -> None:
    """Install the catalog middleware.

    The last middleware added runs first, so request ids are bound
    before the error fallback can need one.
    """
    app.add_middleware(InternalErrorMiddleware)
    app.add_middleware(RequestIdMiddleware)
