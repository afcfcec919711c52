"""Translation of catalog results into HTTP responses or errors."""

from typing import Any, TypeVar

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from catalog_core.api.schemas import ErrorResponse
from catalog_core.domain.exceptions import CatalogError, InternalError
from catalog_core.domain.results import CatalogResult

T = TypeVar("T")

STATUS_BY_ERROR_CODE = {
    "INVALID_INPUT": status.HTTP_400_BAD_REQUEST,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(error: CatalogError) -> int:
    """HTTP status of a catalog failure."""
    return STATUS_BY_ERROR_CODE.get(error.error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)


def error_details(error: CatalogError, debug: bool = False) -> dict[str, Any]:
    """Client-visible details of a failure.

    Raw storage diagnostics are only exposed in debug mode.
    """
    details = dict(error.details)
    if isinstance(error, InternalError) and debug:
        details["detail"] = error.detail
    return details


def to_http_exception(error: CatalogError, debug: bool = False) -> HTTPException:
    """Build the HTTPException for a catalog failure.

    Args:
        error: Failure carried by a result.
        debug: Whether to include internal diagnostics.

    Returns:
        HTTPException with a structured detail payload.
    """
    return HTTPException(
        status_code=status_for(error),
        detail={
            "error_code": error.error_code,
            "message": error.message,
            "details": error_details(error, debug),
        },
    )


def error_response(
    error: CatalogError,
    request_id: str | None,
    debug: bool = False,
) -> JSONResponse:
    """Render a catalog failure directly as an ``ErrorResponse`` body."""
    body = ErrorResponse(
        error_code=error.error_code,
        message=error.message,
        details=error_details(error, debug),
        request_id=request_id,
    )
    return JSONResponse(status_code=status_for(error), content=body.model_dump())


def unwrap(result: CatalogResult[T], request: Request) -> T:
    """Value of a successful result, or raise the matching HTTP error.

    Raises:
        HTTPException: If the result carries a failure.
    """
    if result.error is not None:
        raise to_http_exception(result.error, debug=request.app.state.settings.debug)
    return result.value  # type: ignore[return-value]
