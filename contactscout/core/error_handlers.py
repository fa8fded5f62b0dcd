"""Global exception handlers for standardized error responses."""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from contactscout.core.exceptions import BaseAPIException, UpstreamException
from contactscout.core.security import cors_headers
from contactscout.schemas.response import ErrorResponse

logger = logging.getLogger(__name__)


async def base_api_exception_handler(
    request: Request, exc: BaseAPIException
) -> JSONResponse:
    """Handle custom API exceptions."""
    extra = {
        "error_code": exc.error_code,
        "status_code": exc.status_code,
        "path": request.url.path,
    }
    if isinstance(exc, UpstreamException):
        # The cause is logged here and never echoed back to the caller
        extra["attempts"] = exc.attempts
        extra["cause"] = repr(exc.last_error)
        logger.error(f"Upstream failure: {exc.last_error!r}", extra=extra)
    else:
        logger.warning(f"API Exception: {exc.error_code} - {exc.message}", extra=extra)

    error_response = ErrorResponse(
        error=exc.message,
        error_code=exc.error_code,
        details=exc.details or None,
    )

    return JSONResponse(
        status_code=exc.status_code, content=error_response.model_dump()
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle malformed query parameters."""
    logger.warning(
        f"Validation Error: {exc.errors()}",
        extra={"path": request.url.path},
    )

    fields = [".".join(str(loc) for loc in error["loc"]) for error in exc.errors()]
    error_response = ErrorResponse(
        error="Invalid request parameters",
        error_code="VALIDATION_ERROR",
        details={"fields": fields},
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_response.model_dump(),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTP exceptions."""
    logger.warning(
        f"HTTP Exception: {exc.status_code} - {exc.detail}",
        extra={"status_code": exc.status_code, "path": request.url.path},
    )

    error_response = ErrorResponse(error=str(exc.detail), error_code="HTTP_ERROR")

    return JSONResponse(
        status_code=exc.status_code, content=error_response.model_dump()
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        f"Unexpected error: {str(exc)}",
        exc_info=True,
        extra={"path": request.url.path, "exception_type": type(exc).__name__},
    )

    error_response = ErrorResponse(
        error="An unexpected error occurred",
        error_code="INTERNAL_SERVER_ERROR",
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(),
        # Served outside the CORS middleware, so the headers are added here
        headers=cors_headers(),
    )
