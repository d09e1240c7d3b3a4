"""Global exception handlers for consistent error responses.

This module provides FastAPI exception handlers that intercept all errors
(domain and unexpected) and return the flat ``{error, message}`` envelope
with the status code that belongs to the error kind.

Design:
- AppError subclasses → their own status (400, 429, 500)
- Unexpected Exception → api_error 500 (safety net)
- Diagnostic details are logged with the request_id, never returned
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.errors import MESSAGE_GENERIC_FAILURE, AppError, ErrorKind
from app.core.logging import get_request_id

logger = logging.getLogger(__name__)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle domain application errors with the uniform JSON envelope.

    Status codes by kind:
    - validation_error → 400
    - rate_limit → 429
    - config_error → 500
    - api_error → 500

    Args:
        request: FastAPI request object.
        exc: AppError instance (or subclass).

    Returns:
        JSONResponse with ``{"error": kind, "message": message}``.
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "app_error_handled",
        extra={
            "error_kind": exc.kind.value,
            "error_type": type(exc).__name__,
            "status_code": exc.status_code,
            "details": exc.details or {},
            "request_path": request.url.path,
            "request_id": get_request_id(),
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response(),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Fallback handler for unexpected errors (safety net).

    Logs detailed information for debugging while returning the generic
    api_error body. No stack traces or exception text reach the client.

    Args:
        request: FastAPI request object.
        exc: Exception instance (unexpected).

    Returns:
        JSONResponse with generic error.
    """
    logger.error(
        "unhandled_exception",
        extra={
            "error_type": type(exc).__name__,
            "error_msg": str(exc),
            "request_path": request.url.path,
            "request_method": request.method,
            "request_id": get_request_id(),
        },
    )

    return JSONResponse(
        status_code=500,
        content={
            "error": ErrorKind.API_ERROR.value,
            "message": MESSAGE_GENERIC_FAILURE,
        },
    )


def setup_exception_handlers(app) -> None:
    """Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance.

    Example:
        >>> from fastapi import FastAPI
        >>> from app.core.exception_handlers import setup_exception_handlers
        >>> app = FastAPI()
        >>> setup_exception_handlers(app)
    """
    app.exception_handler(AppError)(app_error_handler)
    app.exception_handler(Exception)(general_exception_handler)
