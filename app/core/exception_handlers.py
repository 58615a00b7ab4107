"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to JSON responses with an "error" field (SRP, OCP for adding
new handlers).
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import ProviderException, TuneTribeException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "CODE_ALREADY_USED": 400,
    "MISSING_REFRESH_TOKEN": 400,
    "INVALID_OTP": 400,
    "RESOURCE_NOT_FOUND": 404,
    "SOURCE_QUERY_FAILED": 500,
    "LYRICS_FETCH_FAILED": 500,
    "CACHE_UNAVAILABLE": 500,
    "PROVIDER_UNAVAILABLE": 502,
    "EMAIL_DELIVERY_FAILED": 502,
    "SERVICE_UNAVAILABLE": 503,
}


def _tunetribe_exception_handler(
    request: Request, exc: TuneTribeException
) -> JSONResponse:
    """Return JSON from TuneTribeException.to_dict() with appropriate status code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status >= 500:
        logger.error(
            "%s %s failed: %s %s",
            request.method,
            request.url.path,
            exc.error_code,
            exc.details,
        )
    return JSONResponse(
        status_code=status,
        content=exc.to_dict(),
    )


def _provider_exception_handler(
    request: Request, exc: ProviderException
) -> JSONResponse:
    """Pass the OAuth provider's status and body through unchanged."""
    return JSONResponse(status_code=exc.status_code, content=exc.payload)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: ProviderException,
    TuneTribeException (and subclasses), RequestValidationError,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(ProviderException, _provider_exception_handler)
    app.add_exception_handler(TuneTribeException, _tunetribe_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
