"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from officeauth.core.config import get_settings
from officeauth.domain.exceptions import OfficeAuthException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status
ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "INVALID_ROLE": 400,
    "UNKNOWN_PERMISSION": 400,
    "INVALID_TOKEN": 400,
    "ROLE_NOT_CONFIGURABLE": 409,
    "TOKEN_NOT_FOUND": 404,
    "TOKEN_EXPIRED": 410,
    "TOKEN_ALREADY_USED": 409,
    "RESOURCE_NOT_FOUND": 404,
    "OFFICE_NOT_FOUND": 404,
    "OFFICE_SLUG_TAKEN": 409,
    "ACCOUNT_EXISTS": 409,
    "RESEND_LIMIT_EXCEEDED": 429,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "SERVICE_UNAVAILABLE": 503,
}


def _officeauth_exception_handler(
    request: Request, exc: OfficeAuthException
) -> JSONResponse:
    """Return JSON from OfficeAuthException.to_dict() with the mapped status code."""
    status = ERROR_CODE_STATUS.get(exc.error_code, 400)
    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    return JSONResponse(status_code=status, content=exc.to_dict(), headers=headers)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_errors(exc),
        },
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Pydantic errors without the ctx objects that are not JSON serializable."""
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]


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

    Handlers: OfficeAuthException (and subclasses), RequestValidationError,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(OfficeAuthException, _officeauth_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
