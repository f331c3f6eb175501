"""Error Handlers — global exception handlers translating errors to the JSON envelope.

Invariants:
    - DevicesApiError → its http_status + {"message", "details"}, logged at its severity
    - RequestValidationError → 400 "Validation failed" with "<field>: <msg>; ..." details
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (DevicesApiError), validation (Pydantic), catch-all (Exception)
    - Kept out of main.py so tests can build a bare app with the same handlers
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from devices_api.core.errors import (
    CATEGORY_MESSAGES, DevicesApiError, ErrorCategory, ErrorSeverity,
)

logger = logging.getLogger(__name__)

# Location prefixes FastAPI puts in front of the field name
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(DevicesApiError)
    async def devices_api_error_handler(request: Request, exc: DevicesApiError):
        """Handle all domain/infrastructure errors."""
        logger.log(
            _LOG_LEVELS[exc.severity],
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "device_id": exc.context.device_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error_response(exc.errors()),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message": CATEGORY_MESSAGES[ErrorCategory.INTERNAL],
                "details": "An unexpected error occurred",
            },
        )


def build_validation_error_response(errors) -> dict:
    """Flatten Pydantic errors into the envelope: "name: must not be blank; brand: ..."."""
    return {
        "message": CATEGORY_MESSAGES[ErrorCategory.VALIDATION],
        "details": "; ".join(
            f"{_field_name(e['loc'])}: {e['msg']}" for e in errors
        ),
    }


def _field_name(loc) -> str:
    parts = [str(p) for p in loc]
    if len(parts) > 1 and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts)
