"""Error Handlers — global exception handlers for the Blogify API.

Invariants:
    - BlogifyError → structured JSON with error code, message, severity
    - RequestValidationError → field-level error details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (BlogifyError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py to keep the entry point small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from blogify.core.errors import BlogifyError, ErrorSeverity

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.WARNING,
    ErrorSeverity.CRITICAL: logging.ERROR,
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_blogify_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_blogify_error_handler(app: FastAPI) -> None:
    """Register Blogify domain/infrastructure error handler."""

    @app.exception_handler(BlogifyError)
    async def blogify_error_handler(request: Request, exc: BlogifyError):
        """Handle all Blogify domain/infrastructure errors."""
        logger.log(
            _LOG_LEVELS.get(exc.severity, logging.ERROR),
            f"BlogifyError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "user_id": exc.context.user_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: "
            f"{[_safe_detail(e) for e in exc.errors()]}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

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
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _safe_detail(error: dict) -> dict:
    """Validation detail without the submitted value (may be a password)."""
    return {
        "field": ".".join(str(loc) for loc in error["loc"]),
        "message": error["msg"],
        "type": error["type"],
    }


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [_safe_detail(e) for e in exc.errors()],
        },
    }
