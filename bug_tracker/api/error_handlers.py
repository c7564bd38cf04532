"""Error Handlers — global exception handlers for the bug-tracker API.

Invariants:
    - BugTrackerError → {success: false, message, code} with the error's http_status
    - RequestValidationError (body not a JSON object, bad query types) → 400
      in the same shape as a ValidationFailedError
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (BugTrackerError), validation (Pydantic), catch-all
    - Extracted from main.py: keeps the app module to wiring only
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError

from bug_tracker.core.errors import BugTrackerError, ErrorSeverity
from bug_tracker.core.validate_record import echo_value

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register bug-tracker domain/infrastructure error handler."""

    @app.exception_handler(BugTrackerError)
    async def bug_tracker_error_handler(request: Request, exc: BugTrackerError):
        level = (
            logging.ERROR if exc.severity == ErrorSeverity.CRITICAL
            else logging.WARNING
        )
        logger.log(
            level,
            f"BugTrackerError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "bug_id": exc.context.resource_id,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic request validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=jsonable_encoder(_build_validation_error_response(exc)),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build a ValidationFailedError-shaped response from Pydantic errors."""
    return {
        "success": False,
        "message": "Validation failed",
        "code": "VALIDATION_FAILED",
        "errors": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "value": echo_value(e.get("input")),
            }
            for e in exc.errors()
        ],
    }
