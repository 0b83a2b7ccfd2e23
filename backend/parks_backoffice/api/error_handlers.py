"""Error Handlers — global exception handlers for the back-office API.

Invariants:
    - ParksError → structured JSON with error code, message, severity
    - SQLAlchemyError → same envelope via translate_db_error (unique violation → 409,
      anything else → 503), even when it escapes the request session
    - RequestValidationError → 400 with field-level error details
    - Exception (catch-all) → generic 500, never leaks internal details
    - Every handler logs the request path and method

Design Decisions:
    - Four-layer handler: domain (ParksError), database (SQLAlchemy), validation
      (Pydantic), catch-all (Exception)
    - Extracted from main.py so the app module only wires things together
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from parks_backoffice.core.errors import ParksError, ErrorSeverity
from parks_backoffice.infrastructure.database import translate_db_error

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_parks_error_handler(app)
    _register_database_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _request_extra(request: Request, **fields) -> dict:
    return {"path": request.url.path, "method": request.method, **fields}


def _parks_error_response(request: Request, exc: ParksError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra=_request_extra(request, error_code=exc.code),
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def _register_parks_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ParksError)
    async def parks_error_handler(request: Request, exc: ParksError):
        return _parks_error_response(request, exc)


def _register_database_error_handler(app: FastAPI) -> None:

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        """A write that reached the database and failed there (constraint races)."""
        return _parks_error_response(request, translate_db_error(exc))


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error: {exc.errors()}",
            extra=_request_extra(request, error_code="VALIDATION_ERROR"),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled {type(exc).__name__}: {exc}",
            exc_info=True,
            extra=_request_extra(request, error_code="INTERNAL_ERROR"),
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


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
