"""Error Handlers — every failure leaves the API in one JSON envelope.

Invariants:
    - Body shape is always {"error": {code, message, category, severity, ...}}
    - MeedleError → its own http_status and to_response()
    - RequestValidationError → 400 with one detail per offending field
    - Unmatched routes / wrong methods → same envelope, status preserved
    - Anything else → 500 without internal details

Design Decisions:
    - 4xx domain errors logged at warning (blocked logins are routine), 5xx at error
    - Handlers registered from main.py through register_error_handlers only
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from meedle.core.errors import ErrorCategory, ErrorSeverity, MeedleError

logger = logging.getLogger(__name__)


def _envelope(
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    **extra,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category.value,
            "severity": severity.value,
            **extra,
        },
    }


async def _meedle_error(request: Request, exc: MeedleError) -> JSONResponse:
    level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
    logger.log(
        level, f"{exc.code}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _validation_error(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Rejected request body ({len(details)} field errors)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR,
            details=details,
        ),
    )


async def _http_error(
    request: Request, exc: StarletteHTTPException,
) -> JSONResponse:
    category = (
        ErrorCategory.RESOURCE_NOT_FOUND
        if exc.status_code == status.HTTP_404_NOT_FOUND
        else ErrorCategory.VALIDATION
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_envelope(
            f"HTTP_{exc.status_code}", str(exc.detail),
            category, ErrorSeverity.WARNING,
        ),
        headers=getattr(exc, "headers", None),
    )


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach the domain, validation, HTTP and catch-all handlers to the app."""
    app.add_exception_handler(MeedleError, _meedle_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unhandled_error)
