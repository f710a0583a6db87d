"""Error Handlers — map exceptions to the JSON error envelope.

Invariants:
    - Every error body has the shape {"error": {code, message, category, severity, ...}}
    - HabitTrackingError answers with its own http_status and to_response()
    - Request validation failures answer 400 with per-field details
    - Unhandled exceptions answer 500 and never leak internals

Design Decisions:
    - Handlers are module-level coroutines registered with add_exception_handler,
      so routes can reuse validation_error_response for hand-parsed bodies
    - 4xx domain errors logged at WARNING; only 5xx at ERROR
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from habit_tracking.core.errors import (
    ErrorCategory, ErrorSeverity, HabitTrackingError,
)

logger = logging.getLogger(__name__)


def validation_error_response(
    message: str, details: list[dict] | None = None,
) -> JSONResponse:
    """400 envelope shared by schema failures and hand-parsed request bodies."""
    error = {
        "code": "VALIDATION_ERROR",
        "message": message,
        "category": ErrorCategory.VALIDATION.value,
        "severity": ErrorSeverity.ERROR.value,
    }
    if details is not None:
        error["details"] = details
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content={"error": error},
    )


async def handle_habit_error(request: Request, exc: HabitTrackingError):
    level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
    logger.log(
        level,
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "habit_id": exc.context.habit_id,
            "day_key": exc.context.day_key,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation(request: Request, exc: RequestValidationError):
    details = [
        {
            "field": ".".join(str(part) for part in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    logger.warning(
        f"Rejected request to {request.url.path}: {len(details)} invalid field(s)",
        extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
    )
    return validation_error_response("Invalid request data", details)


async def handle_unexpected(request: Request, exc: Exception):
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": ErrorCategory.INTERNAL.value,
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HabitTrackingError, handle_habit_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
