"""Error Handlers — render every failure as the {"error": {...}} envelope.

Invariants:
    - InvoicingError → its own http_status and to_response() body
    - RequestValidationError (bad JSON, wrong types, malformed ids) → 400, never 422
    - Anything else → 500 INTERNAL_ERROR with a fixed message; details only in the log

Design Decisions:
    - Handlers are plain module functions registered in one place, so tests and main.py
      share the same table
    - Pydantic locations are flattened to dotted paths without the "body"/"path" prefix,
      matching the field keys used by the rule sets
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from invoicing.core.errors import ErrorCategory, ErrorSeverity, InvoicingError

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = ("body", "path", "query")


async def handle_invoicing_error(request: Request, exc: InvoicingError):
    log = logger.warning if exc.http_status < 500 else logger.error
    log(
        f"{exc.code}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError,
):
    details = [
        {"field": _field_path(e["loc"]), "message": e["msg"], "type": e["type"]}
        for e in exc.errors()
    ]
    logger.warning(
        f"Malformed request: {len(details)} field error(s)",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return _envelope(
        status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", "Invalid request data",
        ErrorCategory.VALIDATION, ErrorSeverity.ERROR, details,
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error(
        f"Unhandled {type(exc).__name__}",
        extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        exc_info=exc,
    )
    return _envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR",
        "An unexpected error occurred",
        ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InvoicingError, handle_invoicing_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


def _field_path(loc: tuple) -> str:
    parts = list(loc)
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(str(p) for p in parts)


def _envelope(
    status_code: int,
    code: str,
    message: str,
    category: ErrorCategory,
    severity: ErrorSeverity,
    details: list[dict] | None = None,
) -> JSONResponse:
    body = {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
    }
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content={"error": body})
