"""HTTP error mapping.

Every error body has the shape {"error", "message", "details"?, "request_id"?}.
Domain errors carry their own error_code; status is chosen by exception class.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from showplan.core.config import get_settings
from showplan.domain.exceptions import (
    DuplicateNaturalKeyException,
    PersistenceException,
    ReferenceNotFoundException,
    ResourceNotFoundException,
    ScheduleStateException,
    SchemaValidationException,
    ShowplanException,
    SqlNotConfiguredException,
    ValidationException,
    VersionConflictException,
)
from showplan.shared.telemetry import get_trace_id

logger = logging.getLogger(__name__)

# Most specific class first; anything else derived from ShowplanException is a 400.
STATUS_BY_EXCEPTION: tuple[tuple[type[ShowplanException], int], ...] = (
    (SchemaValidationException, 400),
    (DuplicateNaturalKeyException, 400),
    (ValidationException, 400),
    (ReferenceNotFoundException, 404),
    (ResourceNotFoundException, 404),
    (VersionConflictException, 409),
    (ScheduleStateException, 409),
    (PersistenceException, 503),
    (SqlNotConfiguredException, 503),
)


def status_for(exc: ShowplanException) -> int:
    for exc_type, status in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status
    return 400


def _error_body(request: Request, error: str, message: Any, details: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": error, "message": message}
    if details:
        body["details"] = details
    request_id = request.scope.get("state", {}).get("request_id")
    if request_id:
        body["request_id"] = request_id
    return body


async def handle_showplan_error(request: Request, exc: ShowplanException) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message)
    elif status == 409:
        logger.info("%s on %s: %s", exc.error_code, request.url.path, exc.message)
    payload = exc.to_dict()
    return JSONResponse(
        status_code=status,
        content=_error_body(request, payload["error"], payload["message"], payload.get("details")),
    )


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    """422 with field locations; pydantic ctx objects are dropped so the body stays JSON-safe."""
    fields = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content=_error_body(request, "VALIDATION_ERROR", "Request body or parameters are invalid", fields),
    )


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, "HTTP_ERROR", exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled %s on %s %s (trace %s)",
        type(exc).__name__,
        request.method,
        request.url.path,
        get_trace_id() or "-",
    )
    message = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(status_code=500, content=_error_body(request, "INTERNAL_ERROR", message))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShowplanException, handle_showplan_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected)
