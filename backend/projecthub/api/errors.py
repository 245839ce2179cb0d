"""Exception handlers mapping service errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from projecthub.core.errors import ServiceError, UnauthorizedError, ValidationError
from projecthub.core.metrics import observe_service_error
from projecthub.core.structured_logging import log_json
from projecthub.schemas.errors import ErrorResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _error_response(
    status_code: int,
    error: str,
    message: str,
    details: dict | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


def _field_path(loc: tuple) -> str:
    # ("body", "githublink") -> "githublink"; ("query", "projectId") -> "projectId"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(parts) or "request"


def _clean_message(message: str) -> str:
    prefix = "Value error, "
    return message[len(prefix):] if message.startswith(prefix) else message


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render a ServiceError using its own status code and identifier."""
    observe_service_error(exc.error)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return _error_response(exc.status_code, exc.error, exc.message, exc.details, headers)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed or missing request fields as 400."""
    details: dict[str, str] = {}
    for err in exc.errors():
        details.setdefault(_field_path(tuple(err.get("loc", ()))), _clean_message(err.get("msg", "")))

    message = next(iter(details.values()), ValidationError.default_message)
    observe_service_error(ValidationError.error)
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        ValidationError.error,
        message,
        details,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the full error server side and answer with a generic 500."""
    log_json(
        logger,
        logging.ERROR,
        "unhandled_error",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        exception=exc.__class__.__name__,
    )
    observe_service_error("internal_error")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        INTERNAL_ERROR_MESSAGE,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
