"""Error Handlers — global exception handlers that answer in the response envelope.

Invariants:
    - ApiError -> envelope for its ErrorCode, logged at its severity
    - RequestValidationError (bad JSON, path or query value) -> VALIDATION_ERROR 400
    - Starlette HTTPException -> envelope with the formatter's status: unknown
      route NOT_FOUND 404, wrong method or other 4xx VALIDATION_ERROR 400
    - Exception (catch-all) -> DATABASE_ERROR 500, never leaks internal details
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from contacts_api.api.responses import render
from contacts_api.core.envelope import error_response, format_response
from contacts_api.core.errors import ApiError, ErrorCode, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_api_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_api_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        extra = {**exc.log_extra(), "path": request.url.path}
        if exc.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING):
            logger.info(f"ApiError: {exc.message}", extra=extra)
        else:
            logger.error(f"ApiError: {exc.message}: {exc.detail}", extra=extra, exc_info=exc)
        return render(error_response(exc))


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.info(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "error_code": ErrorCode.VALIDATION_ERROR.name},
        )
        return render(format_response(
            ErrorCode.VALIDATION_ERROR, _describe_validation_error(exc),
        ))


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            code = ErrorCode.NOT_FOUND
        elif exc.status_code < 500:
            code = ErrorCode.VALIDATION_ERROR
        else:
            code = ErrorCode.DATABASE_ERROR
        logger.info(
            f"HTTP {exc.status_code} on {request.method} {request.url.path}",
            extra={"path": request.url.path, "method": request.method, "error_code": code.name},
        )
        envelope, status_code = format_response(code, str(exc.detail or "Request failed"))
        return JSONResponse(
            status_code=status_code,
            content=envelope.to_response(),
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return render(format_response(
            ErrorCode.DATABASE_ERROR, "Internal server error",
        ))


def _describe_validation_error(exc: RequestValidationError) -> str:
    """First error as 'location: message', e.g. 'path.contact_id: ...'."""
    errors = exc.errors()
    if not errors:
        return "Invalid request data"
    first = errors[0]
    location = ".".join(str(loc) for loc in first.get("loc", ()))
    return f"{location}: {first.get('msg', 'invalid value')}" if location else first.get("msg", "Invalid request data")
