"""Error Handlers — global exception handlers for the SimpleBlog API.

Invariants:
    - BlogError → its own status with {statusCode, message[, errors]}
    - RequestValidationError (path/query/JSON syntax) → 400 with field errors
    - Framework HTTP errors (unmatched route, wrong verb) keep their status
      but use the same {statusCode, message} body
    - Exception (catch-all) → 500 "Internal Server Error.", never leaks details;
      the full traceback goes to the log

Design Decisions:
    - Layered handlers: domain (BlogError), routing (Starlette HTTPException),
      validation (FastAPI), catch-all (Exception)
    - Patch faults arrive as PatchApplicationError (a BlogError) and therefore
      leave as 400, never through the catch-all
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from simpleblog.core.errors import BlogError, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_blog_error_handler(app)
    _register_http_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_blog_error_handler(app: FastAPI) -> None:
    """Register SimpleBlog domain/infrastructure error handler."""

    @app.exception_handler(BlogError)
    async def blog_error_handler(request: Request, exc: BlogError):
        """Handle all SimpleBlog domain/infrastructure errors."""
        level = (
            logging.ERROR if exc.severity == ErrorSeverity.CRITICAL
            else logging.INFO
        )
        logger.log(
            level,
            f"BlogError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "method": request.method,
                "status_code": exc.http_status,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register handler for routing-level HTTP errors."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        logger.info(
            f"HTTP {exc.status_code} on {request.url.path}: {exc.detail}",
            extra={
                "path": request.url.path,
                "method": request.method,
                "status_code": exc.status_code,
            },
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"statusCode": exc.status_code, "message": str(exc.detail)},
            headers=exc.headers,
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register FastAPI request validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle malformed path/query parameters and unreadable JSON."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
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
            f"Something went wrong on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "statusCode": status.HTTP_500_INTERNAL_SERVER_ERROR,
                "message": "Internal Server Error.",
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "statusCode": status.HTTP_400_BAD_REQUEST,
        "message": "Invalid request data",
        "errors": {
            ".".join(str(loc) for loc in e["loc"]): e["msg"]
            for e in exc.errors()
        },
    }
